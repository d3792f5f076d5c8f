"""
Configuration store for the OpenStreetMap API client.

Holds the connection settings, resolves credentials from password files
and negotiates capabilities with the configured server.
"""

from typing import Any, Dict, Mapping, Optional, Union

from osm_services.api.capabilities import Capabilities, parse_capabilities
from osm_services.api.versions import ApiVersion, select_api
from osm_services.auth.password_file import read_password_file, resolve_credentials
from osm_services.constants import CAPABILITIES_ENDPOINT, CONFIG_KEYS, DEFAULT_SETTINGS
from osm_services.errors import (
    CapabilityParseError,
    ServerUnreachableError,
    UnknownConfigKeyError,
    UnsupportedApiVersionError,
)
from osm_services.logging import (
    get_logger,
    log_authentication_event,
    log_transaction,
    setup_logging,
)
from osm_services.transport.base import Transport
from osm_services.transport.http_transport import HttpTransport
from osm_services.utils.url import construct_api_url


class ConfigStore:
    """
    Settings for talking to an OSM API server.

    The recognized keys are fixed:

    - ``adapter``      - name of the HTTP adapter, or an httpx transport
    - ``api_version``  - version of the API to communicate via
    - ``password``     - password (optional)
    - ``passwordfile`` - file to read user/password from (optional)
    - ``server``       - server to connect to
    - ``User-Agent``   - User-Agent header sent with requests
    - ``user``         - user (optional)
    - ``verbose``      - log response bodies (optional)

    Setting ``server`` fetches ``<server>/api/capabilities`` and only commits
    the new server once the advertised version range includes the
    configured ``api_version``::

        config = ConfigStore()
        config.set_value({"user": "fred@example.com", "password": "Simples"})
        config.set_value("server", "https://master.apis.dev.openstreetmap.org")
        config.get_max_nodes()

    Not safe for concurrent mutation; callers serialize access.
    """

    def __init__(
        self,
        settings: Optional[Mapping[str, Any]] = None,
        transport: Optional[Transport] = None,
    ):
        setup_logging()
        self.logger = get_logger("osm_services.config")
        self._settings: Dict[str, Any] = dict(DEFAULT_SETTINGS)
        self._api: ApiVersion = select_api(self._settings["api_version"])
        self._capabilities: Optional[Capabilities] = None
        self.transport: Optional[Transport] = None
        if transport is not None:
            self.set_transport(transport)
        if settings:
            self.set_value(settings)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(server={self.server!r}, "
            f"api_version={self.api_version!r})"
        )

    # -- settings ---------------------------------------------------------

    @staticmethod
    def _check_key(name: Any) -> None:
        if not isinstance(name, str) or name not in CONFIG_KEYS:
            raise UnknownConfigKeyError(name)

    def get_value(self, name: Optional[str] = None) -> Any:
        """
        Get the value of a configuration setting.

        Args:
            name: Setting name. If omitted, a copy of all settings is returned.

        Raises:
            UnknownConfigKeyError: If ``name`` is not a recognized key
        """
        if name is None:
            return self.as_dict()
        self._check_key(name)
        return self._settings[name]

    def set_value(
        self, config: Union[str, Mapping[str, Any]], value: Any = None
    ) -> "ConfigStore":
        """
        Set one or more configuration settings.

        ::

            config.set_value("user", "fred@example.com")
            config.set_value({"user": "fred@example.com", "password": "Simples"})
            config.set_value("user", "f@example.com").set_value("password", "Sis")

        In the mapping form every key is checked before anything is applied,
        ``adapter`` is applied first so that a ``server`` in the same batch
        is fetched through it, and the remaining keys are applied in order.
        The first failing key aborts the batch; keys applied before it stay.

        Raises:
            UnknownConfigKeyError: If a key is not recognized
            ServerUnreachableError, CapabilityParseError,
            UnsupportedApiVersionError: From setting ``server``
            UnsupportedApiVersionError: From an unknown ``api_version``
            PasswordFileUnreadableError: From setting ``passwordfile``
        """
        if isinstance(config, Mapping):
            for key in config:
                self._check_key(key)
            if "adapter" in config:
                self._apply("adapter", config["adapter"])
            for key, item in config.items():
                if key != "adapter":
                    self._apply(key, item)
        else:
            self._check_key(config)
            self._apply(config, value)
        return self

    def _apply(self, key: str, value: Any) -> None:
        if key == "server":
            self.set_server(value)
        elif key == "passwordfile":
            self.set_password_file(value)
        elif key == "api_version":
            self._set_api_version(value)
        else:
            self._settings[key] = value

    def _set_api_version(self, version: str) -> None:
        api = select_api(version)
        self._settings["api_version"] = version
        self._api = api
        self.logger.debug(f"Using API version {version} ({type(api).__name__})")

    def as_dict(self) -> Dict[str, Any]:
        """Return a copy of all configuration settings."""
        return dict(self._settings)

    @property
    def api_version(self) -> str:
        return self._settings["api_version"]

    @property
    def server(self) -> str:
        return self._settings["server"]

    def get_api(self) -> ApiVersion:
        """The behaviour object for the configured API version."""
        return self._api

    def get_api_url(self, resource: str = "") -> str:
        """URL of a resource under the configured server and API version."""
        return self._api.endpoint_url(self.server, resource)

    # -- transport --------------------------------------------------------

    def set_transport(self, transport: Transport) -> "ConfigStore":
        if not isinstance(transport, Transport):
            raise TypeError(f"Expected a Transport, got {type(transport).__name__}")
        self.transport = transport
        return self

    def get_transport(self) -> Transport:
        """Return the transport, creating the default HTTP transport on first use."""
        if self.transport is None:
            self.transport = HttpTransport(self)
        return self.transport

    # -- server & capabilities -------------------------------------------

    def set_server(self, server: str) -> "ConfigStore":
        """
        Connect to the specified server.

        The server and its capabilities are committed together, and only
        after the capabilities document has been validated.

        Args:
            server: Base server address, e.g. https://api.openstreetmap.org

        Raises:
            ServerUnreachableError: If the capabilities cannot be fetched
            CapabilityParseError: If the capabilities document is malformed
            UnsupportedApiVersionError: If the server does not support the
                configured API version
        """
        url = construct_api_url(server, CAPABILITIES_ENDPOINT)
        self.logger.debug(f"Fetching capabilities from {url}")
        try:
            response = self.get_transport().get_response(url)
        except Exception as e:
            self.logger.error(f"Could not fetch capabilities from {server}: {e}")
            raise ServerUnreachableError(server, reason=str(e)) from e

        if not response.ok:
            self.logger.error(
                f"Capabilities request to {server} returned HTTP {response.status_code}"
            )
            raise ServerUnreachableError(server, reason=f"HTTP {response.status_code}")

        capabilities = self._check_capabilities(response.body)

        self._settings["server"] = server
        self._capabilities = capabilities
        log_transaction(
            "capabilities negotiated",
            {"server": server, "api_version": self.api_version, **capabilities.to_dict()},
        )
        self.logger.info(f"Connected to {server} (API {self.api_version})")
        return self

    def _check_capabilities(self, body: str) -> Capabilities:
        """Parse a capabilities document and check the API version against it."""
        try:
            capabilities = parse_capabilities(body)
        except CapabilityParseError as e:
            self.logger.error(f"Problem checking server capabilities: {e}")
            raise

        if not capabilities.supports(self.api_version):
            self.logger.error(
                f"API version {self.api_version} outside server range "
                f"{capabilities.min_version}-{capabilities.max_version}"
            )
            raise UnsupportedApiVersionError(
                self.api_version, capabilities.min_version, capabilities.max_version
            )
        return capabilities

    @property
    def capabilities(self) -> Optional[Capabilities]:
        """Capabilities of the last successful negotiation, or None."""
        return self._capabilities

    def _capability(self, field: str) -> Any:
        if self._capabilities is None:
            return None
        return getattr(self._capabilities, field)

    def get_min_version(self) -> Optional[float]:
        """Minimum API version supported by the connected server."""
        return self._capability("min_version")

    def get_max_version(self) -> Optional[float]:
        """Maximum API version supported by the connected server."""
        return self._capability("max_version")

    def get_timeout(self) -> Optional[int]:
        """Seconds before the server considers a connection timed out."""
        return self._capability("timeout")

    def get_max_elements(self) -> Optional[int]:
        """Number of elements allowed per changeset."""
        return self._capability("max_changeset_elements")

    def get_max_nodes(self) -> Optional[int]:
        """Maximum number of nodes per way; longer ways must be split."""
        return self._capability("max_way_nodes")

    def get_tracepoints_per_page(self) -> Optional[int]:
        return self._capability("tracepoints_per_page")

    def get_max_area(self) -> Optional[float]:
        """Max size of area that can be downloaded in one request."""
        return self._capability("max_area")

    # -- credentials ------------------------------------------------------

    def set_password_file(self, path: Optional[str]) -> "ConfigStore":
        """
        Set and parse a password file, taking user and password from it.

        An empty path clears the setting without reading anything; the
        current credentials are kept. See ``osm_services.auth.password_file``
        for how credentials are picked from the file.

        Raises:
            PasswordFileUnreadableError: If the file cannot be read
        """
        if not path:
            self._settings["passwordfile"] = path
            return self

        lines = read_password_file(path)
        credentials = resolve_credentials(lines, self._settings["user"])

        if credentials is not None:
            user, password = credentials
            self._settings["user"] = user
            self._settings["password"] = password
            log_authentication_event(
                "password-file", True, {"user": user, "passwordfile": str(path)}
            )
        else:
            log_authentication_event(
                "password-file",
                False,
                {"user": self._settings["user"], "passwordfile": str(path)},
            )

        self._settings["passwordfile"] = path
        return self
