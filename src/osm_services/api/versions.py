"""
API-version specific behaviour.

Each supported OSM API version has one variant class. Variants are chosen
from an explicit table, never by building class names at runtime.
"""

from typing import Dict, Type

from osm_services.errors import UnsupportedApiVersionError
from osm_services.utils.url import construct_api_url


class ApiVersion:
    """Behaviour shared by every API version variant."""

    version: str = ""

    @property
    def base_path(self) -> str:
        return f"/api/{self.version}"

    def endpoint_url(self, server: str, resource: str = "") -> str:
        """
        Build the URL of a versioned API resource.

        >>> ApiV06().endpoint_url("https://api.openstreetmap.org/", "node/1")
        'https://api.openstreetmap.org/api/0.6/node/1'
        """
        path = self.base_path
        if resource:
            path = f"{path}/{resource.lstrip('/')}"
        return construct_api_url(server, path)

    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(self.version)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(version={self.version!r})"


class ApiV06(ApiVersion):
    """OSM API 0.6."""

    version = "0.6"


API_VERSIONS: Dict[str, Type[ApiVersion]] = {
    ApiV06.version: ApiV06,
}


def select_api(version: str) -> ApiVersion:
    """
    Return a new variant for ``version``.

    Raises:
        UnsupportedApiVersionError: If no variant handles the version
    """
    try:
        variant = API_VERSIONS[str(version)]
    except KeyError:
        raise UnsupportedApiVersionError(version) from None
    return variant()
