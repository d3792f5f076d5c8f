"""
errors.py - Domain-specific exceptions for osm_services.

All exceptions inherit from OSMServicesError for unified handling.
Each exception type represents a distinct failure mode.
"""

from typing import Any, Dict, Optional


class OSMServicesError(Exception):
    """Base exception for all osm_services errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class UnknownConfigKeyError(OSMServicesError, KeyError):
    """Raised when a configuration key is not one of the recognized keys."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"Unknown config parameter '{key}'", context={"key": key})
        self.key = key


class TransportError(OSMServicesError):
    """
    Raised by a transport when a request cannot produce a usable response.

    This covers network failures, unknown adapters and non-success
    HTTP statuses.
    """

    def __init__(
        self, message: str, url: Optional[str] = None, status_code: Optional[int] = None
    ) -> None:
        context = {}
        if url is not None:
            context["url"] = url
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(message, context=context)
        self.url = url
        self.status_code = status_code


class ServerUnreachableError(OSMServicesError):
    """
    Raised when the capabilities of a server cannot be fetched.

    The transport failure, if any, is available as ``__cause__``.
    """

    def __init__(self, server: str, reason: Optional[str] = None) -> None:
        context = {"server": server}
        if reason is not None:
            context["reason"] = reason
        super().__init__("Could not get a valid response from server", context=context)
        self.server = server
        self.reason = reason


class CapabilityParseError(OSMServicesError):
    """Raised when a capabilities document is not well-formed."""

    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        context = {"reason": reason} if reason is not None else None
        super().__init__(message, context=context)
        self.reason = reason


class UnsupportedApiVersionError(OSMServicesError):
    """
    Raised when an API version cannot be used.

    Either no behaviour is known for the version, or the server's
    advertised version range excludes it.
    """

    def __init__(
        self,
        api_version: Any,
        min_version: Optional[float] = None,
        max_version: Optional[float] = None,
    ) -> None:
        context = {}
        if min_version is not None:
            context["min_version"] = min_version
        if max_version is not None:
            context["max_version"] = max_version
        super().__init__(
            f"Specified API Version {api_version} not supported.", context=context
        )
        self.api_version = api_version
        self.min_version = min_version
        self.max_version = max_version


class PasswordFileUnreadableError(OSMServicesError):
    """Raised when a password file cannot be read."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        context = {"path": path}
        if reason is not None:
            context["reason"] = reason
        super().__init__("Could not read password file", context=context)
        self.path = path
        self.reason = reason
