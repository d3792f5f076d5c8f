"""
Configuration and capability negotiation for OpenStreetMap API clients.
"""

from osm_services.errors import (
    CapabilityParseError,
    OSMServicesError,
    PasswordFileUnreadableError,
    ServerUnreachableError,
    TransportError,
    UnknownConfigKeyError,
    UnsupportedApiVersionError,
)
from osm_services.transport.base import Response, Transport
from osm_services.utils.config_store import ConfigStore

__version__ = "0.1.0"

__all__ = [
    "CapabilityParseError",
    "ConfigStore",
    "OSMServicesError",
    "PasswordFileUnreadableError",
    "Response",
    "ServerUnreachableError",
    "Transport",
    "TransportError",
    "UnknownConfigKeyError",
    "UnsupportedApiVersionError",
]
