"""
Transports fetch responses from the OSM API on behalf of a ConfigStore.
"""

from .base import Response, Transport
from .http_transport import ADAPTERS, HttpTransport

__all__ = ["ADAPTERS", "HttpTransport", "Response", "Transport"]
