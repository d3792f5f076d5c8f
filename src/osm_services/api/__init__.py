"""
OpenStreetMap API version variants and server capability parsing.
"""

from .capabilities import Capabilities, get_xml_value, parse_capabilities
from .versions import API_VERSIONS, ApiV06, ApiVersion, select_api

__all__ = [
    "API_VERSIONS",
    "ApiV06",
    "ApiVersion",
    "Capabilities",
    "get_xml_value",
    "parse_capabilities",
    "select_api",
]
