"""
osm-services logging module

Structured logging for the OpenStreetMap client configuration layer.

Key Features:
- Single log file with daily rotation
- Cross-platform log directory detection
- API call logging for capability fetches and other requests
- Authentication and negotiation events
- Automatic sanitization of credentials
"""

from .logger import (
    get_logger,
    setup_logging,
    LogLevel,
    log_api_call,
    log_transaction,
    log_application_event,
    log_authentication_event
)
from .config import LogConfig
from .utils import sanitize_data, get_log_directory

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_transaction",
    "log_application_event",
    "log_authentication_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory"
]
