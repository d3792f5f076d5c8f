"""
Custom formatters for osm-services logging.
"""

import logging
from datetime import datetime
from .utils import sanitize_data, sanitize_string
from osm_services.constants import SENSITIVE_KEYS


class OSMFormatter(logging.Formatter):
    """
    Default formatter for osm-services log entries.

    Dict and list messages or arguments are sanitized before formatting.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_thread_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.include_timestamps = include_timestamps
        self.include_thread_info = include_thread_info
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_thread_info:
            fmt_parts.insert(-1, "[Thread:%(thread)d]")
        super().__init__(fmt=" ".join(fmt_parts), datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            elif isinstance(record.args, dict):
                # logging unwraps a single mapping argument
                record.args = sanitize_data(record.args, self.sensitive_keys)
            elif isinstance(record.args, (tuple, list)):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys)
                    if isinstance(arg, (dict, list)) else arg
                    for arg in record.args
                )

        return super().format(record)


class APICallFormatter(logging.Formatter):
    """
    Formatter for API call records.

    Renders one line per call, e.g.
    2026-02-02 17:27:34 DEBUG [osm_services.api] GET https://host/api/capabilities -> 200 (120.0ms)

    Records without API call fields are handed to ``fallback``, so one file
    handler can serve both the API logger and the rest of the package.
    """

    def __init__(
        self,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
        fallback: logging.Formatter = None,
    ):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        self.fallback = fallback
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        if self.fallback is not None and not hasattr(record, "api_method"):
            return self.fallback.format(record)

        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        method = getattr(record, "api_method", "UNKNOWN")
        url = getattr(record, "api_url", "")
        status = getattr(record, "api_status", None) or "---"
        duration = round(getattr(record, "api_duration", 0) * 1000, 2)

        if self.sanitize_sensitive:
            url = sanitize_string(url, self.sensitive_keys)

        lines = [
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{method} {url} -> {status} ({duration}ms)"
        ]

        if getattr(record, "api_error", None):
            lines.append(f"    Error: {record.api_error}")

        return "\n".join(lines)
