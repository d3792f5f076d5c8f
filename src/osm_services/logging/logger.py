"""
Main logging module for osm-services.

Provides logger setup with daily rotation and the structured helpers used
by the configuration store, the transports and the CLI.
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import OSMFormatter, APICallFormatter
from .utils import cleanup_old_logs, sanitize_data


# Global logger registry
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def _rotating_handler(log_file_path, config: LogConfig) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when='midnight',
        interval=1,
        backupCount=config.log_retention_days,
        encoding='utf-8',
        utc=False
    )
    # Rotated files are suffixed YYYY-MM-DD
    handler.suffix = "%Y-%m-%d"
    return handler


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the osm-services logging system.

    Args:
        config: LogConfig instance, built from the environment if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig.from_env()

    _log_config = config

    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("osm_services")
    root_logger.setLevel(getattr(logging, config.default_level.value))
    root_logger.handlers.clear()

    file_formatter = OSMFormatter(
        include_timestamps=config.include_timestamps,
        include_thread_info=config.include_thread_info,
        sanitize_sensitive=config.sanitize_sensitive_data,
        sensitive_keys=config.sensitive_keys
    )
    # One handler owns the file; API call records get their own line format
    file_handler = _rotating_handler(log_file_path, config)
    if config.log_api_calls:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(APICallFormatter(
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys,
            fallback=file_formatter
        ))
    else:
        file_handler.setLevel(getattr(logging, config.default_level.value))
        file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))
        console_handler.setFormatter(OSMFormatter(
            include_timestamps=False,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys
        ))
        root_logger.addHandler(console_handler)

    # API calls go to the file only, never to the console
    api_logger = logging.getLogger("osm_services.api")
    api_logger.setLevel(logging.DEBUG)
    api_logger.handlers.clear()

    if config.log_api_calls:
        api_logger.addHandler(file_handler)

    api_logger.propagate = False

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True

    setup_logger = get_logger("osm_services.setup")
    setup_logger.info(f"Logging initialized - File: {log_file_path}, "
                      f"Level: {config.default_level.value}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'osm_services.config')

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_api_call(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    response_size: Optional[int] = None,
    error: Optional[str] = None,
    logger_name: str = "osm_services.api"
) -> None:
    """
    Log an API call with structured information.

    Server errors and transport failures are logged at ERROR, client
    errors at WARNING and everything else at DEBUG.
    """
    logger = get_logger(logger_name)

    extra = {
        "api_method": method,
        "api_url": url,
        "api_status": status_code,
        "api_duration": duration or 0,
    }
    if response_size is not None:
        extra["api_response_size"] = response_size
    if error:
        extra["api_error"] = error

    if error or (status_code and status_code >= 500):
        logger.error("API call failed", extra=extra)
    elif status_code and 400 <= status_code < 500:
        logger.warning("API call client error", extra=extra)
    else:
        logger.debug("API call completed", extra=extra)


def log_transaction(
    operation: str,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "osm_services.transaction"
) -> None:
    """Log a committed state change at DEBUG level."""
    logger = get_logger(logger_name)
    extra = {"transaction_operation": operation}

    if details:
        extra["transaction_details"] = sanitize_data(details, _sensitive_keys())

    logger.debug(f"Transaction: {operation}", extra=extra)


def log_application_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "osm_services.app"
) -> None:
    """Log application-level events at the requested level."""
    logger = get_logger(logger_name)
    extra = {"app_event": event}

    if details:
        extra["app_details"] = details

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(f"Application: {event}", extra=extra)


def log_authentication_event(
    auth_type: str,
    success: bool,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "osm_services.auth"
) -> None:
    """
    Log authentication events.

    Args:
        auth_type: Source of the credentials (e.g. password-file)
        success: Whether credentials were resolved
        details: Additional details, always sanitized
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {
        "auth_type": auth_type,
        "auth_success": success
    }

    if details:
        extra["auth_details"] = sanitize_data(details, _sensitive_keys())

    if success:
        logger.info(f"Authentication resolved: {auth_type}", extra=extra)
    else:
        logger.warning(f"Authentication not resolved: {auth_type}", extra=extra)


def _sensitive_keys() -> tuple:
    if _log_config is not None:
        return _log_config.sensitive_keys
    return LogConfig().sensitive_keys
