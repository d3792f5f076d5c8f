"""
Global constants for osm-services.
"""

# Default configuration settings. The key set is closed: ConfigStore never
# accepts a key that is not listed here.
DEFAULT_SETTINGS = {
    "adapter": "httpx",
    "api_version": "0.6",
    "password": None,
    "passwordfile": None,
    "server": "https://api.openstreetmap.org",
    "User-Agent": "osm-services",
    "user": None,
    "verbose": False,
}

CONFIG_KEYS = frozenset(DEFAULT_SETTINGS)

# API constants
CAPABILITIES_ENDPOINT = "/api/capabilities"
DEFAULT_HTTP_TIMEOUT = 30.0  # seconds, applied by the HTTP transport only

# Password file
PASSWORD_FILE_COMMENT = "#"
PASSWORD_FILE_SEPARATOR = ":"

# Logging constants
LOG_APP_NAME = "osm-services"
LOG_FILE_NAME = "osm_services"
LOG_LEVEL_ENV = "OSM_SERVICES_LOG_LEVEL"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "passwd", "token", "secret", "authorization", "cookie",
    "session", "api_key",
)
