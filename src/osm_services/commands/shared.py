"""
Helpers shared by the CLI commands.
"""

from typing import Any, Dict, Optional

from osm_services.constants import SENSITIVE_KEYS
from osm_services.logging import sanitize_data
from osm_services.utils.config_store import ConfigStore


def collect_settings(**options: Optional[Any]) -> Dict[str, Any]:
    """Map CLI option values to config keys, dropping options not given."""
    keys = {
        "server": "server",
        "api_version": "api_version",
        "user": "user",
        "passwordfile": "passwordfile",
        "user_agent": "User-Agent",
        "verbose": "verbose",
    }
    settings = {}
    # api_version and user must be in place before server/passwordfile use them
    for option in ("api_version", "user", "user_agent", "verbose", "passwordfile", "server"):
        value = options.get(option)
        if value is not None:
            settings[keys[option]] = value
    return settings


def build_config(**options: Optional[Any]) -> ConfigStore:
    return ConfigStore(collect_settings(**options))


def masked_settings(config: ConfigStore) -> Dict[str, Any]:
    """Settings snapshot safe to print."""
    return sanitize_data(config.as_dict(), SENSITIVE_KEYS)
