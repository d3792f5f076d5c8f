"""
Credential resolution for OSM API access.
"""

from .password_file import read_password_file, resolve_credentials

__all__ = ["read_password_file", "resolve_credentials"]
