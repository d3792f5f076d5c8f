"""
URL construction utilities.

Joins a configured server address with an API path without doubling
or dropping the separating slash.
"""


def construct_api_url(base_url: str, endpoint: str) -> str:
    """
    Construct an API URL from a server address and an endpoint path.

    Args:
        base_url: The server (e.g. https://api.openstreetmap.org or
            https://host/osm/ when served below a path)
        endpoint: The API endpoint (e.g. /api/capabilities)

    Returns:
        Full API URL
    """
    base_url = (base_url or "").rstrip("/")
    endpoint = endpoint or ""

    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint

    return f"{base_url}{endpoint}"
