"""HTTP helpers: authentication headers and transport construction."""

import base64
from typing import Dict, Optional

import httpx

DEFAULT_TIMEOUT = 30.0


def basic_auth_header(username: str, password: str) -> Dict[str, str]:
    """Get basic authentication header for the token exchange."""
    credentials = base64.b64encode(f"{username}:{password}".encode("utf-8"))
    return {"Authorization": f"Basic {credentials.decode('ascii')}"}


def bearer_auth_header(token: str) -> Dict[str, str]:
    """Get bearer authentication header."""
    return {"Authorization": f"Bearer {token}"}


def build_http_client(
    headers: Optional[Dict[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient with the library's defaults.

    Args:
        headers: Headers sent with every request (e.g. bearer auth)
        timeout: Request timeout in seconds

    Returns:
        Configured async HTTP client; the caller is responsible for closing it
    """
    default_headers = {"Accept": "application/json"}
    if headers:
        default_headers.update(headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers=default_headers,
        follow_redirects=True,
    )
