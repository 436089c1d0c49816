"""
GitHub release lookups.

Used by the NVM updater to learn the latest published version. An API token
is optional; when present it is read from ``$GITHUB_TOKEN`` or the system
keyring and only raises the rate limit.
"""

import logging
import os
from typing import Dict, Optional

import keyring
import orjson
import requests
from keyring.errors import KeyringError

from devrefresh_py.errors import UpdateCheckFailed

logger = logging.getLogger("devrefresh.github")

API_ROOT = "https://api.github.com"
DEFAULT_TIMEOUT = 15  # seconds


def get_github_token() -> Optional[str]:
    """Return a GitHub token from the environment or keyring, if any."""
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token
    try:
        token = keyring.get_password("GITHUB_TOKEN", "devrefresh")
    except KeyringError as e:
        logger.debug(f"Keyring unavailable: {e}")
        return None
    if token:
        logger.debug("Loaded GitHub token from keyring.")
    return token


def fetch_latest_release(
    repo: str,
    session: Optional[requests.Session] = None,
    token: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> str:
    """
    Return the latest release tag of *repo* without a leading ``v``.

    Args:
        repo: ``owner/name`` of the GitHub repository
        session: HTTP session to use; a new one is created if omitted
        token: Optional API token
        timeout: Request timeout in seconds

    Raises:
        UpdateCheckFailed: the request failed or the response had no tag.
    """
    url = f"{API_ROOT}/repos/{repo}/releases/latest"
    headers: Dict[str, str] = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"token {token}"

    http = session or requests.Session()
    logger.debug(f"Fetching latest release: {url}")
    try:
        response = http.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
        data = orjson.loads(response.content)
    except requests.RequestException as e:
        raise UpdateCheckFailed(f"Failed to fetch latest release of {repo}: {e}") from e
    except orjson.JSONDecodeError as e:
        raise UpdateCheckFailed(f"Invalid release metadata for {repo}: {e}") from e

    tag = data.get("tag_name") if isinstance(data, dict) else None
    if not tag:
        raise UpdateCheckFailed(f"No tag_name in latest release of {repo}")
    return str(tag).lstrip("v")
