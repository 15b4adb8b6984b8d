from __future__ import annotations

"""
GitHub REST Collaborator.

Fetches repository metadata and a depth-limited directory tree through the
public contents API. Anonymous access works for public repositories; a
token (argument or GITHUB_TOKEN) raises the rate limit and unlocks private
ones.
"""

import logging
import os
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import requests

from gitsense.domain.constants import DEFAULT_GITHUB_DEPTH, GITHUB_ITEMS_PER_DIR
from gitsense.domain.errors import GitHubAccessError
from gitsense.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
TOKEN_ENV_VAR = "GITHUB_TOKEN"

_URL_PREFIX_RX = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/", re.IGNORECASE)

# -----------------------------------------------------------------------------
# REFERENCES & AUTH
# -----------------------------------------------------------------------------

def parse_repo_reference(reference: str) -> Tuple[str, str, str]:
    """
    Split 'owner/repo[/path]' or a github.com URL into its components.

    Raises:
        ValueError: If owner or repo cannot be determined.
    """
    ref = _URL_PREFIX_RX.sub("", (reference or "").strip()).strip("/")
    parts = [p for p in ref.split("/") if p]

    if len(parts) < 2:
        raise ValueError(f"Invalid repository reference '{reference}': expected OWNER/REPO[/PATH].")

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-4]

    # Browser URLs carry /tree/<branch>/ before the path
    rest = parts[2:]
    if len(rest) >= 2 and rest[0] in ("tree", "blob"):
        rest = rest[2:]

    return owner, repo, "/".join(rest)


def _resolve_token(token: Optional[str]) -> Optional[str]:
    return token or os.environ.get(TOKEN_ENV_VAR) or None


def _headers(token: Optional[str]) -> Dict[str, str]:
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/vnd.github+json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers

# -----------------------------------------------------------------------------
# API CALLS
# -----------------------------------------------------------------------------

def get_repository(owner: str, repo: str, token: Optional[str] = None) -> Dict[str, Any]:
    """
    Retrieve repository metadata.

    Raises:
        GitHubAccessError: On 404 (missing or private), 403 (rate limit),
                           401 (bad token) or transport failure.
    """
    token = _resolve_token(token)
    url = f"{GITHUB_API_URL}/repos/{owner}/{repo}"
    logger.info(f"Fetching repository: {owner}/{repo} (token: {'yes' if token else 'no'})")

    try:
        response = requests.get(url, headers=_headers(token), timeout=DEFAULT_TIMEOUT)
    except requests.exceptions.RequestException as e:
        raise GitHubAccessError(f"GitHub API communication failure: {e}") from e

    if response.status_code == 404:
        hint = "" if token else " Try adding a GitHub token for private repos."
        raise GitHubAccessError(f"Repository '{owner}/{repo}' not found or is private.{hint}", 404)
    _raise_for_status(response, "Failed to fetch repository")

    return response.json()


def get_contents(owner: str, repo: str, path: str = "", token: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    List the items of a repository directory (a file path yields one item).

    Raises:
        GitHubAccessError: If the path is missing or the request fails.
    """
    token = _resolve_token(token)
    url = f"{GITHUB_API_URL}/repos/{owner}/{repo}/contents/{path.strip('/')}"

    try:
        response = requests.get(url, headers=_headers(token), timeout=DEFAULT_TIMEOUT)
    except requests.exceptions.RequestException as e:
        raise GitHubAccessError(f"GitHub API communication failure: {e}") from e

    if response.status_code == 404:
        raise GitHubAccessError(f"Path not found: {path or '/'}", 404)
    _raise_for_status(response, "Failed to fetch contents")

    data = response.json()
    return data if isinstance(data, list) else [data]


def get_directory_tree(
        owner: str,
        repo: str,
        path: str = "",
        max_depth: int = DEFAULT_GITHUB_DEPTH,
        token: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Build a depth-limited tree of repository items.

    Each directory lists at most GITHUB_ITEMS_PER_DIR items. Subdirectories
    that cannot be read are kept with empty children and an 'error' marker;
    a failure on the starting path propagates.

    Args:
        owner: Repository owner.
        repo: Repository name.
        path: Starting directory ('' for the root).
        max_depth: Number of levels to expand (1 lists only `path`).
        token: Optional API token.

    Returns:
        List[Dict[str, Any]]: API items, directories carrying a 'children' list.
    """
    if max_depth <= 0:
        return []

    token = _resolve_token(token)
    items = get_contents(owner, repo, path, token)
    tree: List[Dict[str, Any]] = []

    for item in items[:GITHUB_ITEMS_PER_DIR]:
        if item.get("type") != "dir" or max_depth <= 1:
            tree.append(item)
            continue

        try:
            children = get_directory_tree(owner, repo, item.get("path", ""), max_depth - 1, token)
            tree.append({**item, "children": children})
        except GitHubAccessError as e:
            logger.warning(f"Skipping directory {item.get('path')}: {e}")
            tree.append({**item, "children": [], "error": "Access denied"})

    return tree


def get_rate_limit(token: Optional[str] = None) -> Dict[str, Any]:
    """Report the current core rate limit; zeroed values if the query fails."""
    token = _resolve_token(token)
    try:
        response = requests.get(f"{GITHUB_API_URL}/rate_limit", headers=_headers(token), timeout=DEFAULT_TIMEOUT)
        response.raise_for_status()
        rate = response.json().get("rate", {})
        return {
            "limit": int(rate.get("limit", 0)),
            "remaining": int(rate.get("remaining", 0)),
            "reset": datetime.fromtimestamp(int(rate.get("reset", 0)), tz=timezone.utc),
            "used": int(rate.get("used", 0)),
        }
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.warning(f"Failed to get rate limit: {e}")
        return {"limit": 0, "remaining": 0, "reset": datetime.now(timezone.utc), "used": 0}

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _raise_for_status(response: requests.Response, context: str) -> None:
    """Translate non-success responses into GitHubAccessError."""
    status = response.status_code
    if status == 403:
        raise GitHubAccessError("Access forbidden. You may have hit the rate limit or need a GitHub token.", 403)
    if status == 401:
        raise GitHubAccessError("Invalid GitHub token. Please check your token.", 401)

    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise GitHubAccessError(f"{context}: {e}", status) from e
