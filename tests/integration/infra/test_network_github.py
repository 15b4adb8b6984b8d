from __future__ import annotations

"""
Integration tests for the GitHub Collaborator.

Utilizes mocking to verify repository lookups, depth-limited tree
listing and error translation without making real network calls.
"""

import os
from typing import Any, Dict
from unittest.mock import MagicMock, patch

import pytest
import requests

from gitsense.domain.errors import GitHubAccessError
from gitsense.infra.network import (
    get_contents,
    get_directory_tree,
    get_rate_limit,
    get_repository,
    parse_repo_reference,
)

API = "https://api.github.com/repos/octo/app"


def fake_response(status: int = 200, payload: Any = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    return resp


def routed(routes: Dict[str, MagicMock]):
    """Build a requests.get side effect resolving responses by URL."""
    def _get(url, headers=None, timeout=None):
        return routes[url]
    return _get


def entry(name: str, kind: str, path: str = "") -> Dict[str, str]:
    return {"name": name, "type": kind, "path": path or name}

# -----------------------------------------------------------------------------
# REFERENCE PARSING
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("ref, expected", [
    ("octo/app", ("octo", "app", "")),
    ("octo/app/src/lib", ("octo", "app", "src/lib")),
    ("https://github.com/octo/app", ("octo", "app", "")),
    ("github.com/octo/app.git", ("octo", "app", "")),
    ("https://www.github.com/octo/app/tree/main/docs", ("octo", "app", "docs")),
    ("https://github.com/octo/app/blob/dev/src/main.py", ("octo", "app", "src/main.py")),
    ("  octo/app/  ", ("octo", "app", "")),
])
def test_parse_repo_reference(ref: str, expected) -> None:
    assert parse_repo_reference(ref) == expected


@pytest.mark.parametrize("ref", ["", "octo", "https://github.com/octo"])
def test_parse_repo_reference_invalid(ref: str) -> None:
    with pytest.raises(ValueError):
        parse_repo_reference(ref)

# -----------------------------------------------------------------------------
# REPOSITORY & CONTENTS
# -----------------------------------------------------------------------------

def test_get_repository_success() -> None:
    resp = fake_response(200, {"full_name": "octo/app", "private": False})

    with patch.dict(os.environ, {}, clear=True):
        with patch("requests.get", return_value=resp) as mock_get:
            data = get_repository("octo", "app")

    assert data["full_name"] == "octo/app"
    args, kwargs = mock_get.call_args
    assert args[0] == API
    assert kwargs["timeout"] == 10
    assert "GitSense" in kwargs["headers"]["User-Agent"]
    assert "Authorization" not in kwargs["headers"]


def test_token_from_environment_is_sent() -> None:
    with patch.dict(os.environ, {"GITHUB_TOKEN": "env-token"}):
        with patch("requests.get", return_value=fake_response(200, {})) as mock_get:
            get_repository("octo", "app")

    assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Bearer env-token"


def test_explicit_token_beats_environment() -> None:
    with patch.dict(os.environ, {"GITHUB_TOKEN": "env-token"}):
        with patch("requests.get", return_value=fake_response(200, {})) as mock_get:
            get_repository("octo", "app", token="cli-token")

    assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Bearer cli-token"


def test_get_repository_not_found_suggests_token() -> None:
    with patch.dict(os.environ, {}, clear=True):
        with patch("requests.get", return_value=fake_response(404)):
            with pytest.raises(GitHubAccessError) as exc:
                get_repository("octo", "app")

    assert exc.value.status_code == 404
    assert "token" in str(exc.value)


@pytest.mark.parametrize("status, fragment", [
    (403, "rate limit"),
    (401, "Invalid GitHub token"),
    (500, "Failed to fetch repository"),
])
def test_get_repository_error_statuses(status: int, fragment: str) -> None:
    with patch("requests.get", return_value=fake_response(status)):
        with pytest.raises(GitHubAccessError) as exc:
            get_repository("octo", "app")

    assert fragment in str(exc.value)
    assert exc.value.status_code == status


def test_transport_failure_is_wrapped() -> None:
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("offline")):
        with pytest.raises(GitHubAccessError) as exc:
            get_contents("octo", "app")

    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, requests.exceptions.ConnectionError)


def test_get_contents_wraps_single_file() -> None:
    item = entry("README.md", "file")

    with patch("requests.get", return_value=fake_response(200, item)) as mock_get:
        items = get_contents("octo", "app", "/README.md/")

    assert items == [item]
    assert mock_get.call_args.args[0] == f"{API}/contents/README.md"


def test_get_contents_missing_path() -> None:
    with patch("requests.get", return_value=fake_response(404)):
        with pytest.raises(GitHubAccessError, match="Path not found: docs"):
            get_contents("octo", "app", "docs")

# -----------------------------------------------------------------------------
# DIRECTORY TREE
# -----------------------------------------------------------------------------

def test_directory_tree_expands_to_max_depth() -> None:
    routes = {
        f"{API}/contents/": fake_response(200, [entry("src", "dir"), entry("README.md", "file")]),
        f"{API}/contents/src": fake_response(200, [entry("lib", "dir", "src/lib"), entry("a.py", "file", "src/a.py")]),
    }

    with patch("requests.get", side_effect=routed(routes)) as mock_get:
        tree = get_directory_tree("octo", "app", max_depth=2)

    assert [i["name"] for i in tree] == ["src", "README.md"]
    assert [c["name"] for c in tree[0]["children"]] == ["lib", "a.py"]
    # The deepest level is listed but not expanded
    assert "children" not in tree[0]["children"][0]
    assert "children" not in tree[1]
    assert mock_get.call_count == 2


def test_directory_tree_depth_one_lists_only_start() -> None:
    routes = {f"{API}/contents/docs": fake_response(200, [entry("guide", "dir", "docs/guide")])}

    with patch("requests.get", side_effect=routed(routes)):
        tree = get_directory_tree("octo", "app", "docs", max_depth=1)

    assert tree == [entry("guide", "dir", "docs/guide")]


def test_directory_tree_non_positive_depth_makes_no_request() -> None:
    with patch("requests.get") as mock_get:
        assert get_directory_tree("octo", "app", max_depth=0) == []
    mock_get.assert_not_called()


def test_directory_tree_caps_items_per_directory() -> None:
    listing = [entry(f"f{i}.txt", "file") for i in range(25)]

    with patch("requests.get", return_value=fake_response(200, listing)):
        tree = get_directory_tree("octo", "app", max_depth=1)

    assert len(tree) == 20
    assert tree[-1]["name"] == "f19.txt"


def test_unreadable_subdirectory_is_marked() -> None:
    routes = {
        f"{API}/contents/": fake_response(200, [entry("private", "dir"), entry("ok.txt", "file")]),
        f"{API}/contents/private": fake_response(403),
    }

    with patch("requests.get", side_effect=routed(routes)):
        tree = get_directory_tree("octo", "app", max_depth=3)

    assert tree[0]["children"] == []
    assert tree[0]["error"] == "Access denied"
    assert tree[1]["name"] == "ok.txt"


def test_unreadable_start_path_propagates() -> None:
    with patch("requests.get", return_value=fake_response(404)):
        with pytest.raises(GitHubAccessError):
            get_directory_tree("octo", "app", "missing")

# -----------------------------------------------------------------------------
# RATE LIMIT
# -----------------------------------------------------------------------------

def test_get_rate_limit_success() -> None:
    payload = {"rate": {"limit": 60, "remaining": 42, "reset": 1700000000, "used": 18}}

    with patch("requests.get", return_value=fake_response(200, payload)):
        info = get_rate_limit()

    assert info["limit"] == 60
    assert info["remaining"] == 42
    assert info["used"] == 18
    assert info["reset"].year == 2023


def test_get_rate_limit_failure_returns_zeroes() -> None:
    with patch("requests.get", side_effect=requests.exceptions.Timeout):
        info = get_rate_limit()

    assert info["limit"] == 0
    assert info["remaining"] == 0
