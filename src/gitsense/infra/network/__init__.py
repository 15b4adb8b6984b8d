from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the external HTTP collaborators used by the scaffold tooling.
"""

from gitsense.infra.network.github_client import (
    get_contents,
    get_directory_tree,
    get_rate_limit,
    get_repository,
    parse_repo_reference,
)

__all__ = [
    "get_contents",
    "get_directory_tree",
    "get_rate_limit",
    "get_repository",
    "parse_repo_reference",
]
