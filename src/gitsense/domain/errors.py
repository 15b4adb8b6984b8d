from __future__ import annotations

"""
Domain Exception Hierarchy.

Parsing is lenient and never raises; these exceptions cover the failure
modes that must reach the caller as a single, retryable error.
"""

from typing import Optional


class GitSenseError(Exception):
    """Base class for all application errors."""


class ScaffoldGenerationError(GitSenseError):
    """Raised when stub synthesis or archive packing fails for any entry."""


class GitHubAccessError(GitSenseError):
    """
    Raised when the GitHub API refuses or fails a repository request.

    Attributes:
        status_code: HTTP status reported by the API, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
