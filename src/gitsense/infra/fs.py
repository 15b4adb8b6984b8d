from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution, input loading and archive
persistence. Acts as an abstraction over the 'os' module so the core
layers stay free of direct disk access.
"""

import os
import sys
import tempfile
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "GitSense"
UNIX_APP_DIR_NAME = ".gitsense"
STDIN_MARKER = "-"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/GitSense
    - Linux/Mac: ~/.gitsense

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion and user home shortcuts.
    Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# INPUT / OUTPUT API
# -----------------------------------------------------------------------------

def read_structure_text(source: str) -> str:
    """
    Load structure text from a file path, or from stdin when source is '-'.

    Raises:
        OSError: If the file cannot be read.
    """
    if source == STDIN_MARKER:
        return sys.stdin.read()
    with open(source, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def write_bytes_atomic(dest_path: str, payload: bytes) -> None:
    """
    Persist a binary payload so readers never observe a half-written file.

    Writes to a sibling temporary file first, then swaps it into place.

    Raises:
        OSError: If the directory is not writable.
    """
    directory = os.path.dirname(os.path.abspath(dest_path))
    fd, tmp_path = tempfile.mkstemp(prefix=".gitsense-", suffix=".part", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        os.replace(tmp_path, dest_path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
