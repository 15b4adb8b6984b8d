from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of scaffold preferences as JSON in the user
data directory. Unknown or corrupted files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict

from gitsense.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_GITHUB_DEPTH,
    DEFAULT_INDENT_WIDTH,
    DEFAULT_PROJECT_NAME,
)
from gitsense.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration for a scaffold run.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Output
        "project_name": DEFAULT_PROJECT_NAME,
        "output_dir": os.getcwd(),
        "compression_level": DEFAULT_COMPRESSION_LEVEL,

        # Parsing
        "indent_width": DEFAULT_INDENT_WIDTH,

        # Preview
        "print_tree": False,
        "show_item_counts": False,

        # Remote structures
        "github_max_depth": DEFAULT_GITHUB_DEPTH,
    }


def get_default_app_state() -> Dict[str, Any]:
    return {
        "version": CURRENT_CONFIG_VERSION,
        "last_session": get_default_config(),
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state or a default structure on failure.
    """
    default_state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return default_state

    session = data.get("last_session")
    if isinstance(session, dict):
        default_state["last_session"].update(session)

    return default_state


def save_app_state(state: Dict[str, Any]) -> None:
    """Persist application state to disk."""
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """Retrieve the active configuration (last session merged over defaults)."""
    return load_app_state()["last_session"]


def save_config(config: Dict[str, Any]) -> None:
    """Save the provided config as the 'last_session'."""
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
