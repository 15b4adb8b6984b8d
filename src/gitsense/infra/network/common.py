from __future__ import annotations

from gitsense.domain.constants import APP_VERSION

USER_AGENT = f"GitSense-Client/{APP_VERSION}"
DEFAULT_TIMEOUT = 10
