from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object returned by the scaffold pipeline to the
interface layer, and the factories used to build it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Failure categories surfaced to the interface layer
ERROR_INPUT = "input"
ERROR_CONFLICT = "conflict"
ERROR_GENERATION = "generation"
ERROR_IO = "io"

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScaffoldResult:
    """
    Unified result of a scaffold pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: Failure category (input, conflict, generation, io).
        project_name: Sanitized project name.
        archive_path: Absolute destination of the ZIP file.
        file_count: Files found in the structure.
        dir_count: Directories found in the structure.
        entry_count: Entries written to the archive.
        archive_size: Payload size in bytes.
        tree_lines: Rendered structure preview.
        summary: Technical execution summary.
    """
    ok: bool
    error: str = ""
    error_kind: str = ""

    project_name: str = ""
    archive_path: str = ""

    file_count: int = 0
    dir_count: int = 0
    entry_count: int = 0
    archive_size: int = 0

    tree_lines: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        error_kind: str,
        project_name: str = "",
        archive_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ScaffoldResult:
    """Create a failed pipeline result instance."""
    return ScaffoldResult(
        ok=False,
        error=error,
        error_kind=error_kind,
        project_name=project_name,
        archive_path=archive_path,
        summary=dict(summary_extra or {}),
    )


def create_success_result(
        project_name: str,
        archive_path: str,
        file_count: int,
        dir_count: int,
        entry_count: int,
        archive_size: int,
        tree_lines: List[str],
        summary: Dict[str, Any],
) -> ScaffoldResult:
    """Create a successful pipeline result instance."""
    return ScaffoldResult(
        ok=True,
        project_name=project_name,
        archive_path=archive_path,
        file_count=file_count,
        dir_count=dir_count,
        entry_count=entry_count,
        archive_size=archive_size,
        tree_lines=list(tree_lines),
        summary=summary,
    )
