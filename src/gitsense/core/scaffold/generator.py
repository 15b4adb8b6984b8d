from __future__ import annotations

"""
Scaffold Archive Generator.

Materializes a parsed folder structure as an in-memory ZIP archive. Files
receive stub content from the template catalogue, empty directories are
preserved through a `.gitkeep` marker, and directories with children are
implied by their descendants' paths. Packing is all-or-nothing: any
failure surfaces as a single ScaffoldGenerationError.
"""

import io
import logging
import re
import zipfile
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

from gitsense.core.scaffold.templates import render_stub
from gitsense.domain.constants import (
    ARCHIVE_EXTENSION,
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_PROJECT_NAME,
    GITKEEP_CONTENT,
    GITKEEP_NAME,
)
from gitsense.domain.errors import ScaffoldGenerationError
from gitsense.domain.structure_models import ArchiveEntry, StructureNode

logger = logging.getLogger(__name__)

_UNSAFE_NAME_RX = re.compile(r"[^a-zA-Z0-9_-]")

# Fixed timestamp keeps identical trees byte-identical across runs
_ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_ENTRY_PERMISSIONS = 0o644 << 16

# -----------------------------------------------------------------------------
# NAMING
# -----------------------------------------------------------------------------

def sanitize_archive_name(name: Optional[str]) -> str:
    """
    Reduce a project name to an archive-safe token.

    Every character outside letters, digits, '-' and '_' becomes '-'.
    Blank names fall back to the default project name.
    """
    raw = name or ""
    if not raw.strip():
        return DEFAULT_PROJECT_NAME
    return _UNSAFE_NAME_RX.sub("-", raw)


def archive_filename(name: Optional[str]) -> str:
    """Return the download file name for a project, e.g. `my-app.zip`."""
    return f"{sanitize_archive_name(name)}{ARCHIVE_EXTENSION}"

# -----------------------------------------------------------------------------
# PLANNING
# -----------------------------------------------------------------------------

def plan_entries(roots: List[StructureNode]) -> List[ArchiveEntry]:
    """
    Walk the forest depth-first (pre-order) and list the archive entries.

    Children are visited in stored order, so entry order follows the
    preview. When two nodes resolve to the same path the later content
    wins while the entry keeps the position of its first occurrence.

    Args:
        roots: Parsed forest.

    Returns:
        List[ArchiveEntry]: Ordered, path-unique entries.
    """
    planned: Dict[str, str] = {}
    stack: List[Tuple[StructureNode, str]] = [(node, "") for node in reversed(roots)]

    while stack:
        node, parent = stack.pop()
        path = _join_entry_path(parent, node.name)

        if node.is_dir:
            if not node.children:
                planned[f"{path}/{GITKEEP_NAME}"] = GITKEEP_CONTENT
                continue
            stack.extend((child, path) for child in reversed(node.children))
            continue

        if path in planned:
            logger.debug(f"Duplicate entry '{path}': later occurrence overwrites the earlier one.")
        planned[path] = render_stub(node.name)

    return [ArchiveEntry(path=p, content=c) for p, c in planned.items()]


def _join_entry_path(parent: str, name: str) -> str:
    """
    Append a node name to its parent path as a relative archive path.

    Leading and repeated slashes are dropped. Dot segments are rejected so
    no entry can resolve outside the archive root.

    Raises:
        ScaffoldGenerationError: If the name holds a "." or ".." segment or
                                 has no usable segment at all.
    """
    segments = [s for s in name.split("/") if s]
    if not segments or any(s in (".", "..") for s in segments):
        raise ScaffoldGenerationError(f"Unsafe entry path '{name}': names must stay inside the project root.")
    return "/".join([parent, *segments] if parent else segments)

# -----------------------------------------------------------------------------
# PACKING
# -----------------------------------------------------------------------------

def build_archive(
        roots: List[StructureNode],
        archive_name: Optional[str],
        *,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> bytes:
    """
    Pack the forest into a DEFLATE-compressed ZIP payload.

    Args:
        roots: Parsed forest.
        archive_name: Caller-supplied project name (used for diagnostics).
        compression_level: zlib level, 0 (store) to 9 (best).

    Returns:
        bytes: The complete archive.

    Raises:
        ScaffoldGenerationError: If stub synthesis or packing fails. No
                                 partial payload is returned.
    """
    label = sanitize_archive_name(archive_name)

    try:
        entries = plan_entries(roots)

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED,
                             compresslevel=compression_level) as zf:
            for entry in entries:
                info = zipfile.ZipInfo(entry.path, date_time=_ENTRY_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = _ENTRY_PERMISSIONS
                zf.writestr(info, entry.content.encode("utf-8"), compresslevel=compression_level)

        payload = buffer.getvalue()

    except Exception as e:
        logger.error(f"Scaffold generation failed for '{label}': {e}")
        raise ScaffoldGenerationError(f"Failed to generate scaffold '{label}': {e}") from e

    logger.info(f"Scaffold '{label}' packed: {len(entries)} entries ({len(payload) / 1024:.1f} KB).")
    return payload


def submit_build(
        roots: List[StructureNode],
        archive_name: Optional[str],
        *,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
        executor: Optional[Executor] = None,
) -> Future:
    """
    Schedule build_archive on a worker thread.

    The returned future either resolves to the full payload or raises
    ScaffoldGenerationError; it never yields a partial archive.

    Args:
        roots: Parsed forest.
        archive_name: Caller-supplied project name.
        compression_level: zlib level, 0 to 9.
        executor: Optional caller-owned executor. A single-use pool is
                  created when omitted.

    Returns:
        Future: Resolves to the archive bytes.
    """
    if executor is not None:
        return executor.submit(build_archive, roots, archive_name, compression_level=compression_level)

    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ScaffoldBuilder")
    try:
        return pool.submit(build_archive, roots, archive_name, compression_level=compression_level)
    finally:
        # Pending work still runs; the pool just stops accepting tasks
        pool.shutdown(wait=False)
