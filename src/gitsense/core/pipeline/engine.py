from __future__ import annotations

"""
Core scaffold pipeline.

Coordinates a complete scaffold run:
1. Validates configuration.
2. Parses the structure text (unless a parsed forest is supplied).
3. Renders the preview.
4. Checks the destination for an existing archive.
5. Packs the archive in memory.
6. Persists it atomically (skipped in dry-run mode).
"""

import io
import logging
import os
import zipfile
from typing import Any, Dict, Optional

from gitsense.core.analysis.structure_parser import parse_structure
from gitsense.core.analysis.structure_renderer import render_structure
from gitsense.core.pipeline.validator import validate_config
from gitsense.core.scaffold.generator import archive_filename, build_archive, sanitize_archive_name
from gitsense.domain.constants import GITKEEP_NAME
from gitsense.domain.errors import ScaffoldGenerationError
from gitsense.domain.pipeline_models import (
    ERROR_CONFLICT,
    ERROR_GENERATION,
    ERROR_INPUT,
    ERROR_IO,
    ScaffoldResult,
    create_error_result,
    create_success_result,
)
from gitsense.domain.structure_models import ParseResult
from gitsense.infra.fs import normalize_path, safe_mkdir, write_bytes_atomic

logger = logging.getLogger(__name__)

NOTHING_TO_PARSE = "Nothing to parse: the structure contains no file or directory names."


def run_scaffold_pipeline(
        config: Optional[Dict[str, Any]],
        structure_text: Optional[str] = None,
        *,
        parsed: Optional[ParseResult] = None,
        overwrite: bool = False,
        dry_run: bool = False,
) -> ScaffoldResult:
    """
    Execute the full scaffold pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        structure_text: Raw structure text. Ignored when parsed is given.
        parsed: Pre-built forest (e.g. from a remote repository).
        overwrite: If True, replace an existing archive at the destination.
        dry_run: If True, build the archive but do not write it to disk.

    Returns:
        ScaffoldResult: Status, counts, preview and summary.
    """
    logger.info("Scaffold pipeline started.")

    # -------------------------------------------------------------------------
    # 1) Config
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    project_name = sanitize_archive_name(cfg["project_name"])
    output_dir = normalize_path(cfg["output_dir"], os.getcwd())
    archive_path = os.path.join(output_dir, archive_filename(cfg["project_name"]))

    # -------------------------------------------------------------------------
    # 2) Parse & Preview
    # -------------------------------------------------------------------------
    if parsed is None:
        parsed = parse_structure(structure_text, indent_width=cfg["indent_width"])

    if parsed.is_empty:
        logger.warning(NOTHING_TO_PARSE)
        return create_error_result(NOTHING_TO_PARSE, ERROR_INPUT, project_name, archive_path)

    tree_lines = render_structure(parsed.roots, show_item_counts=cfg["show_item_counts"])
    logger.info(f"Structure analysis: {parsed.file_count} files, {parsed.dir_count} folders.")
    if cfg["print_tree"]:
        logger.info("Structure Preview:\n" + "\n".join(tree_lines))

    # -------------------------------------------------------------------------
    # 3) Overwrite Check
    # -------------------------------------------------------------------------
    existed_before = os.path.exists(archive_path)
    if existed_before and not overwrite and not dry_run:
        msg = f"Archive already exists and overwrite=False: {archive_path}"
        logger.warning(msg)
        return create_error_result(
            msg, ERROR_CONFLICT, project_name, archive_path,
            summary_extra={"existing_file": archive_path},
        )

    # -------------------------------------------------------------------------
    # 4) Generation
    # -------------------------------------------------------------------------
    try:
        payload = build_archive(
            parsed.roots, cfg["project_name"], compression_level=cfg["compression_level"]
        )
    except ScaffoldGenerationError as e:
        return create_error_result(str(e), ERROR_GENERATION, project_name, archive_path)

    with zipfile.ZipFile(io.BytesIO(payload)) as zf:
        entry_names = zf.namelist()

    # -------------------------------------------------------------------------
    # 5) Deployment
    # -------------------------------------------------------------------------
    if dry_run:
        logger.info("Dry run: Skipping archive deployment.")
    else:
        ok, err = safe_mkdir(output_dir)
        if not ok:
            msg = f"Failed to create output directory {output_dir}: {err}"
            logger.critical(msg)
            return create_error_result(msg, ERROR_IO, project_name, archive_path)
        try:
            write_bytes_atomic(archive_path, payload)
        except OSError as e:
            msg = f"Failed to write archive {archive_path}: {e}"
            logger.error(msg)
            return create_error_result(msg, ERROR_IO, project_name, archive_path)
        logger.info(f"Archive saved to: {archive_path}")

    summary = {
        "archive_path": archive_path,
        "entries": entry_names,
        "markers": sum(1 for name in entry_names if name.endswith(f"/{GITKEEP_NAME}")),
        "overwritten": existed_before and not dry_run,
        "dry_run": dry_run,
        "compression_level": cfg["compression_level"],
        "indent_width": cfg["indent_width"],
    }

    logger.info("Scaffold pipeline completed successfully.")
    return create_success_result(
        project_name, archive_path,
        parsed.file_count, parsed.dir_count,
        len(entry_names), len(payload),
        tree_lines, summary,
    )
