from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, persisted settings and flags), structure source resolution
(file, stdin, sample or GitHub), pipeline execution and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

from gitsense.core.analysis.remote_structure import structure_from_items
from gitsense.core.pipeline.engine import run_scaffold_pipeline
from gitsense.core.pipeline.validator import validate_config
from gitsense.domain.config import get_default_config, load_config, save_config
from gitsense.domain.constants import SAMPLE_STRUCTURE
from gitsense.domain.errors import GitHubAccessError
from gitsense.domain.pipeline_models import ERROR_INPUT, ScaffoldResult
from gitsense.domain.structure_models import ParseResult
from gitsense.infra.fs import STDIN_MARKER, read_structure_text
from gitsense.infra.logging import LoggingConfig, configure_logging, get_default_log_path, get_logger
from gitsense.infra.network import (
    get_directory_tree,
    get_rate_limit,
    get_repository,
    parse_repo_reference,
)
from gitsense.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    log_file = None
    if args.log_file is not None:
        log_file = args.log_file or get_default_log_path()
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    # 3. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    overrides = cli_args.args_to_overrides(args)
    clean_conf, warnings = validate_config(_merge_config(base_conf, overrides), strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config:
        save_config(clean_conf)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Structure source resolution
    try:
        text, parsed, default_name = _resolve_source(args, clean_conf)
    except (ValueError, OSError, GitHubAccessError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        if isinstance(e, GitHubAccessError):
            if e.status_code == 403:
                _print_rate_limit_hint(args.github_token)
            return EXIT_FAILURE
        return EXIT_BAD_INPUT

    if default_name and not args.project_name:
        clean_conf["project_name"] = default_name

    # 5. Pipeline execution phase
    try:
        result = run_scaffold_pipeline(
            clean_conf,
            text,
            parsed=parsed,
            overwrite=bool(args.overwrite),
            dry_run=bool(args.dry_run),
        )
    except KeyboardInterrupt:
        msg = "Operation interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = f"Scaffold pipeline failed unexpectedly: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    return EXIT_BAD_INPUT if result.error_kind == ERROR_INPUT else EXIT_FAILURE

# -----------------------------------------------------------------------------
# SOURCE RESOLUTION
# -----------------------------------------------------------------------------

def _resolve_source(
        args: Any,
        conf: Dict[str, Any],
) -> Tuple[Optional[str], Optional[ParseResult], Optional[str]]:
    """
    Determine the structure to scaffold.

    Returns:
        Tuple: (structure text, pre-parsed forest, suggested project name).

    Raises:
        ValueError: If no source was given or a reference is malformed.
        OSError: If the input file cannot be read.
        GitHubAccessError: If the remote repository cannot be listed.
    """
    if args.sample:
        return SAMPLE_STRUCTURE, None, "my-nextjs-app"

    if args.github_ref:
        owner, repo, path = parse_repo_reference(args.github_ref)
        meta = get_repository(owner, repo, token=args.github_token)
        full_name = meta.get("full_name") or f"{owner}/{repo}"
        logger.info(f"Fetching remote structure: {full_name}/{path}".rstrip("/"))
        items = get_directory_tree(
            owner, repo, path, max_depth=conf["github_max_depth"], token=args.github_token
        )
        return None, structure_from_items(items), meta.get("name") or repo

    if args.input_path:
        if args.input_path != STDIN_MARKER and not os.path.isfile(args.input_path):
            raise ValueError(f"Input file does not exist: {args.input_path}")
        return read_structure_text(args.input_path), None, None

    raise ValueError("No structure source given. Use --input FILE, --github OWNER/REPO or --sample.")

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge known, non-None override values into the base configuration."""
    out = dict(base)
    keys_to_merge = [
        "project_name", "output_dir", "compression_level", "indent_width",
        "print_tree", "show_item_counts", "github_max_depth",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ScaffoldResult) -> None:
    """Format and print the execution result to standard output."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary

    if result.tree_lines:
        print("\n".join(result.tree_lines))
        print()

    print(f"Structure: {result.file_count} files, {result.dir_count} folders")
    print(f"Archive entries: {result.entry_count} ({summary.get('markers', 0)} empty-folder markers)")

    if summary.get("dry_run"):
        print("SIMULATION COMPLETE (dry run): archive was not written.")
        print(f"Target path: {result.archive_path}")
        return

    print(f"Archive written: {result.archive_path} ({result.archive_size / 1024:.1f} KB)")


def _print_rate_limit_hint(token: Optional[str]) -> None:
    """Report the remaining GitHub quota after a 403."""
    rate = get_rate_limit(token)
    if not rate["limit"]:
        return
    print(
        f"GitHub rate limit: {rate['remaining']}/{rate['limit']} requests left, "
        f"resets at {rate['reset']:%Y-%m-%d %H:%M:%S} UTC.",
        file=sys.stderr,
    )


if __name__ == "__main__":
    sys.exit(main())
