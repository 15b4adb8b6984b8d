from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the argparse namespace into
configuration overrides understood by the scaffold pipeline.
"""

import argparse
from typing import Any, Dict

from gitsense.domain.constants import APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the GitSense scaffold CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="gitsense",
        description="Convert a text folder structure into a downloadable ZIP project scaffold.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Structure Source ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Text file holding the folder structure ('-' reads stdin).",
    )
    source.add_argument(
        "--github",
        dest="github_ref",
        default=None,
        help="Scaffold the layout of a GitHub repository (OWNER/REPO[/PATH] or URL).",
    )
    source.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in Next.js sample structure.",
    )

    # --- Output ---
    p.add_argument(
        "-n", "--name",
        dest="project_name",
        default=None,
        help="Project name used for the archive file name.",
    )
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory where the ZIP archive is written.",
    )
    p.add_argument(
        "--compression",
        dest="compression_level",
        type=int,
        default=None,
        help="DEFLATE level from 0 (store) to 9 (best).",
    )

    # --- Parsing & Preview ---
    p.add_argument(
        "--indent-width",
        dest="indent_width",
        type=int,
        default=None,
        help="Characters per indentation level (default: 2).",
    )
    p.add_argument(
        "--print-tree",
        action="store_true",
        help="Log the parsed structure preview.",
    )
    p.add_argument(
        "--counts",
        action="store_true",
        help="Annotate directories with their item count in the preview.",
    )

    # --- GitHub ---
    p.add_argument(
        "--depth",
        dest="github_max_depth",
        type=int,
        default=None,
        help="Levels to fetch from GitHub (default: 3).",
    )
    p.add_argument(
        "--token",
        dest="github_token",
        default=None,
        help="GitHub token (defaults to the GITHUB_TOKEN environment variable).",
    )

    # --- Runtime Constraints ---
    p.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace an existing archive with the same name.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Build the archive in memory without writing it.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective settings as the new defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Also write logs to a rotating file (default location when no path is given).",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Overrides; None values mean "keep the base value".
    """
    overrides: Dict[str, Any] = {}

    overrides["project_name"] = args.project_name
    overrides["output_dir"] = args.output_dir
    overrides["compression_level"] = args.compression_level
    overrides["indent_width"] = args.indent_width
    overrides["github_max_depth"] = args.github_max_depth

    if args.print_tree:
        overrides["print_tree"] = True
    if args.counts:
        overrides["show_item_counts"] = True

    return overrides
