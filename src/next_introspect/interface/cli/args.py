from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the 'introspect' and 'merge' subcommands and translates parsed
namespaces into option overrides. Enumerated values (format, mode, path
style) are accepted as free strings here and checked by the controller so
an invalid value exits with the analysis-failure code rather than
argparse's usage code.
"""

import argparse
from typing import Any, Dict, List, Optional

from next_introspect.domain.constants import VALID_FORMATS, VALID_MODES, VALID_PATH_STYLES

PROG = "next-introspect"


# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the next-introspect CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=PROG,
        description="Analyze Next.js projects and export their routes as JSON, Markdown or TypeScript.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only report errors; suppress progress and success notes.",
    )
    common.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    common.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to a rotating log file.",
    )

    _add_introspect_command(sub, common)
    _add_merge_command(sub, common)
    return p


def _add_introspect_command(sub: Any, common: argparse.ArgumentParser) -> None:
    p = sub.add_parser(
        "introspect",
        parents=[common],
        help="Analyze a project and print or write its routes.",
    )
    p.add_argument("project_path", help="Path to the Next.js project root.")

    # --- Output ---
    p.add_argument(
        "-f", "--format",
        default="object",
        help=f"Output format: {', '.join(VALID_FORMATS)} (default: object).",
    )
    p.add_argument(
        "-o", "--output",
        default=None,
        help="Write output to this file instead of stdout.",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indentation width for JSON and TypeScript output (0 = compact JSON).",
    )
    p.add_argument(
        "--nested",
        action="store_true",
        help="Emit routes as a nested map keyed by path segment.",
    )
    p.add_argument(
        "--exclude-fields",
        dest="exclude_fields",
        default=None,
        help="Comma-separated field names removed from the result at any depth.",
    )
    p.add_argument(
        "--strip-prefixes",
        dest="strip_prefixes",
        action="append",
        default=None,
        help="Prefix (or //regex//) stripped from route paths in TypeScript output. Repeatable.",
    )

    # --- Analysis ---
    p.add_argument(
        "-m", "--mode",
        default=None,
        help=f"Analysis depth: {', '.join(VALID_MODES)} (default: comprehensive).",
    )
    p.add_argument(
        "--metadata",
        dest="metadata_file",
        default=None,
        help="JSON or TOML file with per-route metadata.",
    )

    # --- Path display ---
    p.add_argument(
        "--path-style",
        dest="path_style",
        default=None,
        help=f"File path display style: {', '.join(VALID_PATH_STYLES)}.",
    )
    p.add_argument(
        "--strip-prefix",
        dest="strip_prefix",
        default=None,
        help="Prefix removed from file paths with --path-style strip-prefix.",
    )
    p.add_argument(
        "--show-file-paths",
        dest="show_file_paths",
        action="store_true",
        help="Apply the path display style to route file paths.",
    )

    # --- Manifest ---
    p.add_argument(
        "--package-summary",
        dest="package_summary",
        action="store_true",
        help="Summarize package.json instead of embedding it.",
    )
    p.add_argument(
        "--include-scripts",
        dest="include_scripts",
        action="store_true",
        help="Keep the scripts map in the package summary.",
    )
    p.add_argument(
        "--include-deps",
        dest="include_dependencies",
        action="store_true",
        help="Keep dependency maps in the package summary.",
    )

    # --- Watch ---
    p.add_argument(
        "-w", "--watch",
        action="store_true",
        help="Re-run the analysis whenever project sources change.",
    )


def _add_merge_command(sub: Any, common: argparse.ArgumentParser) -> None:
    p = sub.add_parser(
        "merge",
        parents=[common],
        help="Merge route metadata into a previously exported JSON result.",
    )
    p.add_argument("json_file", help="Exported JSON result.")
    p.add_argument("metadata_file", help="JSON or TOML metadata file.")
    p.add_argument(
        "-o", "--output",
        default=None,
        help="Write output to this file instead of stdout.",
    )
    p.add_argument(
        "-f", "--format",
        default="json",
        help=f"Output format: {', '.join(VALID_FORMATS)} (default: json).",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indentation width (0 = compact JSON).",
    )
    p.add_argument(
        "--exclude-fields",
        dest="exclude_fields",
        default=None,
        help="Comma-separated field names removed from the result at any depth.",
    )


# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into an options dictionary.

    Only values the user actually supplied are included, so defaults stay
    owned by the options schema.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Options overrides subset.
    """
    overrides: Dict[str, Any] = {
        "format": getattr(args, "format", None),
        "indent": getattr(args, "indent", None),
        "exclude_fields": _split_csv(getattr(args, "exclude_fields", None)),
    }

    if args.command != "introspect":
        return overrides

    overrides["mode"] = args.mode
    overrides["metadata_file"] = args.metadata_file
    overrides["path_style"] = args.path_style
    overrides["strip_prefix"] = args.strip_prefix
    overrides["strip_prefixes"] = args.strip_prefixes

    # Flags only ever switch features on
    for flag in (
            "nested", "show_file_paths", "package_summary",
            "include_scripts", "include_dependencies",
    ):
        if getattr(args, flag, False):
            overrides[flag] = True

    return overrides


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of stripped strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
