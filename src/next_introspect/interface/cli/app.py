from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, option resolution
(defaults merged with command-line overrides), pre-flight path checks,
analysis or merge execution, and output delivery. Rendered output goes to
stdout or a file; diagnostics always go to stderr.
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional

from next_introspect.core.formatters import JsonFormatter, get_formatter
from next_introspect.core.services.display import filter_excluded_fields
from next_introspect.core.services.merge import load_result_file, merge_results
from next_introspect.core.services.metadata import parse_metadata_file
from next_introspect.domain.config import DEFAULT_INDENT, get_default_options
from next_introspect.domain.constants import VALID_FORMATS, VALID_MODES, VALID_PATH_STYLES
from next_introspect.domain.errors import IntrospectionError
from next_introspect.infra.fs import normalize_path, write_text_output
from next_introspect.infra.logging import LoggingConfig, configure_logging, get_logger
from next_introspect.interface.cli import args as cli_args
from next_introspect.interface.cli.watch import ProjectWatcher
from next_introspect.introspect import NextIntrospect

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 on analysis/merge failure or invalid option,
             2 on a missing input path, 130 on interrupt.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (stderr; stdout is reserved for output)
    if args.debug:
        log_level = "DEBUG"
    elif args.quiet:
        log_level = "ERROR"
    else:
        log_level = "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Options resolution
    overrides = cli_args.args_to_overrides(args)
    problem = _check_choices(overrides)
    if problem:
        logger.error(problem)
        print(f"ERROR: {problem}", file=sys.stderr)
        return 1
    options = _merge_config(get_default_options(), overrides)

    try:
        if args.command == "merge":
            return _run_merge(args, options)
        return _run_introspect(args, options)
    except KeyboardInterrupt:
        print("Interrupted by user.", file=sys.stderr)
        return 130
    except IntrospectionError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.critical(f"Unexpected failure: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_introspect(args: argparse.Namespace, options: Dict[str, Any]) -> int:
    project_path = normalize_path(args.project_path)
    if not os.path.exists(project_path):
        msg = f"Project path does not exist: {project_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    intro = NextIntrospect(project_path, options)

    def _render() -> None:
        intro.reanalyze()
        _emit(intro.render_text(), args.output, args.quiet)

    _render()
    if not args.watch:
        return 0

    def _safe_render() -> None:
        try:
            _render()
        except (IntrospectionError, OSError) as e:
            logger.error(f"Re-analysis failed: {e}")

    watcher = ProjectWatcher(project_path, _safe_render)
    try:
        watcher.run()
    except KeyboardInterrupt:
        logger.info("Watch mode stopped")
    finally:
        watcher.stop()
    return 0


def _run_merge(args: argparse.Namespace, options: Dict[str, Any]) -> int:
    for path in (args.json_file, args.metadata_file):
        if not os.path.isfile(path):
            msg = f"File does not exist: {path}"
            logger.error(msg)
            print(f"ERROR: {msg}", file=sys.stderr)
            return 2

    existing = load_result_file(args.json_file)
    metadata = parse_metadata_file(args.metadata_file)
    merged = merge_results(existing, metadata, args.json_file)
    merged = filter_excluded_fields(merged, options["exclude_fields"])

    formatter = get_formatter(options["format"], indent=options["indent"])
    output = formatter.format(merged)
    if not isinstance(output, str):
        output = JsonFormatter(indent=options["indent"]).format(output)

    _emit(output, args.output, args.quiet)
    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge supplied overrides into the base options.

    Unknown keys and None values are ignored.

    Args:
        base: Default options.
        overrides: Values from the command line.

    Returns:
        Dict[str, Any]: Merged options.
    """
    out = dict(base)
    keys_to_merge = [
        "mode", "format", "indent", "nested", "exclude_fields", "strip_prefixes",
        "path_style", "strip_prefix", "show_file_paths", "metadata_file",
        "package_summary", "include_scripts", "include_dependencies",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    if out.get("indent") is None:
        out["indent"] = DEFAULT_INDENT
    return out


def _check_choices(overrides: Dict[str, Any]) -> Optional[str]:
    """Return an error message for the first out-of-set enumerated value."""
    checks = (
        ("format", VALID_FORMATS),
        ("mode", VALID_MODES),
        ("path_style", VALID_PATH_STYLES),
    )
    for key, allowed in checks:
        value = overrides.get(key)
        if value is not None and value not in allowed:
            return f"Invalid {key.replace('_', ' ')}: {value}. Use one of {', '.join(allowed)}"
    return None

# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------

def _emit(text: str, output_path: Optional[str], quiet: bool) -> None:
    if output_path:
        written = write_text_output(output_path, text)
        if not quiet:
            print(f"Output written to {written}", file=sys.stderr)
        return
    sys.stdout.write(text if text.endswith("\n") else text + "\n")
    sys.stdout.flush()

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
