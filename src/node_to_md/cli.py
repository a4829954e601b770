"""
node_to_md: concatenate a JavaScript/TypeScript project into one Markdown file for an LLM.

Overview
--------
Run from a project root, the tool walks the tree (skipping `.git`,
`node_modules` and build output directories), keeps the TypeScript,
JavaScript, component-framework and style files, and writes:

1) `src/<project>.md`: every kept file as a `# path (language)` heading
   followed by a fenced code block, grouped by extension.

2) `src/custom_instructions.txt`: a short prompt for a review assistant,
   opening with the first prose line of `README.md`.

Styles (`--no-styles`) and type definitions (`--no-types`) can be left out;
the latter also strips interfaces, aliases, enums and inline annotations
from `.ts`/`.tsx` files. Files matched by `.gitignore` are skipped unless
`--include-ignored` is given.

Usage
-----
    node-to-md --no-styles
    node-to-md --exclude "test/**,*.spec.*"
    node-to-md --no-types --include-ignored
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from node_to_md import __version__
from node_to_md.config import FilterConfig
from node_to_md.exceptions import NodeToMdError
from node_to_md.logging import logger, setup_logging
from node_to_md.pipeline import ExportResult, export_project
from node_to_md.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse command-line options into `Settings`.

    Args:
        argv (Sequence[str] | None): arguments, defaults to `sys.argv[1:]`

    Returns:
        Settings: the parsed options
    """
    p = argparse.ArgumentParser(
        prog="node-to-md",
        description="Export a JavaScript/TypeScript project to a single Markdown file for LLM review.",
        epilog='Examples: node-to-md --no-styles | node-to-md --exclude "test/**,*.spec.*"',
    )
    p.add_argument("--no-styles", action="store_true", help="Exclude style definitions.")
    p.add_argument("--no-types", action="store_true", help="Exclude type definitions.")
    p.add_argument(
        "-e",
        "--exclude",
        type=str,
        default="",
        help='Exclude files/directories using comma-separated glob patterns (e.g. "test/**,*.spec.*").',
    )
    p.add_argument(
        "-i",
        "--include-ignored",
        action="store_true",
        help="Include files that match .gitignore patterns.",
    )
    p.add_argument("--repo", type=Path, default=Path(), help="Project root (default: current directory).")
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = p.parse_args(argv)
    return Settings(**vars(args))


def format_summary(result: ExportResult, config: FilterConfig) -> str:
    """Render the human-readable run summary.

    Returns:
        str: the summary text
    """
    lines = [
        f"All files have been compiled into {result.markdown_path}",
        f"Custom instructions have been created at {result.instructions_path}",
        f"Styles {'excluded' if config.exclude_styles else 'included'} in the output",
        f"Type definitions {'excluded' if config.exclude_types else 'included'} in the output",
    ]
    if config.exclude_globs:
        lines.append(f"Excluded patterns: {', '.join(config.exclude_globs)}")
    if config.include_ignored:
        lines.append("Files matching .gitignore included")
    lines.extend(["", "File statistics:"])
    lines.extend(f"{ext}: {count} files" for ext, count in result.summary.ordered())
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the export.

    Returns:
        int: process exit status, 0 on success and 1 on any export error
    """
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    repo = Path(settings.repo).resolve()

    try:
        config = FilterConfig.from_settings(settings)
        result = export_project(repo, config)
    except NodeToMdError as e:
        logger.error("export_failed", repo=str(repo), error=str(e), kind=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_summary(result, config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
