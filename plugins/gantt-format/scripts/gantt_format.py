#!/usr/bin/env python3
"""
gantt_format.py - Reformat Mermaid Gantt chart files

Usage:
    gantt_format.py <file_path> [output_path] [options]

Examples:
    gantt_format.py roadmap.mmd
    gantt_format.py roadmap.mmd roadmap.formatted.mmd
    gantt_format.py roadmap.mmd --dry-run
    gantt_format.py roadmap.mmd --check

This script will:
- Indent keyword lines, section headers and tasks consistently
- Put exactly one blank line before every section
- Align task titles, tags, ids, start and end values into columns
- Keep commented-out tasks aligned with the others
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from gantt_formatting import join_lines, render_document
from gantt_parser import classify_lines, compute_column_widths

log = logging.getLogger(__name__)


class GanttFormatError(Exception):
    """Base class for failures at the file boundary."""


class InputReadError(GanttFormatError):
    """The source file does not exist or cannot be read."""


class OutputWriteError(GanttFormatError):
    """The destination file cannot be created or written."""


def read_source(file_path: Path) -> str:
    """
    Read a chart source file as UTF-8 text.

    Raises:
        InputReadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return file_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"Could not read file {file_path}: {e}") from e


def write_output(file_path: Path, content: str) -> None:
    """
    Create or fully overwrite a file with the given content.

    Raises:
        OutputWriteError: If the file cannot be created or written
    """
    try:
        # newline='' keeps "\n" on every platform
        with open(file_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
    except OSError as e:
        raise OutputWriteError(f"Could not write file {file_path}: {e}") from e


def format_file(file_path: Path, destination: Optional[Path] = None, dry_run: bool = False) -> dict:
    """
    Reformat a Gantt chart file.

    Args:
        file_path: Path to the chart source
        destination: Where to write the result (default: rewrite file_path)
        dry_run: If True, don't write anything

    Returns:
        Dict with formatting results

    Raises:
        InputReadError: If the source cannot be read
        OutputWriteError: If the destination cannot be written
    """
    destination = destination or file_path
    content = read_source(file_path)
    lines = content.splitlines()

    classified = classify_lines(lines)
    widths = compute_column_widths(lines)
    formatted = join_lines(render_document(classified, widths))

    result = {
        "status": "success",
        "file": str(file_path),
        "destination": str(destination),
        "changed": formatted != content,
        "task_count": sum(1 for line in classified if line.is_task),
        "section_count": sum(1 for line in classified if line.kind == "section"),
        "widths": widths,
        "content": formatted,
        "dry_run": dry_run,
    }
    log.debug(
        "%s: %d task(s), %d section(s)",
        file_path, result["task_count"], result["section_count"],
    )

    if dry_run:
        result["written"] = False
    else:
        write_output(destination, formatted)
        result["written"] = True
        log.debug("Wrote %s", destination)

    return result


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Reformat Mermaid Gantt chart files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument('file', type=Path, help='Path to the Gantt chart source')
    parser.add_argument('output', type=Path, nargs='?',
                        help='Write the result here instead of editing the file in place')
    parser.add_argument('--dry-run', action='store_true',
                        help='Print the formatted chart without modifying any file')
    parser.add_argument('--check', action='store_true',
                        help='Exit with status 1 if the file is not already formatted')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = format_file(args.file, args.output, dry_run=args.dry_run or args.check)
    except GanttFormatError as e:
        log.error("%s", e)
        sys.exit(1)

    if args.check:
        if result['changed']:
            print(f"Would reformat {result['file']}")
            sys.exit(1)
        print(f"{result['file']} already formatted")
    elif args.dry_run:
        print(result['content'], end='')
    else:
        print(f"Formatted {result['file']} -> {result['destination']}"
              if result['destination'] != result['file']
              else f"Formatted {result['file']}")


if __name__ == '__main__':
    main()
