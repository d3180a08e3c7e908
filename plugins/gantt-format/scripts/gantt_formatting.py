#!/usr/bin/env python3
"""
Canonical rendering of Mermaid Gantt chart lines.

This module is the single source of truth for how each kind of line is laid
out. Example:

    gantt                                                 ->  gantt
        title A Gantt Diagram                             ->    title A Gantt Diagram
        dateFormat YYYY-MM-DD                             ->    dateFormat YYYY-MM-DD
        section Section                                   ->
            A task          :done, a1, 2014-01-01, 30d    ->    section Section
            A milestone : milestone, after a1             ->      A task       : done  ,                     a1,  2014-01-01,  30d
                                                          ->      A milestone  :                 milestone,                    after a1

Task columns:
- title, padded to the longest title in the document
- three fixed-width tag columns: active/done, crit, milestone
- id, start and end, each padded to the longest value in the document
"""

from typing import List

from gantt_models import (
    COMMENT_PREFIX,
    CRIT_COLUMN_WIDTH,
    MILESTONE_COLUMN_WIDTH,
    SECTION_KEYWORD,
    STATUS_COLUMN_WIDTH,
    ClassifiedLine,
    ColumnWidths,
    TaskMetadata,
)
from gantt_parser import classify_lines, compute_column_widths, split_metadata

KEYWORD_INDENT = "  "
SECTION_INDENT = "  "
TASK_INDENT = "    "
# Same width as TASK_INDENT so commented tasks keep their columns
COMMENTED_TASK_PREFIX = f"{COMMENT_PREFIX}  "

TITLE_SEPARATOR = "  : "
ITEM_SEPARATOR = ",  "


def pad(text: str, width: int) -> str:
    """Right-pad text with spaces to width characters (never truncates)."""
    return text.ljust(width)


def format_tags(metadata: TaskMetadata) -> str:
    """
    Format the tag block of a task.

    Always TAG_BLOCK_WIDTH characters: missing tags are replaced by spaces
    so the columns after them stay aligned.

    Args:
        metadata: Split task metadata

    Returns:
        Tag block string
    """
    status = metadata.status_tag
    if status:
        # "active,  " / "done  ,  "
        block = f"{status.ljust(len('active'))}{ITEM_SEPARATOR}"
    else:
        block = " " * STATUS_COLUMN_WIDTH

    if 'crit' in metadata.tags:
        block += f"crit{ITEM_SEPARATOR}"
    else:
        block += " " * CRIT_COLUMN_WIDTH

    if 'milestone' in metadata.tags:
        block += f"milestone{ITEM_SEPARATOR}"
    else:
        block += " " * MILESTONE_COLUMN_WIDTH

    return block


def format_items(metadata: TaskMetadata, widths: ColumnWidths) -> str:
    """
    Format the user defined items (id, start, end) of a task.

    Columns a task does not supply are filled with spaces of the same width.
    Start and end widths come from the document rather than dateFormat, since
    `after <id>` and `until <id>` references can be longer than a date.

    Args:
        metadata: Split task metadata
        widths: Column widths of the whole document

    Returns:
        Items string (empty when the task has no items)
    """
    items = metadata.items
    blank_id = " " * widths.id
    blank_start = " " * widths.start

    if len(items) == 3:
        task_id, start, end = items
        return (
            f"{pad(task_id, widths.id)}{ITEM_SEPARATOR}"
            f"{pad(start, widths.start)}{ITEM_SEPARATOR}"
            f"{pad(end, widths.end)}"
        )
    elif len(items) == 2:
        start, end = items
        return f"{blank_id}   {pad(start, widths.start)}{ITEM_SEPARATOR}{pad(end, widths.end)}"
    elif len(items) == 1:
        return f"{blank_id}   {blank_start}   {pad(items[0], widths.end)}"
    elif not items:
        return ""

    # Not valid Mermaid; keep the content rather than guess at columns
    return ITEM_SEPARATOR.join(items)


def format_task_line(line: ClassifiedLine, widths: ColumnWidths) -> str:
    """
    Format a task line.

    Commented-out tasks keep their comment prefix in place of the indent,
    so they line up with the other tasks.
    """
    metadata = split_metadata(line.metadata or "")
    task_line = (
        f"{pad(line.title, widths.title)}{TITLE_SEPARATOR}"
        f"{format_tags(metadata)}{format_items(metadata, widths)}"
    )
    prefix = COMMENTED_TASK_PREFIX if line.commented else TASK_INDENT
    return f"{prefix}{task_line}"


def render_line(line: ClassifiedLine, widths: ColumnWidths) -> List[str]:
    """
    Render a classified line into zero or more output lines.

    Args:
        line: Classified line
        widths: Column widths of the whole document

    Returns:
        Output lines (empty for suppressed blank lines)
    """
    if line.kind == "keyword":
        return [f"{KEYWORD_INDENT}{line.text}"]
    elif line.kind == "commented-section":
        return ["", line.text]
    elif line.kind == "section":
        return ["", f"{SECTION_INDENT}{SECTION_KEYWORD} {line.title}".rstrip()]
    elif line.kind == "task":
        return [format_task_line(line, widths)]
    elif line.kind == "blank":
        return [""]
    elif line.kind == "skip":
        return []

    # title, comment and anything unrecognised pass through as-is
    return [line.text]


def render_document(classified: List[ClassifiedLine], widths: ColumnWidths) -> List[str]:
    """
    Render an already classified document.

    Trailing blank lines are dropped before the final empty line is added.

    Args:
        classified: Every line of the document, classified in order
        widths: Column widths of the whole document

    Returns:
        Formatted lines, ending with exactly one empty line
    """
    end = len(classified)
    while end and classified[end - 1].kind in ("blank", "skip"):
        end -= 1

    new_lines = []
    for line in classified[:end]:
        new_lines.extend(render_line(line, widths))
    new_lines.append("")
    return new_lines


def join_lines(new_lines: List[str]) -> str:
    """Join formatted lines into file text; never empty, always newline-terminated."""
    return "\n".join(new_lines) or "\n"


def format_lines(lines: List[str]) -> List[str]:
    """
    Format a whole document.

    Column widths are computed over every task first, so a task may be
    padded to fit one that appears later in the file.

    Args:
        lines: Document lines

    Returns:
        Formatted lines, ending with exactly one empty line
    """
    return render_document(classify_lines(lines), compute_column_widths(lines))


def format_content(content: str) -> str:
    """Format document text and return the new text."""
    return join_lines(format_lines(content.splitlines()))
