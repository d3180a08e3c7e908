#!/usr/bin/env python3
"""
Line classifier for Mermaid Gantt chart sources.

Main API:
- classify_lines(lines) -> List[ClassifiedLine]
- compute_column_widths(lines) -> ColumnWidths
- split_metadata(metadata) -> TaskMetadata

Classification is a pure function of a line's content, with one exception:
a blank line is suppressed when the next non-blank line opens a section,
so that the section's own leading blank line is never doubled.

Mermaid Gantt syntax: https://mermaid.js.org/syntax/gantt.html
"""

import logging
import re
from typing import Iterable, List, Optional

from gantt_models import (
    COMMENT_PREFIX,
    GANTT_KEYWORDS,
    SECTION_KEYWORD,
    TASK_TAGS,
    TITLE_KEYWORD,
    ClassifiedLine,
    ColumnWidths,
    TaskMetadata,
)

log = logging.getLogger(__name__)

_SECTION_PATTERN = re.compile(rf'\b{SECTION_KEYWORD}\b')


def split_metadata(metadata: str, tags: frozenset = TASK_TAGS) -> TaskMetadata:
    """
    Split a task's metadata into status tags and user defined items.

    Tag-ness is an exact membership test, independent of position, even
    though Mermaid expects tags to come first.

    Args:
        metadata: Text after the first colon of a task line
        tags: Tag vocabulary

    Returns:
        TaskMetadata with the tag set and the ordered remaining items
    """
    tokens = [token.strip() for token in metadata.split(',')]
    tokens = [token for token in tokens if token]

    return TaskMetadata(
        tags=frozenset(token for token in tokens if token in tags),
        items=tuple(token for token in tokens if token not in tags),
    )


def _is_keyword(stripped: str) -> bool:
    return any(stripped.startswith(keyword) for keyword in GANTT_KEYWORDS)


def classify_line(line: str, next_line: Optional[str] = None) -> ClassifiedLine:
    """
    Classify a single line.

    Rules are checked in a fixed order since categories overlap (a keyword
    line with a colon is not a task, a commented section is not a comment).

    Args:
        line: Raw or trimmed line
        next_line: Next non-blank line, used only to suppress blank lines
            directly before a section

    Returns:
        ClassifiedLine for the trimmed line
    """
    stripped = line.strip()

    if stripped.startswith(TITLE_KEYWORD):
        return ClassifiedLine("title", stripped)

    if _is_keyword(stripped):
        return ClassifiedLine("keyword", stripped)

    is_comment = stripped.startswith(COMMENT_PREFIX)
    if is_comment and _SECTION_PATTERN.search(stripped):
        return ClassifiedLine("commented-section", stripped)
    if is_comment and ':' not in stripped:
        return ClassifiedLine("comment", stripped)

    if not stripped:
        if next_line is not None and classify_line(next_line).starts_section:
            return ClassifiedLine("skip", stripped)
        return ClassifiedLine("blank", stripped)

    section = _SECTION_PATTERN.search(stripped)
    if section:
        return ClassifiedLine("section", stripped, title=stripped[section.end():].strip())

    if ':' in stripped:
        body = stripped[len(COMMENT_PREFIX):] if is_comment else stripped
        title, _, metadata = body.partition(':')
        return ClassifiedLine(
            "task",
            stripped,
            title=title.strip(),
            metadata=metadata.strip(),
            commented=is_comment,
        )

    return ClassifiedLine("other", stripped)


def classify_lines(lines: Iterable[str]) -> List[ClassifiedLine]:
    """
    Classify every line of a document in order.

    Walks the document backwards so each line knows the next non-blank
    line after it; a run of blank lines before a section collapses.
    """
    classified = []
    upcoming = None
    for line in reversed([line.strip() for line in lines]):
        classified.append(classify_line(line, upcoming))
        if line:
            upcoming = line
    classified.reverse()
    return classified


def compute_column_widths(lines: Iterable[str]) -> ColumnWidths:
    """
    Compute the column widths of all task lines in a document.

    Commented-out tasks count too, so they share the colon column. Widths
    are measured in characters (code points), not bytes.

    Args:
        lines: Document lines, raw or trimmed

    Returns:
        ColumnWidths; columns no task supplies stay at 0
    """
    widths = ColumnWidths()
    for line in lines:
        classified = classify_line(line)
        if not classified.is_task:
            continue
        widths = widths.widen(classified.title, split_metadata(classified.metadata))

    log.debug("Column widths: %s", widths)
    return widths
