#!/usr/bin/env python3
"""
Core data models for Mermaid Gantt formatting.

These dataclasses are shared by the parser and the formatter. None of them
hold state between runs; everything is derived afresh from the input text.
"""

from dataclasses import dataclass, field, replace
from typing import Literal, Optional, Tuple


# Diagram type declaration. Always the first meaningful line of a chart.
TITLE_KEYWORD = 'gantt'

COMMENT_PREFIX = '%%'
SECTION_KEYWORD = 'section'

# Configuration keywords that may appear at the top of a gantt chart or elsewhere.
# Not exhaustive; YAML frontmatter config is not handled.
GANTT_KEYWORDS: Tuple[str, ...] = (
    'axisFormat',
    'barGap',
    'barHeight',
    'bottomMarginAdj',
    'dateFormat',
    'displayMode',
    'excludes',
    'fontSize',
    'gantt',
    'gridLineStartPadding',
    'leftPadding',
    'mirrorActor',
    'numberSectionStyles',
    'rightPadding',
    'sectionFontSize',
    'tickInterval',
    'title',
    'titleTopMargin',
    'todayMarker',
    'topAxis',
    'topPadding',
    'weekday',
    'weekend',
)

# Status tags a task may carry before its user defined items
TASK_TAGS = frozenset({'done', 'active', 'crit', 'milestone'})

# Fixed widths of the three tag sub-columns (text plus trailing ",  ")
STATUS_COLUMN_WIDTH = 9
CRIT_COLUMN_WIDTH = 7
MILESTONE_COLUMN_WIDTH = 12
TAG_BLOCK_WIDTH = STATUS_COLUMN_WIDTH + CRIT_COLUMN_WIDTH + MILESTONE_COLUMN_WIDTH


LineKind = Literal[
    "title",
    "keyword",
    "comment",
    "commented-section",
    "section",
    "task",
    "blank",
    "skip",
    "other",
]


@dataclass(frozen=True)
class TaskMetadata:
    """
    Decomposed metadata of a task line (everything after the first colon).

    Items are the user defined items (udis), interpreted by count:
    1 item -> [end], 2 items -> [start, end], 3 items -> [id, start, end].
    They are opaque strings: dates, durations, `after <id>` references.
    """

    tags: frozenset = field(default_factory=frozenset)
    items: Tuple[str, ...] = ()

    @property
    def task_id(self) -> Optional[str]:
        return self.items[0] if len(self.items) == 3 else None

    @property
    def start(self) -> Optional[str]:
        if len(self.items) == 3:
            return self.items[1]
        if len(self.items) == 2:
            return self.items[0]
        return None

    @property
    def end(self) -> Optional[str]:
        if 1 <= len(self.items) <= 3:
            return self.items[-1]
        return None

    @property
    def status_tag(self) -> Optional[str]:
        """The tag shown in the status column; active wins over done."""
        if 'active' in self.tags:
            return 'active'
        if 'done' in self.tags:
            return 'done'
        return None


@dataclass(frozen=True)
class ColumnWidths:
    """Maximum character counts of each task column across a document."""

    title: int = 0
    id: int = 0
    start: int = 0
    end: int = 0

    def widen(self, title: str, metadata: TaskMetadata) -> 'ColumnWidths':
        """Return widths that also fit the given task."""
        def _fit(current: int, value: Optional[str]) -> int:
            return current if value is None else max(current, len(value))

        return replace(
            self,
            title=_fit(self.title, title),
            id=_fit(self.id, metadata.task_id),
            start=_fit(self.start, metadata.start),
            end=_fit(self.end, metadata.end),
        )


@dataclass
class ClassifiedLine:
    """One trimmed input line tagged with its category."""

    kind: LineKind
    text: str
    title: Optional[str] = None  # Section or task title
    metadata: Optional[str] = None  # Raw text after a task's first colon
    commented: bool = False  # Task hidden behind a %% comment prefix

    @property
    def is_task(self) -> bool:
        return self.kind == "task"

    @property
    def starts_section(self) -> bool:
        """True for section headers, commented-out or not."""
        return self.kind in ("section", "commented-section")
