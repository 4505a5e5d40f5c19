# trainify/text_format.py

"""
Line segmentation for AI-generated plan text.

The language model returns loosely formatted Markdown. This module turns one
plan into a sequence of `LineRecord`s, one per input line, each tagged with a
`LineKind` and stripped of Markdown decoration. Both the interactive block
renderer and the PDF paginator consume these records, so a line looks the same
on screen, in synthesized speech and on paper.

Classification is an ordered table of rules (`CLASSIFICATION_RULES`). The first
rule whose predicate accepts a line builds its record.

Day boundaries are decided by one predicate, `is_day_boundary`. A plan either
counts days by explicit "Day N" markers or, when it has none, by weekday names;
the style is detected once per plan so a "## Day 1" heading followed by a bare
"Monday" line still counts as a single day.
"""

import re
from enum import Enum
from typing import Callable, List, NamedTuple, Optional

from pydantic import BaseModel


class PlanCategory(str, Enum):
    WORKOUT = "workout"
    DIET = "diet"
    MOTIVATION = "motivation"


class LineKind(str, Enum):
    BLANK = "blank"
    HEADING = "heading"
    DAY_HEADER = "day_header"
    ITEM = "item"
    PLAIN_ITEM = "plain_item"
    DESCRIPTION = "description"
    NUMBERED = "numbered"
    BULLET = "bullet"
    QUOTE = "quote"
    PARAGRAPH = "paragraph"


class DayStyle(str, Enum):
    NUMBERED = "numbered"
    WEEKDAY = "weekday"
    NONE = "none"


class LineRecord(BaseModel):
    index: int
    """Zero-based position of the line in the plan text."""

    raw: str
    """The line exactly as received."""

    kind: LineKind

    text: str = ""
    """Cleaned display text."""

    level: Optional[int] = None
    """Heading level, 1 to 3."""

    name: Optional[str] = None
    """Item label, e.g. the exercise or meal name."""

    detail: Optional[str] = None
    """Item details, or the body of a numbered line."""

    marker: Optional[str] = None
    """The list marker of a numbered line, e.g. "1."."""

    is_day_boundary: bool = False

    day: Optional[int] = None
    """1-based day number, set on day boundaries only."""


# --- Patterns ---

HEADING_RE = re.compile(r'^(#{1,3})\s+(.*)$')
DAY_NUMBER_RE = re.compile(r'^day\s+\d+', re.IGNORECASE)
WEEKDAYS = "monday|tuesday|wednesday|thursday|friday|saturday|sunday"
WEEKDAY_RE = re.compile(rf'^({WEEKDAYS})\b', re.IGNORECASE)
BARE_WEEKDAY_RE = re.compile(rf'^({WEEKDAYS})\s*([:\-]|$)', re.IGNORECASE)
MEAL_HEADER_RE = re.compile(r'^(breakfast|lunch|dinner|snack|meal)', re.IGNORECASE)
ITEM_PREFIX_RE = re.compile(r'^-\s+\*\*')
ITEM_RE = re.compile(r'^-\s+\*\*(.+?):\*\*(.+)')
DESCRIPTION_RE = re.compile(r'^\*\*?(description|note):\*\*?\s', re.IGNORECASE)
NUMBERED_RE = re.compile(r'^\d+[.)]')
NUMBERED_SPLIT_RE = re.compile(r'^(\d+[.)])\s*(.+)$')
BULLET_RE = re.compile(r'^[-•*]\s')
BULLET_MARKER_RE = re.compile(r'^[-•*]\s+')
QUOTE_CHARS = "\"'“”‘’"

DECORATION_RE = re.compile(r'[*`_]+')
LEADING_MARKERS_RE = re.compile(r'^[-#\s]+')
WHITESPACE_RE = re.compile(r'\s+')
PRINT_UNSAFE_RE = re.compile(r'[^\w\s.,;:!?()\-]', re.ASCII)

QUOTE_MAX_LENGTH = 150
DAY_CONTENT_LIMIT = 1000


# --- Cleaning ---

def clean_text(text: str) -> str:
    """
    Strips Markdown decoration from a line.

    Removes `*` runs, backticks and underscores, then leading `-`/`#` markers,
    and collapses internal whitespace. Applying it twice gives the same result
    as applying it once.
    """
    text = DECORATION_RE.sub('', text)
    text = LEADING_MARKERS_RE.sub('', text)
    return WHITESPACE_RE.sub(' ', text).strip()


def print_safe(text: str) -> str:
    """Reduces cleaned text to letters, digits and common punctuation for print output."""
    text = PRINT_UNSAFE_RE.sub('', clean_text(text))
    return WHITESPACE_RE.sub(' ', text).strip()


def image_subject(name: str) -> str:
    """Returns the lowercased first comma/colon/dash-delimited token of an item name."""
    return re.split(r'[:\-,]', name)[0].strip().lower()


# --- Day boundaries ---

def _day_marker(trimmed: str) -> Optional[DayStyle]:
    """Returns the day style a candidate line announces, or None for other lines."""
    if HEADING_RE.match(trimmed) or trimmed.startswith("**"):
        cleaned = clean_text(trimmed)
        if DAY_NUMBER_RE.match(cleaned):
            return DayStyle.NUMBERED
        if WEEKDAY_RE.match(cleaned):
            return DayStyle.WEEKDAY
        return None
    if DAY_NUMBER_RE.match(trimmed):
        return DayStyle.NUMBERED
    if BARE_WEEKDAY_RE.match(trimmed):
        return DayStyle.WEEKDAY
    return None


def detect_day_style(lines: List[str]) -> DayStyle:
    """Decides whether a plan counts days by "Day N" markers, by weekday names, or not at all."""
    markers = {_day_marker(line.strip()) for line in lines}
    if DayStyle.NUMBERED in markers:
        return DayStyle.NUMBERED
    if DayStyle.WEEKDAY in markers:
        return DayStyle.WEEKDAY
    return DayStyle.NONE


def is_day_boundary(trimmed: str, style: DayStyle) -> bool:
    """True when the line opens a new logical day under the plan's day style."""
    if style is DayStyle.NONE:
        return False
    return _day_marker(trimmed) is style


# --- Classification rules ---

class LineContext(NamedTuple):
    index: int
    raw: str
    trimmed: str
    category: PlanCategory
    style: DayStyle


class ClassificationRule(NamedTuple):
    name: str
    matches: Callable[[LineContext], bool]
    build: Callable[[LineContext], LineRecord]


def _record(ctx: LineContext, kind: LineKind, **fields) -> LineRecord:
    return LineRecord(index=ctx.index, raw=ctx.raw, kind=kind, **fields)


def _build_heading(ctx: LineContext) -> LineRecord:
    match = HEADING_RE.match(ctx.trimmed)
    return _record(
        ctx,
        LineKind.HEADING,
        text=clean_text(match.group(2)),
        level=len(match.group(1)),
        is_day_boundary=is_day_boundary(ctx.trimmed, ctx.style),
    )


def _build_day_header(ctx: LineContext) -> LineRecord:
    return _record(ctx, LineKind.DAY_HEADER, text=clean_text(ctx.trimmed), is_day_boundary=True)


def _build_meal_header(ctx: LineContext) -> LineRecord:
    return _record(ctx, LineKind.HEADING, text=clean_text(ctx.trimmed), level=3)


def _build_item(ctx: LineContext) -> LineRecord:
    match = ITEM_RE.match(ctx.trimmed)
    if not match:
        return _record(ctx, LineKind.PLAIN_ITEM, text=clean_text(ctx.trimmed))
    name = clean_text(match.group(1))
    detail = clean_text(match.group(2))
    return _record(ctx, LineKind.ITEM, text=f"{name}: {detail}", name=name, detail=detail)


def _build_description(ctx: LineContext) -> LineRecord:
    return _record(ctx, LineKind.DESCRIPTION, text=clean_text(ctx.trimmed))


def _build_numbered(ctx: LineContext) -> LineRecord:
    text = clean_text(ctx.trimmed)
    match = NUMBERED_SPLIT_RE.match(text)
    if match:
        return _record(ctx, LineKind.NUMBERED, text=text, marker=match.group(1), detail=match.group(2))
    return _record(ctx, LineKind.NUMBERED, text=text)


def _build_bullet(ctx: LineContext) -> LineRecord:
    return _record(ctx, LineKind.BULLET, text=clean_text(BULLET_MARKER_RE.sub('', ctx.trimmed)))


def _is_quote(ctx: LineContext) -> bool:
    if ctx.category is not PlanCategory.MOTIVATION:
        return False
    if ctx.trimmed[0] in QUOTE_CHARS:
        return True
    return "quote" in ctx.trimmed.lower() and len(ctx.trimmed) < QUOTE_MAX_LENGTH


def _build_quote(ctx: LineContext) -> LineRecord:
    return _record(ctx, LineKind.QUOTE, text=clean_text(ctx.trimmed.strip(QUOTE_CHARS)))


CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(
        "blank",
        lambda ctx: not ctx.trimmed,
        lambda ctx: _record(ctx, LineKind.BLANK),
    ),
    ClassificationRule(
        "heading",
        lambda ctx: bool(HEADING_RE.match(ctx.trimmed)),
        _build_heading,
    ),
    ClassificationRule(
        "day_header",
        lambda ctx: is_day_boundary(ctx.trimmed, ctx.style),
        _build_day_header,
    ),
    ClassificationRule(
        "meal_header",
        lambda ctx: ctx.category is PlanCategory.DIET and bool(MEAL_HEADER_RE.match(ctx.trimmed)),
        _build_meal_header,
    ),
    ClassificationRule(
        "item",
        lambda ctx: bool(ITEM_PREFIX_RE.match(ctx.trimmed)),
        _build_item,
    ),
    ClassificationRule(
        "description",
        lambda ctx: bool(DESCRIPTION_RE.match(ctx.trimmed)),
        _build_description,
    ),
    ClassificationRule(
        "numbered",
        lambda ctx: bool(NUMBERED_RE.match(ctx.trimmed)),
        _build_numbered,
    ),
    ClassificationRule(
        "bullet",
        lambda ctx: bool(BULLET_RE.match(ctx.trimmed)),
        _build_bullet,
    ),
    ClassificationRule("quote", _is_quote, _build_quote),
    ClassificationRule(
        "paragraph",
        lambda ctx: True,
        lambda ctx: _record(ctx, LineKind.PARAGRAPH, text=clean_text(ctx.trimmed)),
    ),
]


def classify_line(
    line: str,
    index: int = 0,
    category: PlanCategory = PlanCategory.WORKOUT,
    style: DayStyle = DayStyle.NUMBERED,
) -> LineRecord:
    """Classifies a single line with the first matching rule."""
    ctx = LineContext(index=index, raw=line, trimmed=line.strip(), category=PlanCategory(category), style=style)
    for rule in CLASSIFICATION_RULES:
        if rule.matches(ctx):
            return rule.build(ctx)
    raise AssertionError("the paragraph rule accepts every line")


def segment(plan: str, category: PlanCategory = PlanCategory.WORKOUT) -> List[LineRecord]:
    """
    Splits a plan into classified line records.

    Args:
        plan: Raw plan text, possibly empty.
        category: The plan category; enables the quote and meal-header rules.

    Returns:
        Exactly one record per newline-delimited line, blanks included. Day
        boundaries carry a running 1-based day number.
    """
    lines = (plan or "").split('\n')
    style = detect_day_style(lines)
    records: List[LineRecord] = []
    day = 0

    for index, line in enumerate(lines):
        record = classify_line(line, index, category, style)
        if record.is_day_boundary:
            day += 1
            record.day = day
        records.append(record)

    return records


def day_count(records: List[LineRecord]) -> int:
    return sum(1 for record in records if record.is_day_boundary)


def day_content(records: List[LineRecord], boundary: LineRecord) -> str:
    """
    Builds the text read aloud for one day.

    Starts with the day's own title and appends every following non-blank
    line, joined with ". ", until the next day boundary or until the text
    grows past `DAY_CONTENT_LIMIT` characters (checked after appending).
    """
    content = boundary.text + ". "
    for record in records[boundary.index + 1:]:
        if record.kind is LineKind.BLANK:
            continue
        if record.is_day_boundary:
            break
        cleaned = clean_text(record.raw)
        if cleaned:
            content += cleaned + ". "
        if len(content) > DAY_CONTENT_LIMIT:
            break
    return content.strip()
