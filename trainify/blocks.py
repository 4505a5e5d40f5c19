# trainify/blocks.py

"""
Turns segmented plan text into display blocks.

`render_blocks` is a pure function of the plan text, its category and the
session's `ActionState`: calling it twice with the same inputs gives equal
output, and the state is never modified. Blocks that support an asynchronous
action carry an `action_key` so results land on the right block across
re-renders:

- items in workout and diet plans: `"<category>-<line index>"`, image action
- day boundaries in workout plans: `"day-<n>"`, listen action with the
  day's spoken content
"""

from typing import List, Literal, Optional

from pydantic import BaseModel

from trainify.action_state import ActionState
from trainify.text_format import (
    LineKind,
    LineRecord,
    PlanCategory,
    day_content,
    image_subject,
    segment,
)


ACCENTS = {
    PlanCategory.WORKOUT: "primary",
    PlanCategory.DIET: "secondary",
    PlanCategory.MOTIVATION: "accent",
}

IMAGE_TYPES = {
    PlanCategory.WORKOUT: "exercise",
    PlanCategory.DIET: "meal",
}

SPACER = "spacer"


class RenderBlock(BaseModel):
    kind: str
    """A `LineKind` value, or "spacer" for blank lines."""

    text: str = ""
    level: Optional[int] = None
    name: Optional[str] = None
    detail: Optional[str] = None
    marker: Optional[str] = None

    action_key: Optional[str] = None
    action: Optional[Literal["image", "listen"]] = None
    day: Optional[int] = None
    spoken_content: Optional[str] = None
    image_prompt: Optional[str] = None
    image_type: Optional[str] = None

    image_url: Optional[str] = None
    image_error: Optional[str] = None
    generating: bool = False
    loading: bool = False
    playing: bool = False

    accent: str = "primary"


def item_key(category: PlanCategory, index: int) -> str:
    return f"{PlanCategory(category).value}-{index}"


def day_key(day: int) -> str:
    return f"day-{day}"


def _block(record: LineRecord, records: List[LineRecord], category: PlanCategory, state: ActionState) -> RenderBlock:
    if record.kind is LineKind.BLANK:
        return RenderBlock(kind=SPACER, accent=ACCENTS[category])

    block = RenderBlock(
        kind=record.kind.value,
        text=record.text,
        level=record.level,
        name=record.name,
        detail=record.detail,
        marker=record.marker,
        accent=ACCENTS[category],
    )

    if record.is_day_boundary and category is PlanCategory.WORKOUT:
        key = day_key(record.day)
        block.action_key = key
        block.action = "listen"
        block.day = record.day
        block.spoken_content = day_content(records, record)
        block.playing = state.is_playing(key)
        block.loading = state.is_loading(key)

    elif record.kind is LineKind.ITEM and category in IMAGE_TYPES:
        key = item_key(category, record.index)
        entry = state.image(key)
        block.action_key = key
        block.action = "image"
        block.image_prompt = image_subject(record.name)
        block.image_type = IMAGE_TYPES[category]
        block.image_url = entry.url
        block.image_error = entry.error
        block.generating = state.is_generating(key)

    return block


def render_blocks(
    plan: str,
    category: PlanCategory,
    state: Optional[ActionState] = None,
) -> List[RenderBlock]:
    """
    Renders one plan into display blocks, one per input line.

    Args:
        plan: Raw plan text.
        category: Which plan this is; selects accents and available actions.
        state: Current action state; defaults to an empty one.

    Returns:
        The blocks in input order. Blank lines become spacer blocks.
    """
    category = PlanCategory(category)
    state = state or ActionState()
    records = segment(plan, category)
    return [_block(record, records, category, state) for record in records]


def content_blocks(blocks: List[RenderBlock]) -> List[RenderBlock]:
    return [block for block in blocks if block.kind != SPACER]


def find_block(blocks: List[RenderBlock], action_key: str) -> Optional[RenderBlock]:
    return next((block for block in blocks if block.action_key == action_key), None)


def _markdown(block: RenderBlock) -> str:
    kind = block.kind
    if kind == LineKind.HEADING.value:
        return f"{'#' * (block.level or 2)} {block.text}"
    if kind == LineKind.DAY_HEADER.value:
        return f"### {block.text}"
    if kind == LineKind.ITEM.value:
        line = f"- **{block.name}:** {block.detail}"
        if block.image_url:
            line += f"\n\n  ![{block.name}]({block.image_url})"
        return line
    if kind == LineKind.PLAIN_ITEM.value:
        return f"- {block.text}"
    if kind == LineKind.DESCRIPTION.value:
        return f"  *{block.text}*"
    if kind == LineKind.BULLET.value:
        return f"- {block.text}"
    if kind == LineKind.QUOTE.value:
        return f"> {block.text}"
    return block.text


def blocks_to_markdown(blocks: List[RenderBlock]) -> str:
    """Joins blocks back into clean Markdown for display; spacers are dropped."""
    return "\n\n".join(_markdown(block) for block in content_blocks(blocks))
