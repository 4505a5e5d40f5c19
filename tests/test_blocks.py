"""Tests for rendering plans into display blocks.

Tests cover:
- The keyed example workout: item keys, day key and spoken content
- Purity of render_blocks with respect to the action state
- Category rules: images only for workout and diet items, listen only for workout days
- Action state reflected on blocks
- Markdown output for the Gradio view
"""

from conftest import EXAMPLE_WORKOUT
from trainify.action_state import (
    ActionState,
    ImageReady,
    ImageRequested,
    PlaybackRequested,
    PlaybackStarted,
    reduce,
)
from trainify.blocks import (
    SPACER,
    blocks_to_markdown,
    content_blocks,
    day_key,
    find_block,
    item_key,
    render_blocks,
)
from trainify.text_format import PlanCategory


def test_example_workout_keys_and_actions():
    blocks = render_blocks(EXAMPLE_WORKOUT, PlanCategory.WORKOUT)
    day, squats, lunges = content_blocks(blocks)

    assert day.action == "listen"
    assert day.action_key == "day-1"
    assert day.day == 1
    assert day.spoken_content == "Day 1: Legs. Squats: 3x10 (60s). Lunges: 3x12 (45s)."

    assert (squats.action_key, lunges.action_key) == ("workout-1", "workout-2")
    assert squats.action == "image"
    assert squats.name == "Squats"
    assert squats.detail == "3x10 (60s)"
    assert squats.image_prompt == "squats"
    assert squats.image_type == "exercise"
    assert squats.accent == "primary"


def test_key_helpers():
    assert item_key(PlanCategory.DIET, 4) == "diet-4"
    assert item_key("workout", 0) == "workout-0"
    assert day_key(3) == "day-3"


def test_render_is_pure():
    state = reduce(ActionState(), ImageReady("workout-1", "https://img.example/squats.png"))
    snapshot = ActionState(images=dict(state.images), audio=dict(state.audio), generation=state.generation)

    first = render_blocks(EXAMPLE_WORKOUT, PlanCategory.WORKOUT, state)
    second = render_blocks(EXAMPLE_WORKOUT, PlanCategory.WORKOUT, state)

    assert first == second
    assert state == snapshot


def test_blank_lines_become_spacers():
    blocks = render_blocks("First\n\nSecond", PlanCategory.MOTIVATION)
    assert [block.kind for block in blocks] == ["paragraph", SPACER, "paragraph"]
    assert len(content_blocks(blocks)) == 2


def test_state_is_reflected_on_blocks():
    state = ActionState()
    state = reduce(state, ImageRequested("workout-2"))
    state = reduce(state, ImageReady("workout-1", "https://img.example/squats.png"))
    state = reduce(state, PlaybackStarted("day-1"))

    blocks = render_blocks(EXAMPLE_WORKOUT, PlanCategory.WORKOUT, state)

    assert find_block(blocks, "workout-1").image_url == "https://img.example/squats.png"
    assert find_block(blocks, "workout-2").generating
    assert find_block(blocks, "day-1").playing
    assert find_block(blocks, "workout-9") is None


def test_loading_day_is_reflected_on_its_block():
    state = reduce(ActionState(), PlaybackRequested("day-1"))
    block = find_block(render_blocks(EXAMPLE_WORKOUT, PlanCategory.WORKOUT, state), "day-1")

    assert block.loading
    assert not block.playing


def test_diet_items_get_meal_images_and_meal_headers():
    blocks = render_blocks("Breakfast\n- **Oatmeal:** 1 cup with berries", PlanCategory.DIET)
    header, item = blocks

    assert header.kind == "heading"
    assert header.level == 3
    assert item.action_key == "diet-1"
    assert item.image_type == "meal"
    assert item.accent == "secondary"


def test_listen_is_only_offered_for_workout_days():
    diet = render_blocks("## Day 1\n- **Oatmeal:** 1 cup", PlanCategory.DIET)
    assert all(block.action != "listen" for block in diet)


def test_motivation_items_have_no_actions():
    blocks = render_blocks("- **Mindset:** Show up every day", PlanCategory.MOTIVATION)
    assert blocks[0].kind == "item"
    assert blocks[0].action is None
    assert blocks[0].action_key is None
    assert blocks[0].accent == "accent"


def test_blocks_to_markdown():
    state = reduce(ActionState(), ImageReady("workout-1", "https://img.example/squats.png"))
    markdown = blocks_to_markdown(render_blocks(EXAMPLE_WORKOUT, PlanCategory.WORKOUT, state))

    assert markdown.startswith("## Day 1: Legs")
    assert "- **Squats:** 3x10 (60s)" in markdown
    assert "![Squats](https://img.example/squats.png)" in markdown
    assert "- **Lunges:** 3x12 (45s)" in markdown


def test_quotes_render_as_blockquotes():
    markdown = blocks_to_markdown(render_blocks('"Every rep counts."', PlanCategory.MOTIVATION))
    assert markdown == "> Every rep counts."
