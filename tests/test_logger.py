"""Tests for the logger configuration.

Tests cover:
- Image and playback records carry the action key they concern
- Records logged without a key show the placeholder
"""

from typing import List

import pytest
from loguru import logger

from trainify.logger import NO_ACTION_KEY, setup_logger
from trainify.plan_manager import PlanManager


@pytest.fixture
def records() -> List[str]:
    """Lines written by a sink that prints the action key before each message."""
    setup_logger(level="DEBUG")
    lines: List[str] = []
    sink_id = logger.add(lambda message: lines.append(str(message).strip()), format="{extra[action_key]} {message}")
    yield lines
    logger.remove(sink_id)


async def test_image_records_carry_the_item_key(manager: PlanManager, records: List[str]):
    await manager.generate_image("workout-1", "squats")
    assert "workout-1 Image ready" in records


async def test_playback_records_carry_the_day_key(manager: PlanManager, records: List[str]):
    await manager.toggle_playback("day-2", "Day 2.")
    manager.playback.stop("day-2")

    assert "day-2 Playing" in records
    assert "day-2 Stopped" in records


def test_unbound_records_use_the_placeholder(records: List[str]):
    logger.info("Plain message")
    assert f"{NO_ACTION_KEY} Plain message" in records
