"""Tests for the Listen/Stop playback controller.

Tests cover:
- Starting playback synthesizes once and marks the key playing
- Starting a second day stops the first
- Stopping never calls the synthesizer
- Synthesis failure leaves the key failed and re-raises
- Clips finishing after a plan reset are discarded
- Requests mark the key loading before synthesis; duplicates are ignored
- Clips for a request superseded by another day are discarded
"""

from typing import Optional

import pytest

from conftest import FakeSynthesizer
from trainify.action_state import ActionStore, AudioStatus, PlanReset
from trainify.errors import SpeechError
from trainify.playback import PlaybackController
from trainify.speech import AudioClip


@pytest.fixture
def store() -> ActionStore:
    return ActionStore()


@pytest.fixture
def controller(synthesizer: FakeSynthesizer, store: ActionStore) -> PlaybackController:
    """Controller backed by the recording synthesizer."""
    return PlaybackController(synthesizer, store)


async def test_toggle_starts_playback(controller: PlaybackController, synthesizer: FakeSynthesizer):
    clip = await controller.toggle("day-1", "Day 1: Legs.")

    assert clip is not None
    assert clip.audio == b"ID3-fake-mp3"
    assert controller.active_key == "day-1"
    assert controller.clip("day-1") is clip
    assert synthesizer.calls == ["Day 1: Legs."]


async def test_only_one_key_plays_at_a_time(controller: PlaybackController, store: ActionStore):
    await controller.toggle("day-1", "Day 1.")
    await controller.toggle("day-2", "Day 2.")

    assert store.state.playing_keys() == ["day-2"]
    assert store.state.audio_status("day-1") is AudioStatus.STOPPED
    assert controller.clip("day-1") is None


async def test_toggling_the_playing_key_stops_without_synthesis(
    controller: PlaybackController, synthesizer: FakeSynthesizer, store: ActionStore
):
    await controller.toggle("day-1", "Day 1.")
    result = await controller.toggle("day-1", "Day 1.")

    assert result is None
    assert len(synthesizer.calls) == 1
    assert controller.active_key is None
    assert store.state.audio_status("day-1") is AudioStatus.STOPPED


async def test_failure_marks_key_failed(store: ActionStore):
    controller = PlaybackController(FakeSynthesizer(error=SpeechError("Speech synthesis failed")), store)

    with pytest.raises(SpeechError):
        await controller.toggle("day-1", "Day 1.")

    assert store.state.audio_status("day-1") is AudioStatus.FAILED
    assert store.state.audio["day-1"].error == "Speech synthesis failed"
    assert controller.active_key is None


async def test_clip_is_discarded_after_plan_reset(store: ActionStore):
    class ResettingSynthesizer(FakeSynthesizer):
        async def synthesize(self, text: str, voice: Optional[str] = None) -> AudioClip:
            store.dispatch(PlanReset())
            return await super().synthesize(text, voice)

    controller = PlaybackController(ResettingSynthesizer(), store)

    assert await controller.toggle("day-1", "Day 1.") is None
    assert store.state.playing_keys() == []
    assert controller.clip("day-1") is None


async def test_ended_and_failed_clear_the_active_key(controller: PlaybackController, store: ActionStore):
    await controller.toggle("day-1", "Day 1.")
    controller.ended("day-1")
    assert store.state.audio_status("day-1") is AudioStatus.ENDED
    assert controller.active_key is None

    await controller.toggle("day-2", "Day 2.")
    controller.failed("day-2")
    assert store.state.audio_status("day-2") is AudioStatus.FAILED
    assert controller.clips == {}


async def test_request_marks_loading_before_synthesis(
    controller: PlaybackController, store: ActionStore, synthesizer: FakeSynthesizer
):
    generation = controller.request("day-1")

    assert generation == store.state.generation
    assert store.state.is_loading("day-1")
    assert synthesizer.calls == []

    assert controller.request("day-1") is None
    assert store.state.is_loading("day-1")

    clip = await controller.play("day-1", "Day 1.", generation)
    assert clip is not None
    assert store.state.is_playing("day-1")


async def test_superseded_request_discards_its_clip(
    controller: PlaybackController, store: ActionStore, synthesizer: FakeSynthesizer
):
    first = controller.request("day-1")
    second = controller.request("day-2")

    assert store.state.audio_status("day-1") is AudioStatus.STOPPED
    assert await controller.play("day-1", "Day 1.", first) is None
    assert await controller.play("day-2", "Day 2.", second) is not None
    assert store.state.playing_keys() == ["day-2"]
    assert controller.clip("day-1") is None
