# trainify/playback.py

"""
Coordinates spoken playback of plan days so that at most one plays at a time.
"""

from typing import Dict, Optional

from trainify.action_state import (
    ActionStore,
    PlaybackEnded,
    PlaybackFailed,
    PlaybackRequested,
    PlaybackStarted,
    PlaybackStopped,
)
from trainify.errors import TrainifyError
from trainify.logger import action_logger
from trainify.speech import AudioClip, SpeechSynthesizer


class PlaybackController:
    """
    Listen/Stop toggle for day blocks.

    Args:
        synthesizer: The text-to-speech collaborator.
        store: The session's action store; playback transitions are
            dispatched into it so rendered blocks reflect them.
        voice: Optional voice name passed to the synthesizer.
    """

    def __init__(self, synthesizer: SpeechSynthesizer, store: ActionStore, voice: Optional[str] = None):
        self.synthesizer = synthesizer
        self.store = store
        self.voice = voice
        self.clips: Dict[str, AudioClip] = {}

    @property
    def active_key(self) -> Optional[str]:
        playing = self.store.state.playing_keys()
        return playing[0] if playing else None

    def clip(self, key: str) -> Optional[AudioClip]:
        return self.clips.get(key)

    def request(self, key: str) -> Optional[int]:
        """
        First half of a Listen/Stop click, applied before any synthesis.

        Stops `key` if it is playing and ignores it if it is already loading.
        Otherwise stops every other key and marks `key` as loading.

        Returns:
            The plan generation to pass to `play`, or None when nothing should
            be synthesized.
        """
        if self.store.state.is_playing(key):
            self.stop(key)
            return None
        if self.store.state.is_loading(key):
            action_logger(key).debug("Speech already loading; ignoring duplicate request")
            return None

        self.stop_all()
        generation = self.store.state.generation
        self.store.dispatch(PlaybackRequested(key, generation=generation))
        return generation

    async def play(self, key: str, text: str, generation: int) -> Optional[AudioClip]:
        """
        Synthesizes `text` for a key marked by `request` and starts it.

        Returns:
            The new clip, or None when the plan was regenerated or another key
            was requested while the clip was being synthesized.

        Raises:
            TrainifyError: If synthesis fails. The key is left in the failed
                state.
        """
        log = action_logger(key)
        try:
            clip = await self.synthesizer.synthesize(text, self.voice)
        except TrainifyError as e:
            log.warning(f"Speech failed: {e.message}")
            self.store.dispatch(PlaybackFailed(key, e.message, generation=generation))
            raise

        if self.store.state.generation != generation:
            log.debug("Discarding speech; plan was regenerated")
            return None
        if not self.store.state.is_loading(key):
            log.debug("Discarding speech; playback was cancelled")
            return None

        self.store.dispatch(PlaybackStarted(key, generation=generation))
        self.clips[key] = clip
        log.info("Playing")
        return clip

    async def toggle(self, key: str, text: str) -> Optional[AudioClip]:
        """
        Stops `key` if it is playing, otherwise synthesizes `text` and plays it.

        Stopping never calls the synthesizer. Starting stops whatever else is
        playing first.

        Returns:
            The new clip when playback started, None when it stopped or when
            the plan was regenerated while the clip was being synthesized.

        Raises:
            TrainifyError: If synthesis fails. The key is left in the failed
                state.
        """
        generation = self.request(key)
        if generation is None:
            return None
        return await self.play(key, text, generation)

    def stop(self, key: str) -> None:
        self.store.dispatch(PlaybackStopped(key))
        self.clips.pop(key, None)
        action_logger(key).debug("Stopped")

    def stop_all(self) -> None:
        for key in self.store.state.busy_keys():
            self.stop(key)

    def ended(self, key: str) -> None:
        """Marks the clip for `key` as finished."""
        self.store.dispatch(PlaybackEnded(key))
        self.clips.pop(key, None)

    def failed(self, key: str, reason: str = "Failed to play audio. Please try again.") -> None:
        """Marks the clip for `key` as failed in the player."""
        action_logger(key).warning(f"Playback failed: {reason}")
        self.store.dispatch(PlaybackFailed(key, reason))
        self.clips.pop(key, None)

    def reset(self) -> None:
        """Drops all clips; call after the action store was reset."""
        self.clips.clear()
