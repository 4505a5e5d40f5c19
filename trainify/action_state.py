# trainify/action_state.py

"""
Per-session state of the interactive actions attached to rendered plans.

Image generation and audio playback each keep a small state machine per
`ActionKey`:

    images: idle -> generating -> ready(url) | failed(reason)
    audio:  idle -> loading -> playing -> ended | stopped | failed(reason)

All transitions go through `reduce(state, event)`, which returns a new
`ActionState` and never mutates its input. `PlanReset` clears both maps and
bumps `generation`; result events tagged with an older generation are dropped,
so a slow request that finishes after the user regenerated a plan cannot write
into the new plan's state.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Union


class ImageStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    FAILED = "failed"


class AudioStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    ENDED = "ended"
    STOPPED = "stopped"
    FAILED = "failed"


@dataclass(frozen=True)
class ImageEntry:
    status: ImageStatus = ImageStatus.IDLE
    url: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class AudioEntry:
    status: AudioStatus = AudioStatus.IDLE
    error: Optional[str] = None


@dataclass(frozen=True)
class ActionState:
    images: Dict[str, ImageEntry] = field(default_factory=dict)
    audio: Dict[str, AudioEntry] = field(default_factory=dict)
    generation: int = 0

    def image(self, key: str) -> ImageEntry:
        return self.images.get(key, ImageEntry())

    def audio_status(self, key: str) -> AudioStatus:
        return self.audio.get(key, AudioEntry()).status

    def is_generating(self, key: str) -> bool:
        return self.image(key).status is ImageStatus.GENERATING

    def is_playing(self, key: str) -> bool:
        return self.audio_status(key) is AudioStatus.PLAYING

    def is_loading(self, key: str) -> bool:
        return self.audio_status(key) is AudioStatus.LOADING

    def playing_keys(self) -> List[str]:
        return [key for key, entry in self.audio.items() if entry.status is AudioStatus.PLAYING]

    def busy_keys(self) -> List[str]:
        """Keys that are loading or playing."""
        busy = (AudioStatus.LOADING, AudioStatus.PLAYING)
        return [key for key, entry in self.audio.items() if entry.status in busy]


# --- Events ---

@dataclass(frozen=True)
class ImageRequested:
    key: str


@dataclass(frozen=True)
class ImageReady:
    key: str
    url: str
    generation: Optional[int] = None


@dataclass(frozen=True)
class ImageFailed:
    key: str
    reason: str
    generation: Optional[int] = None


@dataclass(frozen=True)
class PlaybackRequested:
    key: str
    generation: Optional[int] = None


@dataclass(frozen=True)
class PlaybackStarted:
    key: str
    generation: Optional[int] = None


@dataclass(frozen=True)
class PlaybackEnded:
    key: str
    generation: Optional[int] = None


@dataclass(frozen=True)
class PlaybackStopped:
    key: str


@dataclass(frozen=True)
class PlaybackFailed:
    key: str
    reason: str
    generation: Optional[int] = None


@dataclass(frozen=True)
class PlanReset:
    pass


ActionEvent = Union[
    ImageRequested,
    ImageReady,
    ImageFailed,
    PlaybackRequested,
    PlaybackStarted,
    PlaybackEnded,
    PlaybackStopped,
    PlaybackFailed,
    PlanReset,
]


def _is_stale(state: ActionState, event: ActionEvent) -> bool:
    generation = getattr(event, "generation", None)
    return generation is not None and generation != state.generation


def _with_image(state: ActionState, key: str, entry: ImageEntry) -> ActionState:
    return replace(state, images={**state.images, key: entry})


def _with_audio(state: ActionState, key: str, entry: AudioEntry) -> ActionState:
    return replace(state, audio={**state.audio, key: entry})


def reduce(state: ActionState, event: ActionEvent) -> ActionState:
    """
    Applies one event and returns the resulting state.

    Returns `state` itself when the event is rejected: a second
    `ImageRequested` for a key that is already generating, or a result
    event from an older plan generation.
    """
    if isinstance(event, PlanReset):
        return ActionState(generation=state.generation + 1)

    if _is_stale(state, event):
        return state

    if isinstance(event, ImageRequested):
        if state.is_generating(event.key):
            return state
        return _with_image(state, event.key, ImageEntry(status=ImageStatus.GENERATING))

    if isinstance(event, ImageReady):
        return _with_image(state, event.key, ImageEntry(status=ImageStatus.READY, url=event.url))

    if isinstance(event, ImageFailed):
        return _with_image(state, event.key, ImageEntry(status=ImageStatus.FAILED, error=event.reason))

    if isinstance(event, PlaybackRequested):
        return _with_audio(state, event.key, AudioEntry(status=AudioStatus.LOADING))

    if isinstance(event, PlaybackStarted):
        busy = state.busy_keys()
        audio = {
            key: AudioEntry(status=AudioStatus.STOPPED) if key in busy else entry
            for key, entry in state.audio.items()
        }
        audio[event.key] = AudioEntry(status=AudioStatus.PLAYING)
        return replace(state, audio=audio)

    if isinstance(event, PlaybackEnded):
        return _with_audio(state, event.key, AudioEntry(status=AudioStatus.ENDED))

    if isinstance(event, PlaybackStopped):
        return _with_audio(state, event.key, AudioEntry(status=AudioStatus.STOPPED))

    if isinstance(event, PlaybackFailed):
        return _with_audio(state, event.key, AudioEntry(status=AudioStatus.FAILED, error=event.reason))

    raise TypeError(f"Unknown action event: {event!r}")


class ActionStore:
    """Holds the current `ActionState` for one session and applies events to it."""

    def __init__(self, state: Optional[ActionState] = None):
        self.state = state or ActionState()

    def dispatch(self, event: ActionEvent) -> ActionState:
        self.state = reduce(self.state, event)
        return self.state
