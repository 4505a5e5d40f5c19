# trainify/plan_manager.py

"""
Manages the session state of the Trainify AI application.

This class is responsible for:
- Generating the three plans for the user's details and keeping the latest set.
- Rendering plans into display blocks against the current action state.
- Running per-item image generation and day playback through the action store.
- Exporting the plans to PDF.
- Tracking the workout streak for API clients.

The PlanManager is a singleton within the process, provided to route handlers
through FastAPI's dependency injection system.
"""

import json
from datetime import date
from typing import Any, AsyncGenerator, Dict, List, Optional

from loguru import logger

from trainify.action_state import ActionStore, ImageFailed, ImageReady, ImageRequested, PlanReset
from trainify.blocks import RenderBlock, day_key, find_block, render_blocks
from trainify.errors import TrainifyError
from trainify.image_generator import IMAGE_FAILED_MESSAGE, ImageGenerator
from trainify.logger import action_logger
from trainify.pdf_export import ExportResult, export_plans_pdf
from trainify.plan_generator import PlanGenerator
from trainify.playback import PlaybackController
from trainify.schemas import GeneratedPlans, UserDetails
from trainify.speech import AudioClip, SpeechSynthesizer
from trainify.streaks import StreakRecord, calculate_streaks, last_14_days, mark_workout_done
from trainify.text_format import PlanCategory


class PlanManager:
    """
    Holds the current plans plus the image, playback and streak state around them.
    """

    def __init__(
        self,
        generator: PlanGenerator,
        synthesizer: SpeechSynthesizer,
        image_generator: ImageGenerator,
    ):
        self.generator = generator
        self.image_generator = image_generator
        self.store = ActionStore()
        self.playback = PlaybackController(synthesizer, self.store)
        self.details: Optional[UserDetails] = None
        self.plans: Optional[GeneratedPlans] = None
        self.streak: StreakRecord = {}

    def reset_plan_state(self) -> None:
        """Invalidates every action key; results still in flight are dropped when they land."""
        self.store.dispatch(PlanReset())
        self.playback.reset()

    # --- Plan generation ---

    async def generate_plans(self, details: UserDetails) -> GeneratedPlans:
        """
        Generates (or fetches from cache) the plans for `details` and makes them current.

        Raises:
            ConfigurationError, RateLimitError, UpstreamAuthError: Passed through
                from the plan generator; the current plans are left untouched.
        """
        plans = await self.generator.generate_all_plans(details)
        self.reset_plan_state()
        self.details = details
        self.plans = plans
        logger.info(f"Plans ready for {details.name}")
        return plans

    async def generate_and_initialize_plans(self, details: UserDetails) -> AsyncGenerator[Dict[str, str], None]:
        """
        Generates the plans and reports progress as Server-Sent Events.

        Yields:
            SSE messages for `EventSourceResponse`: `status` updates, one `plan`
            event per category, then `complete`; or a single `error` event
            carrying the message and HTTP status of a surfaced failure.
        """
        yield self._sse_event("status", "Generating your personalized fitness plans...")

        try:
            plans = await self.generate_plans(details)
        except TrainifyError as e:
            yield self._sse_event("error", {"message": e.message, "status_code": e.status_code})
            return

        for category in PlanCategory:
            yield self._sse_event("plan", {"category": category.value, "plan": plans.for_category(category)})

        yield self._sse_event("complete", "Your plans are ready!")

    def require_plans(self) -> GeneratedPlans:
        if self.plans is None:
            raise LookupError("No plans generated yet. Please generate a plan first.")
        return self.plans

    def get_current_plans(self) -> Dict[str, Any] | None:
        """Returns the user details and plans, or None before the first generation."""
        if self.plans is None:
            return None
        return {
            "userDetails": self.details.model_dump() if self.details else None,
            "plans": self.plans.model_dump(),
            "generation": self.store.state.generation,
        }

    # --- Rendering ---

    def render(self, category: PlanCategory, plan: Optional[str] = None) -> List[RenderBlock]:
        """Renders a plan (the session's plan unless `plan` is given) against the current action state."""
        if plan is None:
            plan = self.require_plans().for_category(category)
        return render_blocks(plan, category, self.store.state)

    # --- Images ---

    def start_image(self, key: str) -> Optional[int]:
        """
        Marks `key` as generating.

        Returns:
            The plan generation to pass to `finish_image`, or None when the key
            is already generating and the request should be ignored.
        """
        if self.store.state.is_generating(key):
            action_logger(key).debug("Image already generating; ignoring duplicate request")
            return None
        self.store.dispatch(ImageRequested(key))
        return self.store.state.generation

    async def finish_image(self, key: str, subject: str, image_type: str, generation: int) -> str:
        """
        Calls the image collaborator for a key marked by `start_image`.

        Raises:
            TrainifyError: If the image collaborator fails; the key is left in
                the failed state with a readable reason.
        """
        log = action_logger(key)
        try:
            url = await self.image_generator.generate(subject, image_type)
        except Exception as e:
            reason = e.message if isinstance(e, TrainifyError) else IMAGE_FAILED_MESSAGE
            log.warning(f"Image failed: {reason}")
            self.store.dispatch(ImageFailed(key, reason, generation=generation))
            raise

        self.store.dispatch(ImageReady(key, url, generation=generation))
        log.info("Image ready")
        return url

    async def generate_image(self, key: str, subject: str, image_type: str = "exercise") -> Optional[str]:
        """
        Generates the illustration for one item block.

        A second request for a key that is still generating is ignored and
        returns None. Whatever happens, the key is no longer generating when
        this returns or raises.
        """
        generation = self.start_image(key)
        if generation is None:
            return None
        return await self.finish_image(key, subject, image_type, generation)

    # --- Playback ---

    def spoken_content(self, key: str) -> str:
        blocks = self.render(PlanCategory.WORKOUT)
        block = find_block(blocks, key)
        if block is None or block.spoken_content is None:
            raise LookupError(f"No day found for '{key}'.")
        return block.spoken_content

    async def toggle_playback(self, key: str, text: Optional[str] = None) -> Optional[AudioClip]:
        """Listen/Stop for a day block. `text` defaults to the day's spoken content."""
        if not self.store.state.is_playing(key) and text is None:
            text = self.spoken_content(key)
        return await self.playback.toggle(key, text or "")

    def request_playback(self, key: str) -> Optional[int]:
        return self.playback.request(key)

    async def play(self, key: str, text: str, generation: int) -> Optional[AudioClip]:
        return await self.playback.play(key, text, generation)

    async def toggle_day(self, day: int) -> Optional[AudioClip]:
        return await self.toggle_playback(day_key(day))

    def playback_ended(self, key: str) -> None:
        self.playback.ended(key)

    def playback_failed(self, key: str, reason: str) -> None:
        self.playback.failed(key, reason)

    def stop_playback(self) -> None:
        self.playback.stop_all()

    # --- Export ---

    def export_pdf(
        self,
        workout: Optional[str] = None,
        diet: Optional[str] = None,
        motivation: Optional[str] = None,
    ) -> ExportResult:
        """Exports the given plans, taking any that are omitted from the session."""
        if None in (workout, diet, motivation):
            plans = self.require_plans()
            workout = plans.workout if workout is None else workout
            diet = plans.diet if diet is None else diet
            motivation = plans.motivation if motivation is None else motivation
        return export_plans_pdf(workout, diet, motivation)

    # --- Streak ---

    def get_streak(self, today: Optional[date] = None) -> Dict[str, Any]:
        stats = calculate_streaks(self.streak, today)
        return {
            "record": self.streak,
            "current": stats.current,
            "longest": stats.longest,
            "calendar": last_14_days(self.streak, today).to_dict(orient="records"),
        }

    def mark_workout(self, day: Optional[date] = None) -> Dict[str, Any]:
        self.streak = mark_workout_done(self.streak, day)
        return self.get_streak()

    def _sse_event(self, event_type: str, data: Any) -> Dict[str, str]:
        """Formats data as a Server-Sent Event message."""
        return {"event": event_type, "data": json.dumps(data)}
