# trainify_ui/handlers.py

"""
Event handlers for the Trainify AI Gradio interface.

Each browser session keeps its own `PlanManager` in a `gr.State`; the
collaborators behind it (and the plan cache) are shared process-wide. Saved
plans and the streak record live in the browser through `gr.BrowserState`,
which holds the same JSON records as `trainify.storage`.
"""

import tempfile
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import gradio as gr
from loguru import logger

from trainify.content import FITNESS_FACTS, MOTIVATIONAL_QUOTES, SUGGESTED_READS, rotating_item
from trainify.dependencies import get_image_generator, get_plan_generator, get_speech_synthesizer
from trainify.errors import TrainifyError
from trainify.plan_manager import PlanManager
from trainify.schemas import UserDetails
from trainify.storage import load_plans, load_streak, save_plans, save_streak
from trainify.streaks import calculate_streaks, last_14_days, mark_workout_done


AUDIO_DIR = Path(tempfile.gettempdir()) / "trainify-audio"
EXPORT_DIR = Path(tempfile.gettempdir()) / "trainify-export"

FORM_FIELDS = list(UserDetails.model_fields)


def new_session_manager() -> PlanManager:
    return PlanManager(get_plan_generator(), get_speech_synthesizer(), get_image_generator())


def ensure_manager(manager: Optional[PlanManager]) -> PlanManager:
    return manager if manager is not None else new_session_manager()


# --- Views ---

def show_form() -> Dict[str, Any]:
    return {"form": gr.update(visible=True), "loading": gr.update(visible=False), "results": gr.update(visible=False)}


def show_loading() -> Dict[str, Any]:
    return {"form": gr.update(visible=False), "loading": gr.update(visible=True), "results": gr.update(visible=False)}


def show_results() -> Dict[str, Any]:
    return {"form": gr.update(visible=False), "loading": gr.update(visible=False), "results": gr.update(visible=True)}


# --- Carousel ---

def fact_markdown(tick: int) -> str:
    quote = rotating_item(MOTIVATIONAL_QUOTES, tick)
    fact = rotating_item(FITNESS_FACTS, tick)
    return f"## {quote['emoji']} {quote['quote']}\n\n**Did you know?** {fact}"


def quote_markdown(tick: int) -> str:
    quote = rotating_item(MOTIVATIONAL_QUOTES, tick)
    return f"### {quote['emoji']} {quote['quote']}"


def suggested_reads_markdown() -> str:
    lines = ["### 📚 Suggested Reads"]
    for read in SUGGESTED_READS:
        lines.append(f"- [{read['title']}]({read['url']}) · *{read['category']}*")
    return "\n".join(lines)


# --- Form ---

def build_user_details(name, age, gender, height, weight, goal, level, location, diet) -> UserDetails:
    """Validates the form values; raises `gr.Error` with a readable message when something is missing."""
    if not name or not str(name).strip():
        raise gr.Error("Please enter your name.")
    if not age or not height or not weight:
        raise gr.Error("Please fill in your age, height and weight.")
    if not all([gender, goal, level, location, diet]):
        raise gr.Error("Please complete every field of the form.")
    return UserDetails(
        name=str(name).strip(),
        age=int(age),
        gender=gender,
        height=float(height),
        weight=float(weight),
        goal=goal,
        level=level,
        location=location,
        diet=diet,
    )


async def generate_plans(manager: Optional[PlanManager], store: Dict[str, str], tick: int, *form_values):
    """
    Runs plan generation for the form values.

    Yields:
        (manager, store, render tick, carousel timer, form, loading, results)
        updates: first the loading view, then the results view.
    """
    details = build_user_details(*form_values)
    manager = ensure_manager(manager)
    store = dict(store or {})

    yield manager, store, tick, gr.update(active=True), *show_loading().values()

    try:
        plans = await manager.generate_plans(details)
    except TrainifyError as e:
        logger.warning(f"Plan generation failed: {e.message}")
        yield manager, store, tick, gr.update(active=False), *show_form().values()
        raise gr.Error(e.message)

    save_plans(store, details, plans)
    yield manager, store, tick + 1, gr.update(active=False), *show_results().values()


def restore_saved_plans(manager: Optional[PlanManager], store: Dict[str, str], tick: int):
    """
    On page load, reopens the last plans saved in the browser.

    Returns:
        (manager, render tick, form, loading, results, *form field values).
        Form fields are left untouched when nothing was saved.
    """
    manager = ensure_manager(manager)
    saved = load_plans(store or {})
    if saved is None:
        return manager, tick, *show_form().values(), *[gr.update()] * len(FORM_FIELDS)

    manager.reset_plan_state()
    manager.details = saved.user_details
    manager.plans = saved.plans()
    form_values = saved.user_details.model_dump()
    logger.info("Restored saved plans from browser storage")
    return manager, tick + 1, *show_results().values(), *[form_values[field] for field in FORM_FIELDS]


def back_to_form(manager: Optional[PlanManager], tick: int):
    """Hides the results and stops any audio. The plans and their saved record are kept."""
    manager = ensure_manager(manager)
    manager.stop_playback()
    discard_clip(manager)
    return manager, tick + 1, None, *show_form().values()


# --- Item actions ---

async def request_image(manager: PlanManager, tick: int, key: str, subject: str, image_type: str):
    """
    Generates the image for one item block.

    Yields:
        (manager, render tick) twice: once with the block marked as
        generating, then with the result or failure.
    """
    generation = manager.start_image(key)
    if generation is None:
        yield manager, tick
        return
    yield manager, tick + 1

    try:
        await manager.finish_image(key, subject, image_type, generation)
    except TrainifyError as e:
        gr.Warning(e.message)
    else:
        gr.Info(f'AI-generated image for "{subject}" is ready.')
    yield manager, tick + 2


def clip_path(manager: PlanManager) -> Path:
    """The session's single audio file, overwritten by every clip it plays."""
    return AUDIO_DIR / f"{id(manager)}.mp3"


def discard_clip(manager: PlanManager) -> None:
    clip_path(manager).unlink(missing_ok=True)


async def toggle_day_audio(manager: PlanManager, tick: int, key: str, spoken_content: str):
    """
    Listen/Stop for one day.

    Yields:
        (manager, render tick, audio player value). Stopping yields once.
        Starting yields the loading state first, then the clip to play.
    """
    generation = manager.request_playback(key)
    if generation is None:
        if manager.store.state.is_loading(key):
            yield manager, tick, gr.update()
            return
        discard_clip(manager)
        yield manager, tick + 1, None
        return
    yield manager, tick + 1, None

    try:
        clip = await manager.play(key, spoken_content, generation)
    except TrainifyError as e:
        gr.Warning(e.message)
        yield manager, tick + 2, gr.update()
        return
    if clip is None:
        yield manager, tick + 2, gr.update()
        return

    AUDIO_DIR.mkdir(parents=True, exist_ok=True)
    path = clip_path(manager)
    path.write_bytes(clip.audio)
    yield manager, tick + 2, str(path)


def on_audio_end(manager: Optional[PlanManager], tick: int):
    if manager is not None:
        if manager.playback.active_key:
            manager.playback_ended(manager.playback.active_key)
        discard_clip(manager)
    return manager, tick + 1


def on_player_halted(manager: Optional[PlanManager], tick: int):
    """The player was paused or cleared from its own controls; the day it was playing is released."""
    if manager is not None and manager.playback.active_key:
        manager.playback.stop(manager.playback.active_key)
        discard_clip(manager)
    return manager, tick + 1


# --- Export ---

def export_pdf(manager: Optional[PlanManager]) -> Optional[str]:
    """Writes the PDF for the session's plans and returns its path for download."""
    if manager is None or manager.plans is None:
        raise gr.Error("Generate a plan before exporting.")
    result = manager.export_pdf()
    if not result.success:
        gr.Warning(result.error)
        return None

    session_dir = EXPORT_DIR / str(id(manager))
    session_dir.mkdir(parents=True, exist_ok=True)
    path = session_dir / result.filename
    path.write_bytes(result.content)
    gr.Info("Your fitness plan has been saved as a PDF.")
    return str(path)


# --- Streak ---

def streak_html(store: Dict[str, str], today: Optional[date] = None) -> str:
    record = load_streak(store or {})
    stats = calculate_streaks(record, today)
    calendar = last_14_days(record, today)

    cells = []
    for day in calendar.itertuples():
        css = "streak-day done" if day.has_streak else "streak-day today" if day.is_today else "streak-day"
        cells.append(f"<div class='{css}' title='{day.date}'><span>{day.day_name}</span><b>{day.day_num}</b></div>")

    return f"""
    <div class='streak-card'>
        <h4>🔥 Workout Streak</h4>
        <div class='streak-stats'>
            <div><b>{stats.current}</b><p>Current</p></div>
            <div><b>{stats.longest}</b><p>Longest</p></div>
        </div>
        <div class='streak-grid'>{''.join(cells)}</div>
    </div>
    """


def mark_today_done(store: Dict[str, str]):
    store = dict(store or {})
    record = mark_workout_done(load_streak(store))
    save_streak(store, record)
    gr.Info("Workout logged. Keep the streak going!")
    return store, streak_html(store)
