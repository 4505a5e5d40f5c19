# trainify/storage.py

"""
Records kept in the browser's local storage.

Two independent records are stored as JSON strings in any string-to-string
mapping (the UI passes the `gr.BrowserState` dict, tests pass a plain dict):

- `fitnessPlans`: the user's details and the three most recent plans
- `fitnessStreak`: the streak record (ISO date -> True)

Loading never fails: a missing or corrupt record reads as empty.
"""

import json
from typing import MutableMapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trainify.schemas import GeneratedPlans, UserDetails
from trainify.streaks import StreakRecord


PLANS_KEY = "fitnessPlans"
STREAK_KEY = "fitnessStreak"


class SavedPlans(BaseModel):
    """The `fitnessPlans` record; field names match what the browser stores."""
    user_details: UserDetails = Field(..., alias="userDetails")
    workout_plan: str = Field(..., alias="workoutPlan")
    diet_plan: str = Field(..., alias="dietPlan")
    motivation_plan: str = Field(..., alias="motivationPlan")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_plans(cls, details: UserDetails, plans: GeneratedPlans) -> "SavedPlans":
        return cls(
            user_details=details,
            workout_plan=plans.workout,
            diet_plan=plans.diet,
            motivation_plan=plans.motivation,
        )

    def plans(self) -> GeneratedPlans:
        return GeneratedPlans(workout=self.workout_plan, diet=self.diet_plan, motivation=self.motivation_plan)


def save_plans(store: MutableMapping[str, str], details: UserDetails, plans: GeneratedPlans) -> None:
    saved = SavedPlans.from_plans(details, plans)
    store[PLANS_KEY] = saved.model_dump_json(by_alias=True)


def load_plans(store: MutableMapping[str, str]) -> Optional[SavedPlans]:
    raw = store.get(PLANS_KEY)
    if not raw:
        return None
    try:
        return SavedPlans.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Discarding unreadable {PLANS_KEY} record: {e.error_count()} errors")
        return None


def load_streak(store: MutableMapping[str, str]) -> StreakRecord:
    raw = store.get(STREAK_KEY)
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Discarding unreadable {STREAK_KEY} record")
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(day): bool(done) for day, done in data.items() if done}


def save_streak(store: MutableMapping[str, str], record: StreakRecord) -> None:
    store[STREAK_KEY] = json.dumps(record, sort_keys=True)
