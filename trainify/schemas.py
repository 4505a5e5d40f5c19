# trainify/schemas.py

"""
Request and plan models for Trainify AI.

The form option lists double as the choices shown in the Gradio dropdowns.
`UserDetails` is both the body of `POST /api/generate_plan` and the key of the
plan cache.
"""

import json
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

from trainify.text_format import PlanCategory


GENDERS = ["male", "female", "other"]
GOALS = ["weight-loss", "muscle-gain", "maintenance", "endurance"]
LEVELS = ["beginner", "intermediate", "advanced"]
LOCATIONS = ["home", "gym", "outdoor"]
DIETS = ["vegetarian", "non-vegetarian", "vegan", "keto"]

ImageType = Literal["exercise", "meal"]


class UserDetails(BaseModel):
    """
    Defines the attributes collected by the setup form.
    These are sent to the language model and also identify cached plans.
    """
    name: str = Field(..., min_length=1, description="The user's name, used to personalize the plan.")
    age: int = Field(..., gt=0, lt=120, description="Age in years.")
    gender: str = Field(..., description="One of male, female or other.")
    height: float = Field(..., gt=0, description="Height in centimetres.")
    weight: float = Field(..., gt=0, description="Weight in kilograms.")
    goal: str = Field(..., description="Fitness goal, e.g. 'weight-loss' or 'muscle-gain'.")
    level: str = Field(..., description="Fitness level: beginner, intermediate or advanced.")
    location: str = Field(..., description="Where the user trains: home, gym or outdoor.")
    diet: str = Field(..., description="Dietary preference, e.g. 'vegetarian' or 'keto'.")

    def cache_key(self) -> str:
        """Canonical serialization used to key the plan cache."""
        return json.dumps(self.model_dump(), sort_keys=True)


class GeneratedPlans(BaseModel):
    """The three plan texts returned for one set of user details."""
    workout: str
    diet: str
    motivation: str

    def for_category(self, category: PlanCategory) -> str:
        return getattr(self, PlanCategory(category).value)


class PlanRenderRequest(BaseModel):
    """
    Defines a request to turn one plan text into display blocks.
    When `plan` is omitted, the plan from the current session is used.
    """
    category: PlanCategory = Field(..., description="Which plan to render.")
    plan: Optional[str] = Field(None, description="Raw plan text to render instead of the session's plan.")


class ExportRequest(BaseModel):
    """
    Defines a request to export plans to PDF.
    Any plan omitted here is taken from the current session.
    """
    workout: Optional[str] = None
    diet: Optional[str] = None
    motivation: Optional[str] = None


class TextToSpeechRequest(BaseModel):
    """
    Defines the data structure for a request to synthesize speech.
    """
    text: str = Field(..., min_length=1, description="The text to read aloud.")
    voice: str = Field("alloy", description="Voice name; legacy names such as 'Sarah' are mapped.")


class ImageRequest(BaseModel):
    """
    Defines the data structure for a request to generate an illustration.
    """
    prompt: str = Field(..., min_length=1, description="Short subject, e.g. 'squats' or 'oatmeal'.")
    type: ImageType = Field("exercise", description="The kind of content to illustrate.")


class StreakMarkRequest(BaseModel):
    """
    Marks a day as a completed workout day. Defaults to today.
    """
    day: Optional[date] = Field(None, description="The date to mark, in ISO format.")
