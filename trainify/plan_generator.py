# trainify/plan_generator.py

"""
Generates workout, diet and motivation plans with a language model.

All three plans are requested in one round trip and split on literal section
markers. Results are cached per set of user details. When the model cannot be
reached, times out, or answers with something that cannot be split into plans,
the built-in default plans are returned instead so the UI always has content.
Missing credentials, rate limits and rejected credentials are raised as typed
errors because the user has to act on them.
"""

import re
from typing import Dict, Optional

import openai
from loguru import logger
from openai import AsyncOpenAI

from trainify.config import Settings
from trainify.content import DEFAULT_PLANS
from trainify.errors import UpstreamAuthError
from trainify.openai_client import AUTH_MESSAGE, build_client, rate_limit_error
from trainify.plan_cache import PlanCache
from trainify.schemas import GeneratedPlans, UserDetails
from trainify.text_format import PlanCategory


# --- Section markers ---

WORKOUT_MARKER = "===WORKOUT==="
DIET_MARKER = "===DIET==="
MOTIVATION_MARKER = "===MOTIVATION==="
SECTION_HEADING_RE = re.compile(r"^#{1,3}\s*(workout|diet|motivation)\b.*$", re.IGNORECASE | re.MULTILINE)

SYSTEM_PROMPT = "You are Trainify AI, a certified fitness coach and nutritionist. Create short, realistic fitness plans."

FORMATTING_INSTRUCTIONS = "Format: Use Markdown. - **Item:** Details. No emojis or special chars."

CATEGORY_SYSTEM_PROMPTS = {
    PlanCategory.WORKOUT: "You are Trainify AI, a certified fitness coach. Create detailed, realistic workout plans.",
    PlanCategory.DIET: "You are Trainify AI, a certified nutritionist. Create personalized, healthy diet plans.",
    PlanCategory.MOTIVATION: "You are Trainify AI, a motivational fitness mentor. Provide encouraging, actionable advice.",
}

ITEM_FORMATS = {
    PlanCategory.WORKOUT: "- **Exercise Name:** Reps, Sets, Rest\n  *Description:* short one-line detail.",
    PlanCategory.DIET: "- **Meal Name:** Portion size, Calories\n  *Description:* short one-line detail.",
    PlanCategory.MOTIVATION: "- **Tip Name:** Brief description\n  *Note:* short one-line detail.",
}


class MalformedPlanResponse(ValueError):
    """The model answered, but not with usable plan text."""


class PlanGenerator:
    """
    Client for the text-generation collaborator.

    Args:
        settings: Application settings; supplies the API key, model and timeout.
        cache: The process-wide plan cache.
        client: Optional pre-built `AsyncOpenAI` client, mainly for tests.
    """

    def __init__(self, settings: Settings, cache: PlanCache, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self.cache = cache
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = build_client(self.settings)
        return self._client

    async def generate_all_plans(self, details: UserDetails) -> GeneratedPlans:
        """
        Returns the three plans for `details`, from the cache when possible.

        Raises:
            ConfigurationError: If no API key is configured.
            RateLimitError: If the upstream reports the quota is exhausted.
            UpstreamAuthError: If the upstream rejects the API key.
        """
        key = details.cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Using cached plans")
            return cached

        client = self.client
        try:
            text = await self._complete(client, SYSTEM_PROMPT, _build_plans_prompt(details))
            plans = plans_from_text(text)
        except openai.RateLimitError as e:
            raise rate_limit_error(e) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise UpstreamAuthError(AUTH_MESSAGE) from e
        except (openai.APIError, MalformedPlanResponse) as e:
            logger.warning(f"Plan generation failed ({type(e).__name__}: {e}). Using default plans.")
            plans = GeneratedPlans(**DEFAULT_PLANS)

        self.cache.put(key, plans)
        return plans

    async def generate_plan(self, details: UserDetails, category: PlanCategory) -> str:
        """
        Generates a single plan with the detailed per-category prompt.
        Falls back to that category's default plan on failure.
        """
        category = PlanCategory(category)
        client = self.client
        try:
            return await self._complete(client, CATEGORY_SYSTEM_PROMPTS[category], _build_category_prompt(details, category))
        except openai.RateLimitError as e:
            raise rate_limit_error(e) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise UpstreamAuthError(AUTH_MESSAGE) from e
        except (openai.APIError, MalformedPlanResponse) as e:
            logger.warning(f"{category.value} plan generation failed ({e}). Using default plan.")
            return DEFAULT_PLANS[category.value]

    async def _complete(self, client: AsyncOpenAI, system_prompt: str, prompt: str) -> str:
        response = await client.chat.completions.create(
            model=self.settings.text_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
        )
        if not response.choices or not response.choices[0].message.content:
            raise MalformedPlanResponse("AI response content is empty.")
        return response.choices[0].message.content


# --- Response parsing ---

def _between(text: str, start: str, end: Optional[str] = None) -> Optional[str]:
    if start not in text:
        return None
    section = text.split(start, 1)[1]
    if end:
        section = section.split(end, 1)[0]
    return section.strip() or None


def _heading_sections(text: str) -> Dict[str, str]:
    """Splits on `# Workout` / `## Diet` / `# Motivation ...` heading lines."""
    matches = list(SECTION_HEADING_RE.finditer(text))
    sections: Dict[str, str] = {}
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        body = text[match.end():end].strip()
        if body:
            sections.setdefault(match.group(1).lower(), body)
    return sections


def split_sections(text: str) -> Dict[str, Optional[str]]:
    """
    Splits a combined response into its three plans.

    Uses the `===WORKOUT===` / `===DIET===` / `===MOTIVATION===` markers and
    falls back to `# Workout` / `# Diet` / `# Motivation` headings (one to
    three `#`). Sections that cannot be found are None.
    """
    headings = _heading_sections(text)
    workout = _between(text, WORKOUT_MARKER, DIET_MARKER) or headings.get("workout")
    diet = _between(text, DIET_MARKER, MOTIVATION_MARKER) or headings.get("diet")
    motivation = _between(text, MOTIVATION_MARKER) or headings.get("motivation")

    if workout:
        workout = workout.split(DIET_MARKER)[0].strip() or None
    if diet:
        diet = diet.split(MOTIVATION_MARKER)[0].strip() or None
    if motivation:
        motivation = motivation.split(WORKOUT_MARKER)[0].split(DIET_MARKER)[0].strip() or None

    return {"workout": workout, "diet": diet, "motivation": motivation}


def plans_from_text(text: str) -> GeneratedPlans:
    """
    Builds the plan set from a combined response.

    Raises:
        MalformedPlanResponse: If no section at all could be found.
    """
    sections = split_sections(text)
    if not any(sections.values()):
        raise MalformedPlanResponse("Response contains no recognizable plan sections.")
    for category, section in sections.items():
        if not section:
            logger.warning(f"{category} section missing from AI response; using default.")
            sections[category] = DEFAULT_PLANS[category]
    return GeneratedPlans(**sections)


# --- Prompts ---

def _describe(details: UserDetails) -> str:
    return (
        f"{details.name}, {details.age}, {details.gender}, {details.height:g}cm, {details.weight:g}kg, "
        f"Goal: {details.goal}, Level: {details.level}, Location: {details.location}, Diet: {details.diet}"
    )


def _build_plans_prompt(details: UserDetails) -> str:
    """Constructs the combined prompt asking for all three plans."""
    return f"""{FORMATTING_INSTRUCTIONS}

Plan for: {_describe(details)}

Separate with "{WORKOUT_MARKER}" "{DIET_MARKER}" "{MOTIVATION_MARKER}":

1. WORKOUT: 7 days, 3 exercises/day max.
   Format each day clearly:
   ## Day 1: Full Body
   - **Exercise 1:** Sets x Reps (Rest)
   - **Exercise 2:** Sets x Reps (Rest)
   - **Exercise 3:** Sets x Reps (Rest)

   Continue for all 7 days. No descriptions. Just exercise name, sets, reps, rest.

2. DIET: Breakfast, Lunch, Dinner only. Format: - **Meal:** Portion. No calories/descriptions.

3. MOTIVATION: 1 quote, 2 tips, 1 affirmation. One line each.

Keep it SHORT. Separate each day clearly with ## Day X: heading."""


def _build_category_prompt(details: UserDetails, category: PlanCategory) -> str:
    """Constructs the detailed prompt for a single plan category."""
    rules = f"""Format all responses with clean Markdown syntax suitable for both web display and PDF export.
- Use - (dash) for bullet points, no emojis or special characters.
- Start all sections with clear headings using Markdown (#, ##, ###).
- Use bold for key points and italic for short descriptions.
- When listing items, always use:

{ITEM_FORMATS[category]}

Respond only with formatted Markdown text (no raw JSON, code, or styling tags)."""

    if category is PlanCategory.WORKOUT:
        task = f"""Now create a detailed 7-day workout plan for: {_describe(details)}

Each day should include:
- Exercise name
- Sets, reps, rest time
- Equipment (if required)
- Short exercise description

Start every day with a "## Day N: Focus" heading. Keep it realistic and goal-oriented."""
    elif category is PlanCategory.DIET:
        task = f"""Now create a personalized daily diet plan for: {_describe(details)}

Include:
- Breakfast, Lunch, Dinner, and Snacks
- Portion sizes and approximate calories
- Timing suggestions
- Hydration and recovery advice

Make it specific, healthy, and tailored to their goal."""
    else:
        task = f"""Now based on the goal ({details.goal}) and fitness level ({details.level}), provide:
- 1 motivational quote
- 3 lifestyle or posture tips
- 1 daily affirmation

Keep it friendly, encouraging, and concise."""

    return f"{rules}\n\n{task}"
