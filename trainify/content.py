# trainify/content.py

"""
Static content shown around the generated plans.

`DEFAULT_PLANS` is what the user gets when the language model cannot be reached
or returns something unusable, so the results view always has content.
"""

from typing import Dict, List


DEFAULT_WORKOUT_PLAN = """## Important Considerations
- **Warm-up (5-10 mins):** Light cardio and dynamic stretching.
- **Cool-down (5-10 mins):** Static stretches to relax the muscles.
- **Hydration:** Drink water before, during and after exercise.

## Day 1: Full Body
- **Bodyweight Squats:** 3 sets x 12 reps (60s rest)
- **Push-ups:** 3 sets x 10 reps (60s rest)
- **Plank:** 3 sets x 30s hold (45s rest)

## Day 2: Cardio and Core
- **Brisk Walk or Jog:** 20 minutes steady pace
- **Bicycle Crunches:** 3 sets x 15 reps (45s rest)
- **Mountain Climbers:** 3 sets x 20 reps (45s rest)

## Day 3: Lower Body
- **Lunges:** 3 sets x 10 reps per leg (60s rest)
- **Glute Bridges:** 3 sets x 15 reps (45s rest)
- **Calf Raises:** 3 sets x 20 reps (30s rest)

## Day 4: Active Recovery
- **Yoga Flow:** 20 minutes gentle mobility
- **Foam Rolling:** 10 minutes full body

## Day 5: Upper Body
- **Incline Push-ups:** 3 sets x 12 reps (60s rest)
- **Superman Hold:** 3 sets x 20s hold (45s rest)
- **Tricep Dips:** 3 sets x 10 reps (60s rest)

## Day 6: Conditioning
- **Jumping Jacks:** 3 sets x 30 reps (30s rest)
- **Burpees:** 3 sets x 8 reps (60s rest)
- **High Knees:** 3 sets x 30s (30s rest)

## Day 7: Rest
- **Light Stretching:** 15 minutes, focus on hips and hamstrings
"""

DEFAULT_DIET_PLAN = """## Breakfast
- **Oatmeal with Berries:** 1 cup cooked oats with a handful of berries
- **Greek Yogurt:** 150g plain yogurt

## Lunch
- **Grilled Chicken Salad:** 150g chicken with mixed greens and olive oil
- **Brown Rice:** 1/2 cup cooked

## Dinner
- **Baked Salmon:** 150g fillet with steamed vegetables
- **Sweet Potato:** 1 medium, baked

## Snacks
- **Mixed Nuts:** 1 small handful
- **Apple:** 1 medium

## Hydration
- Drink 2 to 3 litres of water across the day.
"""

DEFAULT_MOTIVATION_PLAN = """## Motivational Quote
"Your body can do it. It's your mind you need to convince."

## Daily Tips
- **Morning Routine:** Start the day with 10 minutes of stretching
  *Note:* Helps improve flexibility and mental clarity.
- **Posture Check:** Keep your shoulders back and core engaged
  *Note:* Prevents back pain and improves confidence.

## Daily Affirmation
"I am strong, capable, and committed to my fitness journey."
"""

DEFAULT_PLANS: Dict[str, str] = {
    "workout": DEFAULT_WORKOUT_PLAN,
    "diet": DEFAULT_DIET_PLAN,
    "motivation": DEFAULT_MOTIVATION_PLAN,
}

# Rotated on the loading screen and in the results header.
MOTIVATIONAL_QUOTES: List[Dict[str, str]] = [
    {"emoji": "💪", "quote": "Every workout is progress. Keep going!"},
    {"emoji": "🔥", "quote": "You're stronger than you think!"},
    {"emoji": "🌟", "quote": "Small steps lead to big transformations!"},
    {"emoji": "⚡", "quote": "Push through the pain, gain through the struggle!"},
    {"emoji": "🎯", "quote": "Your future self will thank you for starting today!"},
    {"emoji": "🚀", "quote": "Be stronger than your excuses!"},
    {"emoji": "💎", "quote": "Diamonds are made under pressure. So are you!"},
    {"emoji": "🏆", "quote": "Champions are made in the gym!"},
    {"emoji": "✨", "quote": "Every expert was once a beginner!"},
    {"emoji": "🌱", "quote": "Growth happens outside your comfort zone!"},
    {"emoji": "🎨", "quote": "Your body can do it. It's your mind you need to convince!"},
    {"emoji": "⚡", "quote": "Don't stop when you're tired. Stop when you're done!"},
]

FITNESS_FACTS: List[str] = [
    "Muscle tissue burns more calories at rest than fat tissue.",
    "A 10 minute walk after meals helps regulate blood sugar.",
    "Sleep is when most muscle repair happens.",
    "Drinking water before meals can help control appetite.",
    "Consistency beats intensity: three workouts a week add up fast.",
    "Stretching after exercise helps maintain range of motion.",
    "Protein needs rise when you train regularly.",
    "Your heart is a muscle, and cardio trains it like any other.",
]

FACT_ROTATION_SECONDS = 5

SUGGESTED_READS: List[Dict[str, str]] = [
    {
        "title": "10 Essential Workout Tips for Beginners",
        "url": "https://www.healthline.com/health/exercise-fitness/workout-tips-for-beginners",
        "category": "Fitness",
    },
    {
        "title": "The Ultimate Guide to Muscle Building Nutrition",
        "url": "https://www.bodybuilding.com/content/muscle-building-nutrition-guide.html",
        "category": "Nutrition",
    },
    {
        "title": "How to Create a Sustainable Workout Routine",
        "url": "https://www.self.com/story/how-to-create-sustainable-workout-routine",
        "category": "Wellness",
    },
    {
        "title": "Pre and Post Workout Meal Ideas",
        "url": "https://www.eatwell101.com/pre-post-workout-meals",
        "category": "Nutrition",
    },
    {
        "title": "Best Exercises for Weight Loss",
        "url": "https://www.webmd.com/fitness-exercise/features/best-exercises-weight-loss",
        "category": "Fitness",
    },
    {
        "title": "Understanding Macros: A Complete Guide",
        "url": "https://www.healthline.com/nutrition/how-to-count-macros",
        "category": "Nutrition",
    },
]


def rotating_item(items: List, tick: int):
    """Returns the entry shown at a given carousel tick."""
    return items[tick % len(items)]
