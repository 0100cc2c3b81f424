"""
Fitlead - Diet plan prompts.
"""

from typing import Any

SYSTEM_PROMPT = (
    "You are a professional nutritionist creating personalized diet plans. "
    "Be thorough, accurate, and practical in your recommendations."
)

DIET_PLAN_TEMPLATE = """
You are a professional nutritionist and fitness expert. Create a comprehensive, personalized diet plan for the following client:

**Client Information:**
- Name: {name}
- Age: {age} years
- Weight: {weight} kg
- Height: {height} cm
- Fitness Level: {fitness_level}
- Primary Goal: {fitness_goal}
- Workout Days per Week: {workout_days}
- Dietary Restrictions: {dietary_restrictions}
- Injuries/Medical Conditions: {injuries}

**Please provide:**

1. **Daily Caloric Needs**: Calculate BMR and total daily energy expenditure
2. **Macronutrient Breakdown**: Protein, carbs, and fats in grams and percentages
3. **7-Day Meal Plan**: Detailed meals for breakfast, lunch, dinner, and 2 snacks
4. **Portion Sizes**: Specific quantities for each food item
5. **Meal Timing**: When to eat relative to workouts
6. **Hydration Guidelines**: Daily water intake recommendations
7. **Supplement Suggestions**: If applicable (be conservative)
8. **Shopping List**: Organized by food categories
9. **Meal Prep Tips**: How to prepare meals efficiently
10. **Important Notes**: Any special considerations based on their profile

Format the response in a clear, easy-to-follow structure with proper headings and bullet points. Make it practical and actionable.
"""


def build_diet_prompt(profile: dict[str, Any]) -> str:
    """Fill the diet plan template from a lead profile."""
    return DIET_PLAN_TEMPLATE.format(
        name=profile.get("name", ""),
        age=profile.get("age", ""),
        weight=profile.get("weight", ""),
        height=profile.get("height", ""),
        fitness_level=profile.get("fitness_level", ""),
        fitness_goal=profile.get("fitness_goal", ""),
        workout_days=profile.get("workout_days", ""),
        dietary_restrictions=profile.get("dietary_restrictions") or "None",
        injuries=profile.get("injuries") or "None",
    )
