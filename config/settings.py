"""
Configuration settings for the Cocina AI application.
Covers the Gemini credential, model selection and the mock catalog location.
"""

from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import Optional
from functools import lru_cache


PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Value shipped in .env.example; never a usable key.
PLACEHOLDER_API_KEY = "your_gemini_api_key_here"
MIN_API_KEY_LENGTH = 11


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application settings
    app_name: str = "Cocina AI"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000

    # Gemini settings. The key is read from GEMINI_API_KEY without the prefix.
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "gemini_api_key"),
    )
    gemini_model: str = "gemini-2.5-flash"
    temperature: float = 0.7

    # Serve canned JSON instead of calling Gemini (offline development)
    use_mock: bool = False

    # Catalog search cache
    cache_maxsize: int = 100
    cache_ttl: int = 3600

    # Data paths
    data_dir: str = str(PROJECT_ROOT / "data")
    recipes_file: str = "recipes.json"

    class Config:
        env_file = ".env"
        env_prefix = "RECIPE_"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Input limits applied by the sanitizer before values reach a prompt
SANITIZE_LIMITS = {
    "ingredient": 100,
    "recipe_context": 200,
    "query": 500,
    "preference": 50,
    "list_item": 100,
    "max_restrictions": 10,
    "max_recipe_ingredients": 50,
    "max_recipes": 20,
}

# Prompt templates for the AI features. Literal braces are doubled for str.format.
PROMPT_TEMPLATES = {
    "ingredient_substitution": """As a culinary expert, suggest 3-5 ingredient substitutions for "{ingredient}" in Chilean cuisine.

Context: {context}
Dietary restrictions: {restrictions}

Consider:
- Flavor profiles and how they complement Chilean dishes
- Cooking chemistry and how substitutes behave when cooked
- Availability and cost-effectiveness
- Dietary restrictions provided
- Traditional Chilean cooking methods

Format your response as a JSON array with this structure:
[
    {{
        "substitute": "ingredient name",
        "ratio": "1:1 or specific ratio",
        "reason": "why this works well",
        "notes": "any cooking adjustments needed"
    }}
]

Only return the JSON array, no additional text.""",

    "shopping_list": """Create an optimized shopping list for these Chilean recipes:

{recipe_list}

Preferences:
- Store layout preference: {store_layout}
- Budget consideration: {budget}
- Dietary restrictions: {restrictions}

Requirements:
1. Consolidate duplicate ingredients and calculate total quantities
2. Organize by store sections (Produce, Meat, Dairy, Pantry, etc.)
3. Suggest bulk buying opportunities for cost savings
4. Include estimated quantities for {servings} servings
5. Add notes for ingredient quality tips (especially for Chilean specialties)

Format as JSON:
{{
    "sections": [
        {{
            "name": "section name",
            "items": [
                {{
                    "item": "ingredient name",
                    "quantity": "amount needed",
                    "notes": "quality tips or alternatives",
                    "estimated_cost": "price range"
                }}
            ]
        }}
    ],
    "total_estimated_cost": "price range",
    "money_saving_tips": ["tip1", "tip2"]
}}

Only return the JSON, no additional text.""",

    "meal_plan": """Create a balanced 7-day Chilean cuisine meal plan with the following preferences:

- Cooking skill level: {skill_level}
- Prep time preference: {prep_time} (quick: <30min, moderate: 30-60min, elaborate: >60min)
- Dietary goals: {dietary_goals}
- Dietary restrictions: {restrictions}
- Budget: {budget}

Requirements:
1. Include traditional Chilean dishes with modern variations
2. Balance prep times throughout the week
3. Minimize ingredient waste by reusing ingredients across meals
4. Progress cooking skills from simple to more complex dishes
5. Include prep-ahead tips for busy days
6. Balance nutrition across the week
7. Consider seasonal Chilean ingredients

Format as JSON:
{{
    "week_plan": [
        {{
            "day": "Monday",
            "breakfast": {{
                "dish": "dish name",
                "prep_time": "time in minutes",
                "difficulty": "easy/medium/hard",
                "key_ingredients": ["ingredient1", "ingredient2"]
            }},
            "lunch": {{ ... }},
            "dinner": {{ ... }},
            "prep_notes": "what to prepare ahead"
        }}
    ],
    "shopping_strategy": {{
        "ingredient_overlap": ["ingredients used multiple times"],
        "prep_ahead_items": ["items to prep in advance"],
        "skill_progression": "how skills build through the week"
    }},
    "weekly_nutrition_balance": "summary of nutritional considerations",
    "estimated_total_cost": "weekly budget estimate"
}}

Only return the JSON, no additional text.""",

    "smart_search": """As a Chilean cuisine expert, help solve this cooking problem: "{query}"

Provide practical, actionable suggestions that focus on Chilean dishes and cooking techniques.
Consider:
- Traditional Chilean recipes that match available ingredients
- Cooking techniques suitable for the situation
- Time constraints and skill level implied in the query
- Seasonal availability of ingredients in Chile
- Regional variations of Chilean dishes
- Modern adaptations of traditional recipes

Format your response as a JSON object:
{{
    "primary_suggestions": [
        {{
            "dish_name": "recipe name",
            "description": "brief description",
            "ingredients_needed": ["additional ingredients if any"],
            "prep_time": "estimated time",
            "difficulty": "easy/medium/hard",
            "cooking_tips": "helpful tips specific to this situation"
        }}
    ],
    "alternative_options": [
        {{
            "option": "alternative approach",
            "explanation": "why this works"
        }}
    ],
    "general_advice": "overall cooking advice for this situation"
}}

Only return the JSON, no additional text.""",
}

# Messages reported by /api/ai/status for each credential state
STATUS_MESSAGES = {
    "ok": "AI features are available",
    "mock": "AI features are available (mock model)",
    "missing": "GEMINI_API_KEY environment variable not set",
    "placeholder": "Please replace placeholder API key with your actual Gemini API key",
    "too_short": "GEMINI_API_KEY appears to be invalid (too short)",
}
