"""Prompt rendering for the AI features.

Every builder is a pure function of already-sanitized input, so the same
input always renders the same prompt.
"""

from config.settings import PROMPT_TEMPLATES
from cocina_ai.models.schemas import (
    MealPlanPreferences,
    SearchQuery,
    ShoppingListRequest,
    SubstitutionRequest,
)


def _join_or(values, default: str) -> str:
    return ", ".join(values) if values else default


def build_substitution_prompt(request: SubstitutionRequest) -> str:
    return PROMPT_TEMPLATES["ingredient_substitution"].format(
        ingredient=request.ingredient,
        context=request.recipe_context or "General cooking",
        restrictions=_join_or(request.dietary_restrictions, "None"),
    )


def build_shopping_list_prompt(request: ShoppingListRequest) -> str:
    recipe_list = "\n".join(
        f"{recipe.name}: {', '.join(recipe.ingredients)}" for recipe in request.recipes
    )
    preferences = request.preferences
    return PROMPT_TEMPLATES["shopping_list"].format(
        recipe_list=recipe_list,
        store_layout=preferences.store_layout or "category-based",
        budget=preferences.budget or "moderate",
        restrictions=_join_or(preferences.dietary_restrictions, "None"),
        servings=preferences.servings or "4",
    )


def build_meal_plan_prompt(preferences: MealPlanPreferences) -> str:
    return PROMPT_TEMPLATES["meal_plan"].format(
        skill_level=preferences.skill_level or "intermediate",
        prep_time=preferences.prep_time or "moderate",
        dietary_goals=_join_or(preferences.dietary_goals, "balanced nutrition"),
        restrictions=_join_or(preferences.dietary_restrictions, "none"),
        budget=preferences.budget or "moderate",
    )


def build_smart_search_prompt(search: SearchQuery) -> str:
    return PROMPT_TEMPLATES["smart_search"].format(query=search.query)
