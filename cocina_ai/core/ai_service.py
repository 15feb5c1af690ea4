"""AI cooking features: substitutions, shopping lists, meal plans and smart search."""

import logging
from typing import Any, Dict, List, Optional

from config.settings import SANITIZE_LIMITS
from cocina_ai.models.schemas import (
    MealPlanPreferences,
    RecipeInput,
    SearchQuery,
    ShoppingListRequest,
    ShoppingPreferences,
    SubstitutionRequest,
)
from .interpreter import (
    meal_plan_fallback,
    run_with_fallback,
    shopping_list_fallback,
    smart_search_fallback,
    substitution_fallback,
)
from .model_interface import ModelGateway
from .prompts import (
    build_meal_plan_prompt,
    build_shopping_list_prompt,
    build_smart_search_prompt,
    build_substitution_prompt,
)
from .sanitizer import sanitize, sanitize_list

logger = logging.getLogger(__name__)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _restrictions(values: Any) -> List[str]:
    return sanitize_list(values, SANITIZE_LIMITS["list_item"], SANITIZE_LIMITS["max_restrictions"])


class AIService:
    """
    Runs each AI feature against the model gateway.

    Every feature sanitizes its input, renders a prompt, makes one gateway
    call and interprets the reply. Provider failures and malformed replies
    never raise; they produce the feature's fallback payload instead.
    """

    def __init__(self, gateway: ModelGateway):
        self.gateway = gateway

    def is_configured(self) -> bool:
        return self.gateway.is_configured()

    def get_ingredient_substitutions(
        self,
        ingredient: str,
        dietary_restrictions: Optional[List[str]] = None,
        recipe_context: str = ""
    ) -> List[dict]:
        """Suggest ranked substitutes for an ingredient."""
        if not ingredient or not isinstance(ingredient, str):
            raise ValueError("Invalid ingredient provided")

        request = SubstitutionRequest(
            ingredient=sanitize(ingredient, SANITIZE_LIMITS["ingredient"]),
            dietary_restrictions=_restrictions(dietary_restrictions),
            recipe_context=sanitize(recipe_context, SANITIZE_LIMITS["recipe_context"]),
        )
        logger.info(f"Requesting substitutions for '{request.ingredient}'")
        return run_with_fallback(
            self.gateway,
            build_substitution_prompt(request),
            substitution_fallback(),
            list
        )

    def generate_shopping_list(self, recipes: List[Any], preferences: Optional[dict] = None) -> dict:
        """Build a consolidated shopping list for one or more recipes."""
        if not recipes or not isinstance(recipes, list):
            raise ValueError("At least one recipe is required")

        preferences = _as_dict(preferences)
        recipe_inputs = []
        for recipe in recipes[:SANITIZE_LIMITS["max_recipes"]]:
            recipe = _as_dict(recipe)
            recipe_inputs.append(RecipeInput(
                name=sanitize(recipe.get("name"), SANITIZE_LIMITS["ingredient"]),
                ingredients=sanitize_list(
                    recipe.get("ingredients"),
                    SANITIZE_LIMITS["list_item"],
                    SANITIZE_LIMITS["max_recipe_ingredients"]
                ),
            ))

        servings = preferences.get("servings")
        request = ShoppingListRequest(
            recipes=recipe_inputs,
            preferences=ShoppingPreferences(
                store_layout=sanitize(preferences.get("storeLayout"), SANITIZE_LIMITS["preference"]),
                budget=sanitize(preferences.get("budget"), SANITIZE_LIMITS["preference"]),
                dietary_restrictions=_restrictions(preferences.get("dietaryRestrictions")),
                servings=sanitize(str(servings) if servings else "", SANITIZE_LIMITS["preference"]),
            ),
        )
        logger.info(f"Requesting shopping list for {len(request.recipes)} recipes")
        return run_with_fallback(
            self.gateway,
            build_shopping_list_prompt(request),
            shopping_list_fallback([r.ingredients for r in request.recipes]),
            dict
        )

    def create_meal_plan(self, preferences: Optional[dict] = None) -> dict:
        """Plan a week of Chilean meals."""
        preferences = _as_dict(preferences)
        plan_preferences = MealPlanPreferences(
            skill_level=sanitize(preferences.get("skillLevel"), SANITIZE_LIMITS["preference"]),
            prep_time=sanitize(preferences.get("prepTime"), SANITIZE_LIMITS["preference"]),
            budget=sanitize(preferences.get("budget"), SANITIZE_LIMITS["preference"]),
            dietary_goals=_restrictions(preferences.get("dietaryGoals")),
            dietary_restrictions=_restrictions(preferences.get("dietaryRestrictions")),
        )
        logger.info("Requesting weekly meal plan")
        return run_with_fallback(
            self.gateway,
            build_meal_plan_prompt(plan_preferences),
            meal_plan_fallback(),
            dict
        )

    def smart_search(self, query: str) -> dict:
        """Answer a free-text cooking problem with dish suggestions."""
        if not query or not isinstance(query, str):
            raise ValueError("Invalid search query provided")

        search = SearchQuery(query=sanitize(query, SANITIZE_LIMITS["query"]))
        logger.info(f"Running smart search for '{search.query}'")
        return run_with_fallback(
            self.gateway,
            build_smart_search_prompt(search),
            smart_search_fallback(),
            dict
        )
