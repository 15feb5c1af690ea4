"""Turns raw model text into feature payloads, degrading to fixed fallbacks."""

import json
import logging
from typing import Any, List

from .model_interface import GatewayError, ModelGateway
from cocina_ai.models.schemas import (
    AlternativeOption,
    DayPlan,
    DishSuggestion,
    MealPlan,
    MealSlot,
    SearchResult,
    ShoppingItem,
    ShoppingList,
    ShoppingSection,
    ShoppingStrategy,
    SubstitutionSuggestion,
)

logger = logging.getLogger(__name__)

UNAVAILABLE_NOTE = "AI service temporarily unavailable"


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def strict_loads(text: str) -> Any:
    """``json.loads`` that refuses NaN, Infinity and -Infinity."""
    return json.loads(text, parse_constant=_reject_constant)


def interpret(raw_text: str, fallback: Any, expected_type: type) -> Any:
    """
    Parse model output as strict JSON.

    Returns the fallback when the text is not valid JSON or its top-level
    value is not of ``expected_type``. Nested fields are passed through
    unchecked. NaN and Infinity are rejected as malformed.
    """
    try:
        parsed = strict_loads(raw_text)
    except (TypeError, ValueError) as e:
        logger.warning(f"Model returned malformed JSON, using fallback: {e}")
        return fallback

    if not isinstance(parsed, expected_type):
        logger.warning(
            f"Model returned {type(parsed).__name__}, expected {expected_type.__name__}; using fallback"
        )
        return fallback
    return parsed


def run_with_fallback(gateway: ModelGateway, prompt: str, fallback: Any, expected_type: type) -> Any:
    """Call the gateway once and interpret the result, absorbing gateway failures."""
    try:
        raw_text = gateway.call(prompt)
    except GatewayError as e:
        logger.warning(f"Gateway call failed ({e.kind.value}), using fallback: {e}")
        return fallback
    return interpret(raw_text, fallback, expected_type)


# --- Fallback payloads ---

def substitution_fallback() -> List[dict]:
    return [
        SubstitutionSuggestion(
            substitute="Check recipe notes",
            ratio="1:1",
            reason=UNAVAILABLE_NOTE,
            notes="Please consult traditional cooking resources",
        ).model_dump()
    ]


def shopping_list_fallback(recipe_ingredients: List[List[str]]) -> dict:
    """List every requested ingredient unconsolidated in a single section."""
    items = [
        ShoppingItem(
            item=ingredient,
            quantity="As needed",
            notes=UNAVAILABLE_NOTE,
            estimated_cost="Variable",
        )
        for ingredients in recipe_ingredients
        for ingredient in ingredients
    ]
    return ShoppingList(
        sections=[ShoppingSection(name="All Items", items=items)],
        total_estimated_cost="Variable",
        money_saving_tips=["Check local markets for fresh ingredients"],
    ).model_dump()


_WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_BASIC_BREAKFAST = MealSlot(
    dish="Traditional Chilean Breakfast",
    prep_time="15 minutes",
    difficulty="easy",
    key_ingredients=["bread", "avocado", "tomato"],
)

_BASIC_LUNCHES = [
    MealSlot(dish="Simple Empanadas", prep_time="45 minutes", difficulty="medium",
             key_ingredients=["ground beef", "onions", "empanada dough"]),
    MealSlot(dish="Porotos Granados", prep_time="60 minutes", difficulty="medium",
             key_ingredients=["cranberry beans", "corn", "squash"]),
    MealSlot(dish="Ensalada Chilena", prep_time="15 minutes", difficulty="easy",
             key_ingredients=["tomato", "onion", "cilantro"]),
]

_BASIC_DINNERS = [
    MealSlot(dish="Cazuela", prep_time="90 minutes", difficulty="medium",
             key_ingredients=["beef", "pumpkin", "corn", "potatoes"]),
    MealSlot(dish="Pastel de Choclo", prep_time="60 minutes", difficulty="medium",
             key_ingredients=["corn", "ground meat", "chicken", "olives"]),
    MealSlot(dish="Charquicán", prep_time="45 minutes", difficulty="easy",
             key_ingredients=["potatoes", "pumpkin", "ground beef", "onion"]),
]


def meal_plan_fallback() -> dict:
    """A generic week cycling through a few basic Chilean dishes."""
    week_plan = [
        DayPlan(
            day=day,
            breakfast=_BASIC_BREAKFAST,
            lunch=_BASIC_LUNCHES[index % len(_BASIC_LUNCHES)],
            dinner=_BASIC_DINNERS[index % len(_BASIC_DINNERS)],
            prep_notes=f"{UNAVAILABLE_NOTE} - using basic meal suggestions",
        )
        for index, day in enumerate(_WEEKDAYS)
    ]
    return MealPlan(
        week_plan=week_plan,
        shopping_strategy=ShoppingStrategy(
            ingredient_overlap=["Basic ingredients"],
            prep_ahead_items=["Prepare vegetables in advance"],
            skill_progression="Start with simple dishes",
        ),
        weekly_nutrition_balance="Aim for balanced meals with proteins, vegetables, and grains",
        estimated_total_cost="Moderate budget required",
    ).model_dump()


def smart_search_fallback() -> dict:
    return SearchResult(
        primary_suggestions=[
            DishSuggestion(
                dish_name="Basic Chilean Dish",
                description=UNAVAILABLE_NOTE,
                ingredients_needed=["Check traditional recipes"],
                prep_time="Variable",
                difficulty="medium",
                cooking_tips="Consult Chilean cooking resources",
            )
        ],
        alternative_options=[
            AlternativeOption(
                option="Traditional approach",
                explanation="Use classic Chilean cooking methods",
            )
        ],
        general_advice=f"{UNAVAILABLE_NOTE}. Please consult traditional Chilean cooking resources.",
    ).model_dump()
