"""API models for the Cocina AI application."""

from .schemas import (
    SubstitutionRequest,
    MealPlanPreferences,
    RecipeInput,
    ShoppingPreferences,
    ShoppingListRequest,
    SearchQuery,
    SubstitutionSuggestion,
    MealSlot,
    DayPlan,
    ShoppingStrategy,
    MealPlan,
    ShoppingItem,
    ShoppingSection,
    ShoppingList,
    DishSuggestion,
    AlternativeOption,
    SearchResult,
    StatusResponse,
    ErrorResponse,
    SubstitutionResponse,
    ShoppingListResponse,
    MealPlanResponse,
    SmartSearchResponse,
)

__all__ = [
    "SubstitutionRequest",
    "MealPlanPreferences",
    "RecipeInput",
    "ShoppingPreferences",
    "ShoppingListRequest",
    "SearchQuery",
    "SubstitutionSuggestion",
    "MealSlot",
    "DayPlan",
    "ShoppingStrategy",
    "MealPlan",
    "ShoppingItem",
    "ShoppingSection",
    "ShoppingList",
    "DishSuggestion",
    "AlternativeOption",
    "SearchResult",
    "StatusResponse",
    "ErrorResponse",
    "SubstitutionResponse",
    "ShoppingListResponse",
    "MealPlanResponse",
    "SmartSearchResponse",
]
