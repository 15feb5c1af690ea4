"""Pydantic models for AI feature inputs, results and response envelopes."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# --- Sanitized feature inputs ---

class SubstitutionRequest(BaseModel):
    """Sanitized input for ingredient substitution."""
    ingredient: str = Field(description="Ingredient to replace")
    dietary_restrictions: List[str] = Field(default_factory=list, description="Restrictions to respect")
    recipe_context: str = Field(default="", description="Dish the ingredient is used in")


class MealPlanPreferences(BaseModel):
    """Sanitized meal plan preferences. Empty strings fall back to prompt defaults."""
    skill_level: str = ""
    prep_time: str = ""
    budget: str = ""
    dietary_goals: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(default_factory=list)


class RecipeInput(BaseModel):
    """A recipe whose ingredients go on the shopping list."""
    name: str = ""
    ingredients: List[str] = Field(default_factory=list)


class ShoppingPreferences(BaseModel):
    store_layout: str = ""
    budget: str = ""
    dietary_restrictions: List[str] = Field(default_factory=list)
    servings: str = ""


class ShoppingListRequest(BaseModel):
    """Sanitized input for shopping list generation."""
    recipes: List[RecipeInput] = Field(min_length=1, description="Recipes to shop for")
    preferences: ShoppingPreferences = Field(default_factory=ShoppingPreferences)


class SearchQuery(BaseModel):
    query: str = Field(max_length=500, description="Free-text cooking problem")


# --- Feature results ---

class SubstitutionSuggestion(BaseModel):
    """One ranked substitute for an ingredient."""
    substitute: str
    ratio: str
    reason: str
    notes: str


class MealSlot(BaseModel):
    dish: str
    prep_time: str
    difficulty: str
    key_ingredients: List[str] = Field(default_factory=list)


class DayPlan(BaseModel):
    day: str
    breakfast: MealSlot
    lunch: MealSlot
    dinner: MealSlot
    prep_notes: str = ""


class ShoppingStrategy(BaseModel):
    ingredient_overlap: List[str] = Field(default_factory=list)
    prep_ahead_items: List[str] = Field(default_factory=list)
    skill_progression: str = ""


class MealPlan(BaseModel):
    """A week of meals with shopping and nutrition notes."""
    week_plan: List[DayPlan]
    shopping_strategy: ShoppingStrategy
    weekly_nutrition_balance: str
    estimated_total_cost: str


class ShoppingItem(BaseModel):
    item: str
    quantity: str
    notes: str
    estimated_cost: str


class ShoppingSection(BaseModel):
    name: str
    items: List[ShoppingItem] = Field(default_factory=list)


class ShoppingList(BaseModel):
    """Consolidated shopping list grouped by store section."""
    sections: List[ShoppingSection]
    total_estimated_cost: str
    money_saving_tips: List[str] = Field(default_factory=list)


class DishSuggestion(BaseModel):
    dish_name: str
    description: str
    ingredients_needed: List[str] = Field(default_factory=list)
    prep_time: str
    difficulty: str
    cooking_tips: str


class AlternativeOption(BaseModel):
    option: str
    explanation: str


class SearchResult(BaseModel):
    """Suggestions for a free-text cooking problem."""
    primary_suggestions: List[DishSuggestion]
    alternative_options: List[AlternativeOption] = Field(default_factory=list)
    general_advice: str


# --- Response envelopes ---
# Payload fields are loosely typed: model output is passed through after a
# top-level type check only.

class StatusResponse(BaseModel):
    """Response body for the /api/ai/status endpoint."""
    configured: bool = Field(description="Whether a usable Gemini key is present")
    message: str = Field(description="Human readable configuration state")


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class SubstitutionResponse(BaseModel):
    ingredient: str
    substitutions: List[Any]
    generated_at: str


class ShoppingListResponse(BaseModel):
    shopping_list: Dict[str, Any]
    recipe_count: int
    generated_at: str


class MealPlanResponse(BaseModel):
    meal_plan: Dict[str, Any]
    preferences_used: Dict[str, Any]
    generated_at: str


class SmartSearchResponse(BaseModel):
    query: str
    suggestions: Dict[str, Any]
    generated_at: str
