"""Data loading and lookup for the mock recipe catalog."""

import json
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass
class Recipe:
    """Recipe data class."""
    id: int
    name: str
    description: str
    ingredients: List[str]
    cooking_time: str = ""
    difficulty: str = "Easy"
    measured_ingredients: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    servings: Optional[int] = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, description or any ingredient."""
        query_lower = query.lower()
        return (
            query_lower in self.name.lower()
            or query_lower in self.description.lower()
            or any(query_lower in ing.lower() for ing in self.ingredients)
        )

    def to_summary(self) -> dict:
        """Convert to the card shape used by search results."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "ingredients": self.ingredients,
            "cookingTime": self.cooking_time,
            "difficulty": self.difficulty
        }

    def to_detail(self) -> dict:
        """Convert to the full recipe shape, with measured ingredients and steps."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "ingredients": self.measured_ingredients or self.ingredients,
            "instructions": self.instructions,
            "cookingTime": self.cooking_time,
            "difficulty": self.difficulty,
            "servings": self.servings
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Recipe":
        """Create Recipe from dictionary."""
        return cls(
            id=int(data.get("id", 0)),
            name=data.get("name", ""),
            description=data.get("description", ""),
            ingredients=data.get("ingredients", []),
            cooking_time=data.get("cookingTime", ""),
            difficulty=data.get("difficulty", "Easy"),
            measured_ingredients=data.get("measuredIngredients", []),
            instructions=data.get("instructions", []),
            servings=data.get("servings")
        )


class DataLoader:
    """Loads and manages recipe data."""

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)
        self._recipes: List[Recipe] = []
        self._loaded = False

    def load_recipes(self, filename: str = "recipes.json") -> List[Recipe]:
        """Load recipes from JSON file."""
        file_path = self.data_dir / filename

        if not file_path.exists():
            raise FileNotFoundError(f"Recipe file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        self._recipes = [Recipe.from_dict(item) for item in data]
        self._loaded = True
        return self._recipes

    @property
    def recipes(self) -> List[Recipe]:
        """Get loaded recipes."""
        if not self._loaded:
            self.load_recipes()
        return self._recipes

    @property
    def recipe_count(self) -> int:
        """Get number of loaded recipes."""
        return len(self._recipes)

    def get_recipe_by_id(self, recipe_id: int) -> Optional[Recipe]:
        """Get a recipe by its ID."""
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def search(self, query: str) -> List[Recipe]:
        """Search recipes in catalog order. An empty query returns everything."""
        if not query:
            return list(self.recipes)
        return [r for r in self.recipes if r.matches(query)]


@lru_cache(maxsize=1)
def get_data_loader(data_dir: str = "data", filename: str = "recipes.json") -> DataLoader:
    """Get cached data loader instance."""
    loader = DataLoader(data_dir)
    loader.load_recipes(filename)
    return loader
