"""Records and the in-memory store they live in."""

from .models import Ingredient, IngredientCost, Recipe, RecipeIngredient, RecipeResult
from .store import CostingStore, EntityCollection

__all__ = [
    "Ingredient",
    "IngredientCost",
    "Recipe",
    "RecipeIngredient",
    "RecipeResult",
    "CostingStore",
    "EntityCollection",
]
