"""
Data models for Costbook.

These models define the core entities used throughout the system:
- Ingredient: a purchasable pack with its price and weight
- RecipeIngredient: a weighed line in a recipe, pointing at an ingredient
- Recipe: ingredient lines plus flat extra costs
- IngredientCost / RecipeResult: output of a cost calculation
"""

from dataclasses import dataclass, field
import math
from typing import List, Optional, Dict


def _check_amount(label: str, value: float, allow_zero: bool = True) -> float:
    """Validate a monetary or weight amount and return it as a float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{label} must be finite, got {value}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ValueError(f"{label} must be {bound}, got {value}")
    return value


@dataclass
class Ingredient:
    """An ingredient bought by the pack.

    Pack weight is in grams and must be strictly positive so that
    cost per gram is always defined.
    """
    name: str
    price: float  # Price of one full pack
    pack_weight: float  # Grams in one full pack
    id: Optional[str] = None  # Generated on add

    def __post_init__(self):
        self.price = _check_amount("price", self.price)
        self.pack_weight = _check_amount("pack_weight", self.pack_weight, allow_zero=False)

    @property
    def cost_per_gram(self) -> float:
        return self.price / self.pack_weight

    def __str__(self) -> str:
        return f"{self.name} ({self.pack_weight:g} g @ {self.price:.2f})"

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "pack_weight": self.pack_weight,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Ingredient":
        """Create Ingredient from dictionary."""
        return cls(
            id=data.get("id"),
            name=data["name"],
            price=data["price"],
            pack_weight=data["pack_weight"],
        )


@dataclass
class RecipeIngredient:
    """One line of a recipe: how many grams of which ingredient."""

    ingredient_id: str  # Weak reference, may dangle after a delete
    used_weight: float  # Grams

    def __post_init__(self):
        self.used_weight = _check_amount("used_weight", self.used_weight)

    def to_dict(self) -> Dict:
        return {
            "ingredient_id": self.ingredient_id,
            "used_weight": self.used_weight,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "RecipeIngredient":
        return cls(**data)


@dataclass
class Recipe:
    """A recipe made of weighed ingredient lines plus flat extra costs."""

    name: str
    ingredients: List[RecipeIngredient] = field(default_factory=list)
    extra_costs: float = 0.0  # Electricity, gas, packaging, etc
    id: Optional[str] = None  # Generated on add

    def __post_init__(self):
        self.extra_costs = _check_amount("extra_costs", self.extra_costs)
        for line in self.ingredients:
            if not isinstance(line, RecipeIngredient):
                raise ValueError(f"ingredient lines must be RecipeIngredient, got {line!r}")

    def ingredient_ids(self) -> List[str]:
        """
        Get the ingredient ids referenced by this recipe, in line order.

        Returns:
            List of ingredient ids (duplicates kept)
        """
        return [line.ingredient_id for line in self.ingredients]

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "ingredients": [line.to_dict() for line in self.ingredients],
            "extra_costs": self.extra_costs,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Recipe":
        """Create Recipe from dictionary.

        Args:
            data: Dictionary representation of Recipe

        Returns:
            Recipe object with its ingredient lines parsed
        """
        raw_lines = data.get("ingredients", [])
        if not isinstance(raw_lines, list):
            raise ValueError(f"ingredients must be a list, got {raw_lines!r}")
        lines = [
            RecipeIngredient.from_dict(line) if isinstance(line, dict) else line
            for line in raw_lines
        ]
        return cls(
            id=data.get("id"),
            name=data["name"],
            ingredients=lines,
            extra_costs=data.get("extra_costs", 0.0),
        )


@dataclass
class IngredientCost:
    """Calculated cost of a single recipe line."""

    ingredient_name: str
    used_weight: float
    pack_weight: float
    ingredient_price: float  # Pack price
    ingredient_cost: float  # Cost of the used weight
    cost_per_gram: float

    def to_dict(self) -> Dict:
        return {
            "ingredient_name": self.ingredient_name,
            "used_weight": self.used_weight,
            "pack_weight": self.pack_weight,
            "ingredient_price": self.ingredient_price,
            "ingredient_cost": self.ingredient_cost,
            "cost_per_gram": self.cost_per_gram,
        }


@dataclass
class RecipeResult:
    """Cost breakdown and selling price for one recipe."""

    recipe_id: str
    recipe_name: str
    ingredients: List[IngredientCost]
    ingredients_total_cost: float
    extra_costs: float
    total_cost: float
    profit_percentage: float
    profit_amount: float
    final_price: float

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "recipe_id": self.recipe_id,
            "recipe_name": self.recipe_name,
            "ingredients": [item.to_dict() for item in self.ingredients],
            "ingredients_total_cost": self.ingredients_total_cost,
            "extra_costs": self.extra_costs,
            "total_cost": self.total_cost,
            "profit_percentage": self.profit_percentage,
            "profit_amount": self.profit_amount,
            "final_price": self.final_price,
        }
