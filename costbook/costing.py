"""
Recipe cost calculator.

Turns a recipe into a cost breakdown and a selling price:

    cost_per_gram   = pack price / pack weight
    ingredient_cost = cost_per_gram * used weight
    total_cost      = sum(ingredient_cost) + extra_costs
    final_price     = total_cost * (1 + profit_percentage / 100)
"""

import logging
import math
from typing import List, Optional

from .data.models import Ingredient, IngredientCost, RecipeResult
from .data.store import CostingStore

logger = logging.getLogger(__name__)


class DanglingIngredientReference(LookupError):
    """A recipe line points at an ingredient that is no longer stored."""

    def __init__(self, recipe_id: str, ingredient_id: str):
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id
        super().__init__(
            f"Recipe {recipe_id} references missing ingredient {ingredient_id}"
        )


def line_cost(ingredient: Ingredient, used_weight: float) -> float:
    """
    Cost of using ``used_weight`` grams of an ingredient.

    Example:
        >>> flour = Ingredient(name="Flour", price=10.0, pack_weight=1000)
        >>> line_cost(flour, 200)
        2.0
    """
    return ingredient.cost_per_gram * used_weight


class CostCalculator:
    """Prices recipes against the ingredients held in a store."""

    def __init__(self, store: CostingStore):
        """
        Initialize the calculator.

        Args:
            store: Store to resolve recipes and ingredients from
        """
        self.store = store

    def calculate(self, recipe_id: str, profit_percentage: float) -> Optional[RecipeResult]:
        """
        Calculate cost and selling price for a recipe.

        Args:
            recipe_id: Recipe to price
            profit_percentage: Markup on total cost, in percent (25 = +25%)

        Returns:
            RecipeResult, or None if the recipe does not exist

        Raises:
            DanglingIngredientReference: If a line's ingredient was deleted
            ValueError: If profit_percentage is negative or not finite
        """
        if isinstance(profit_percentage, bool) or not isinstance(profit_percentage, (int, float)):
            raise ValueError(f"profit_percentage must be a number, got {profit_percentage!r}")
        if not math.isfinite(profit_percentage) or profit_percentage < 0:
            raise ValueError(f"profit_percentage must be >= 0, got {profit_percentage}")

        recipe = self.store.recipes.get(recipe_id)
        if recipe is None:
            logger.info(f"Recipe {recipe_id} not found, nothing to calculate")
            return None

        items: List[IngredientCost] = []
        for line in recipe.ingredients:
            ingredient = self.store.ingredients.get(line.ingredient_id)
            if ingredient is None:
                logger.warning(
                    f"Recipe {recipe_id} ({recipe.name}) references missing ingredient {line.ingredient_id}"
                )
                raise DanglingIngredientReference(recipe_id, line.ingredient_id)

            items.append(IngredientCost(
                ingredient_name=ingredient.name,
                used_weight=line.used_weight,
                pack_weight=ingredient.pack_weight,
                ingredient_price=ingredient.price,
                ingredient_cost=line_cost(ingredient, line.used_weight),
                cost_per_gram=ingredient.cost_per_gram,
            ))

        ingredients_total_cost = 0.0
        for item in items:
            ingredients_total_cost += item.ingredient_cost

        total_cost = ingredients_total_cost + recipe.extra_costs
        profit_amount = total_cost * profit_percentage / 100
        final_price = total_cost + profit_amount

        logger.info(
            f"Priced recipe {recipe_id} ({recipe.name}): cost={total_cost:.4f}, "
            f"profit={profit_percentage}%, price={final_price:.4f}"
        )

        return RecipeResult(
            recipe_id=recipe_id,
            recipe_name=recipe.name,
            ingredients=items,
            ingredients_total_cost=ingredients_total_cost,
            extra_costs=recipe.extra_costs,
            total_cost=total_cost,
            profit_percentage=profit_percentage,
            profit_amount=profit_amount,
            final_price=final_price,
        )


def format_cost_breakdown(result: RecipeResult) -> str:
    """
    Format a calculation result as a plain-text report.

    Args:
        result: Output of CostCalculator.calculate

    Returns:
        Multi-line report with amounts shown to 2 decimals
    """
    lines = [
        f"{result.recipe_name}",
        f"{'=' * 60}",
    ]

    for item in result.ingredients:
        lines.append(
            f"  {item.ingredient_name:<24} {item.used_weight:>8g} g"
            f"  of {item.pack_weight:g} g @ {item.ingredient_price:.2f}"
            f"  = {item.ingredient_cost:.2f}"
        )

    lines.extend([
        f"{'-' * 60}",
        f"Ingredients total:  {result.ingredients_total_cost:.2f}",
        f"Extra costs:        {result.extra_costs:.2f}",
        f"Total cost:         {result.total_cost:.2f}",
        f"Profit ({result.profit_percentage:g}%):      {result.profit_amount:.2f}",
        f"Final price:        {result.final_price:.2f}",
    ])

    return "\n".join(lines)
