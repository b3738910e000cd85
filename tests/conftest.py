"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import json

import pytest

from costbook.config import Settings
from costbook.costing import CostCalculator
from costbook.data.models import Ingredient, Recipe, RecipeIngredient
from costbook.data.store import CostingStore


@pytest.fixture
def store():
    """
    Create a fresh, empty CostingStore for each test.

    Usage in tests:
        def test_something(store):
            store.ingredients.add(...)
    """
    return CostingStore()


@pytest.fixture
def calculator(store):
    """Calculator bound to the per-test store."""
    return CostCalculator(store)


@pytest.fixture
def flour():
    """10.00 per 1000 g pack, so 0.01 per gram."""
    return Ingredient(id="ing_a", name="Flour", price=10.0, pack_weight=1000)


@pytest.fixture
def sugar():
    """5.00 per 500 g pack, so 0.01 per gram."""
    return Ingredient(id="ing_b", name="Sugar", price=5.0, pack_weight=500)


@pytest.fixture
def shortbread():
    """200 g flour + 100 g sugar + 0.50 extra costs = 3.50 total cost."""
    return Recipe(
        id="rcp_r",
        name="Shortbread",
        ingredients=[
            RecipeIngredient(ingredient_id="ing_a", used_weight=200),
            RecipeIngredient(ingredient_id="ing_b", used_weight=100),
        ],
        extra_costs=0.5,
    )


@pytest.fixture
def stocked_store(store, flour, sugar, shortbread):
    """Store holding flour, sugar and the shortbread recipe."""
    store.ingredients.add(flour)
    store.ingredients.add(sugar)
    store.recipes.add(shortbread)
    return store


@pytest.fixture
def test_settings():
    """Settings that ignore the environment and .env files."""
    return Settings(default_profit_percentage=25.0, secret_key="test_secret_key")


@pytest.fixture
def catalog_file(tmp_path, flour, sugar, shortbread):
    """JSON catalog holding the shortbread scenario."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({
        "ingredients": [flour.to_dict(), sugar.to_dict()],
        "recipes": [shortbread.to_dict()],
    }), encoding="utf-8")
    return path
