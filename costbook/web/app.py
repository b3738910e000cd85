"""
Flask JSON API for Costbook.

Exposes ingredient and recipe CRUD plus recipe pricing over HTTP.
Request bodies are validated with pydantic before reaching the store, so
the store and calculator only ever see parsed numbers.

Run with:
    flask --app costbook.web.app run
"""

import logging
from datetime import datetime
from typing import List, Optional

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS
from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from ..config import Settings
from ..costing import CostCalculator, DanglingIngredientReference
from ..data.models import Ingredient, Recipe, RecipeIngredient
from ..data.store import CostingStore

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__)


# =============================================================================
# Request models
# =============================================================================

class IngredientPayload(BaseModel):
    """Request body for creating or replacing an ingredient."""
    name: str
    price: float = Field(ge=0, allow_inf_nan=False)
    pack_weight: float = Field(
        gt=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("pack_weight", "packWeight"),
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    def to_ingredient(self, ingredient_id: Optional[str] = None) -> Ingredient:
        return Ingredient(
            id=ingredient_id,
            name=self.name,
            price=self.price,
            pack_weight=self.pack_weight,
        )


class RecipeLinePayload(BaseModel):
    """One ingredient line inside a recipe request."""
    ingredient_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("ingredient_id", "ingredientId"),
    )
    used_weight: float = Field(
        ge=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("used_weight", "usedWeight"),
    )


class RecipePayload(BaseModel):
    """Request body for creating or replacing a recipe."""
    name: str
    ingredients: List[RecipeLinePayload] = Field(min_length=1)
    extra_costs: float = Field(
        default=0.0,
        ge=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("extra_costs", "extraCosts"),
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("extra_costs", mode="before")
    @classmethod
    def blank_extra_costs_is_zero(cls, v):
        # Empty form fields mean "no extra costs"
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.0
        return v

    def to_recipe(self, recipe_id: Optional[str] = None) -> Recipe:
        return Recipe(
            id=recipe_id,
            name=self.name,
            ingredients=[
                RecipeIngredient(ingredient_id=line.ingredient_id, used_weight=line.used_weight)
                for line in self.ingredients
            ],
            extra_costs=self.extra_costs,
        )


class CalculateRequest(BaseModel):
    """Request body for pricing a recipe."""
    profit_percentage: Optional[float] = Field(
        default=None,
        ge=0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("profit_percentage", "profitPercentage"),
    )


# =============================================================================
# Helpers
# =============================================================================

def _store() -> CostingStore:
    return current_app.extensions["costbook.store"]


def _calculator() -> CostCalculator:
    return current_app.extensions["costbook.calculator"]


def _settings() -> Settings:
    return current_app.extensions["costbook.settings"]


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _not_found(kind: str, record_id: str):
    return jsonify({"success": False, "error": f"{kind} {record_id} not found"}), 404


# =============================================================================
# Routes
# =============================================================================

@api.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy", "timestamp": datetime.now().isoformat()}), 200


@api.route('/api/ingredients', methods=['GET'])
def list_ingredients():
    ingredients = _store().ingredients.list()
    return jsonify({"success": True, "ingredients": [i.to_dict() for i in ingredients]})


@api.route('/api/ingredients', methods=['POST'])
def create_ingredient():
    payload = IngredientPayload.model_validate(_json_body())
    ingredient = _store().ingredients.add(payload.to_ingredient())
    logger.info(f"Created ingredient {ingredient.id} ({ingredient.name})")
    return jsonify({"success": True, "ingredient": ingredient.to_dict()}), 201


@api.route('/api/ingredients/<ingredient_id>', methods=['GET'])
def get_ingredient(ingredient_id):
    ingredient = _store().ingredients.get(ingredient_id)
    if ingredient is None:
        return _not_found("Ingredient", ingredient_id)
    return jsonify({"success": True, "ingredient": ingredient.to_dict()})


@api.route('/api/ingredients/<ingredient_id>', methods=['PUT'])
def update_ingredient(ingredient_id):
    payload = IngredientPayload.model_validate(_json_body())
    store = _store()
    if not store.ingredients.contains(ingredient_id):
        return _not_found("Ingredient", ingredient_id)
    ingredient = store.ingredients.update(ingredient_id, payload.to_ingredient(ingredient_id))
    logger.info(f"Updated ingredient {ingredient_id}")
    return jsonify({"success": True, "ingredient": ingredient.to_dict()})


@api.route('/api/ingredients/<ingredient_id>', methods=['DELETE'])
def delete_ingredient(ingredient_id):
    _store().ingredients.delete(ingredient_id)
    logger.info(f"Deleted ingredient {ingredient_id}")
    return "", 204


@api.route('/api/recipes', methods=['GET'])
def list_recipes():
    recipes = _store().recipes.list()
    return jsonify({"success": True, "recipes": [r.to_dict() for r in recipes]})


@api.route('/api/recipes', methods=['POST'])
def create_recipe():
    payload = RecipePayload.model_validate(_json_body())
    recipe = _store().recipes.add(payload.to_recipe())
    logger.info(f"Created recipe {recipe.id} ({recipe.name}) with {len(recipe.ingredients)} lines")
    return jsonify({"success": True, "recipe": recipe.to_dict()}), 201


@api.route('/api/recipes/<recipe_id>', methods=['GET'])
def get_recipe(recipe_id):
    recipe = _store().recipes.get(recipe_id)
    if recipe is None:
        return _not_found("Recipe", recipe_id)
    return jsonify({"success": True, "recipe": recipe.to_dict()})


@api.route('/api/recipes/<recipe_id>', methods=['PUT'])
def update_recipe(recipe_id):
    payload = RecipePayload.model_validate(_json_body())
    store = _store()
    if not store.recipes.contains(recipe_id):
        return _not_found("Recipe", recipe_id)
    recipe = store.recipes.update(recipe_id, payload.to_recipe(recipe_id))
    logger.info(f"Updated recipe {recipe_id}")
    return jsonify({"success": True, "recipe": recipe.to_dict()})


@api.route('/api/recipes/<recipe_id>', methods=['DELETE'])
def delete_recipe(recipe_id):
    _store().recipes.delete(recipe_id)
    logger.info(f"Deleted recipe {recipe_id}")
    return "", 204


@api.route('/api/recipes/<recipe_id>/calculate', methods=['POST'])
def calculate_recipe(recipe_id):
    """Price a recipe. Body: {"profit_percentage": 25} (optional)."""
    body = CalculateRequest.model_validate(_json_body())
    profit = body.profit_percentage
    if profit is None:
        profit = _settings().default_profit_percentage

    try:
        result = _calculator().calculate(recipe_id, profit)
    except ValueError as e:
        logger.warning(f"Rejected calculation for recipe {recipe_id}: {e}")
        return jsonify({"success": False, "error": str(e)}), 400
    if result is None:
        return _not_found("Recipe", recipe_id)
    return jsonify({"success": True, "result": result.to_dict()})


# =============================================================================
# Error handlers
# =============================================================================

@api.app_errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    logger.warning(f"Rejected request to {request.path}: {e.error_count()} validation error(s)")
    return jsonify({
        "success": False,
        "error": "Invalid request",
        "details": e.errors(include_url=False, include_context=False),
    }), 400


@api.app_errorhandler(DanglingIngredientReference)
def handle_dangling_reference(e: DanglingIngredientReference):
    return jsonify({
        "success": False,
        "error": str(e),
        "recipe_id": e.recipe_id,
        "ingredient_id": e.ingredient_id,
    }), 409


def create_app(store: Optional[CostingStore] = None, settings: Optional[Settings] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        store: Store to serve (a fresh, empty one if omitted)
        settings: Settings to use (read from the environment if omitted)

    Returns:
        Configured Flask app
    """
    if settings is None:
        settings = Settings.from_env()
    if store is None:
        store = CostingStore()

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    CORS(app)

    app.extensions["costbook.store"] = store
    app.extensions["costbook.calculator"] = CostCalculator(store)
    app.extensions["costbook.settings"] = settings
    app.register_blueprint(api)

    logger.info(f"Costbook app created ({store!r}, default profit {settings.default_profit_percentage}%)")
    return app
