"""
Load ingredients and recipes from a JSON catalog file.

Expected shape:

    {
      "ingredients": [{"id": "flour", "name": "Flour", "price": 10.0, "pack_weight": 1000}],
      "recipes": [{"id": "bread", "name": "Bread", "extra_costs": 0.5,
                   "ingredients": [{"ingredient_id": "flour", "used_weight": 200}]}]
    }
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from .models import Ingredient, Recipe
from .store import CostingStore

logger = logging.getLogger(__name__)


def load_catalog(path: Union[str, Path], store: Optional[CostingStore] = None) -> CostingStore:
    """
    Load a catalog file into a store.

    Args:
        path: JSON file to read
        store: Store to fill (a new one is created if omitted)

    Returns:
        The populated store

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the JSON or a record in it is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Catalog {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Catalog {path} must contain a JSON object")

    if store is None:
        store = CostingStore()

    for kind, model, collection in (
        ("ingredient", Ingredient, store.ingredients),
        ("recipe", Recipe, store.recipes),
    ):
        section = raw.get(f"{kind}s", [])
        if not isinstance(section, list):
            raise ValueError(f"Catalog {path}: '{kind}s' must be a list")
        for index, data in enumerate(section):
            try:
                collection.add(model.from_dict(data))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid {kind} #{index} in {path}: {e}") from e

    logger.info(
        f"Loaded catalog {path}: {len(store.ingredients)} ingredients, "
        f"{len(store.recipes)} recipes"
    )
    return store
