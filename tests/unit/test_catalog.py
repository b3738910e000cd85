"""
Unit tests for JSON catalog loading.
"""

import json

import pytest

from costbook.costing import CostCalculator
from costbook.data.catalog import load_catalog
from costbook.data.store import CostingStore


class TestLoadCatalog:
    """Test load_catalog."""

    def test_load_into_new_store(self, catalog_file):
        """Test loading creates a populated store."""
        store = load_catalog(catalog_file)

        assert [i.name for i in store.ingredients.list()] == ["Flour", "Sugar"]
        assert store.recipes.get("rcp_r").name == "Shortbread"

    def test_loaded_catalog_prices(self, catalog_file):
        """Test a loaded catalog can be priced straight away."""
        store = load_catalog(str(catalog_file))

        result = CostCalculator(store).calculate("rcp_r", 25)

        assert result.final_price == pytest.approx(4.375)

    def test_load_into_existing_store(self, catalog_file, store):
        """Test records are appended to a given store."""
        returned = load_catalog(catalog_file, store)

        assert returned is store
        assert len(store.ingredients) == 2

    def test_missing_ids_are_generated(self, tmp_path):
        """Test catalog records without ids get generated ones."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "ingredients": [{"name": "Salt", "price": 1.0, "pack_weight": 1000}],
        }), encoding="utf-8")

        store = load_catalog(path)

        assert store.ingredients.list()[0].id.startswith("ing_")
        assert store.recipes.list() == []

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Test malformed JSON raises ValueError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="not valid JSON"):
            load_catalog(path)

    def test_top_level_must_be_object(self, tmp_path):
        """Test a JSON list is rejected."""
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_catalog(path)

    @pytest.mark.parametrize("record", [
        {"name": "Air", "price": 1.0, "pack_weight": 0},
        {"name": "No price", "pack_weight": 100},
        "just a string",
    ])
    def test_invalid_ingredient(self, tmp_path, record):
        """Test a bad record names its position."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"ingredients": [record]}), encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid ingredient #0"):
            load_catalog(path, CostingStore())

    @pytest.mark.parametrize("record", [
        {"id": "r", "name": "Bad", "ingredients": [1]},
        {"name": "Bad", "ingredients": "ab"},
        {"name": "Bad", "ingredients": [{"ingredient_id": "ing_a"}]},
        {"name": "Bad", "ingredients": [{"ingredientId": "ing_a", "usedWeight": 200}]},
    ])
    def test_invalid_recipe(self, tmp_path, record):
        """Test a recipe with malformed lines names its position."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"recipes": [record]}), encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid recipe #0"):
            load_catalog(path, CostingStore())

    @pytest.mark.parametrize("raw, section", [
        ({"ingredients": None}, "ingredients"),
        ({"ingredients": 5}, "ingredients"),
        ({"ingredients": [], "recipes": {}}, "recipes"),
        ({"recipes": "rcp_r"}, "recipes"),
    ])
    def test_section_must_be_list(self, tmp_path, raw, section):
        """Test a non-list section is rejected with its name."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(raw), encoding="utf-8")

        with pytest.raises(ValueError, match=f"'{section}' must be a list"):
            load_catalog(path, CostingStore())
