#!/usr/bin/env python3
"""
Main entry point for Costbook.

Ties the store and the cost calculator together, and provides the CLI:
- serve: run the JSON API
- calculate: price one recipe from a catalog file
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import Settings, configure_logging
from .costing import CostCalculator, DanglingIngredientReference, format_cost_breakdown
from .data.catalog import load_catalog
from .data.store import CostingStore

logger = logging.getLogger(__name__)


class CostingAssistant:
    """Owns a store and a calculator for one session."""

    def __init__(self, store: Optional[CostingStore] = None, settings: Optional[Settings] = None):
        """
        Initialize the assistant.

        Args:
            store: Existing store to work on (a new empty one if omitted)
            settings: Application settings (defaults if omitted)
        """
        self.store = store if store is not None else CostingStore()
        self.settings = settings or Settings()
        self.calculator = CostCalculator(self.store)
        logger.info(f"Costing assistant initialized ({self.store!r})")

    def load_catalog(self, path: Union[str, Path]) -> CostingStore:
        """Load a JSON catalog file into this assistant's store."""
        return load_catalog(path, self.store)

    def price_recipe(self, recipe_id: str, profit_percentage: Optional[float] = None) -> Dict[str, Any]:
        """
        Price a recipe.

        Args:
            recipe_id: Recipe ID
            profit_percentage: Markup in percent (settings default if omitted)

        Returns:
            Result dictionary with "success" and either "result" or "error"
        """
        if profit_percentage is None:
            profit_percentage = self.settings.default_profit_percentage

        try:
            result = self.calculator.calculate(recipe_id, profit_percentage)
        except DanglingIngredientReference as e:
            return {
                "success": False,
                "error": str(e),
                "ingredient_id": e.ingredient_id,
            }

        if result is None:
            return {
                "success": False,
                "error": f"Recipe {recipe_id} not found",
            }

        return {
            "success": True,
            "result": result,
            "report": format_cost_breakdown(result),
        }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="costbook", description="Recipe cost and pricing assistant")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the JSON API")
    serve.add_argument("--host", type=str, default=None, help="Bind address (default: COSTBOOK_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: COSTBOOK_PORT)")
    serve.add_argument("--catalog", type=str, default=None, help="JSON catalog to preload")

    calculate = subparsers.add_parser("calculate", help="Price a recipe from a catalog file")
    calculate.add_argument("catalog", type=str, help="JSON catalog file")
    calculate.add_argument("recipe_id", type=str, help="Recipe ID to price")
    calculate.add_argument(
        "--profit",
        type=float,
        default=None,
        help="Profit percentage (default: COSTBOOK_DEFAULT_PROFIT)",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings)

    assistant = CostingAssistant(settings=settings)

    if args.command == "serve":
        from .web.app import create_app

        if args.catalog:
            assistant.load_catalog(args.catalog)
        app = create_app(store=assistant.store, settings=settings)
        app.run(host=args.host or settings.host, port=args.port or settings.port)
        return 0

    # calculate
    try:
        assistant.load_catalog(args.catalog)
        outcome = assistant.price_recipe(args.recipe_id, args.profit)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}")
        return 1

    if not outcome["success"]:
        print(f"❌ Error: {outcome['error']}")
        return 1

    print(outcome["report"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
