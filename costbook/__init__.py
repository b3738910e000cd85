"""
Costbook: ingredient and recipe costing for small food producers.

Stores ingredients and recipes in memory and prices recipes from a
target profit margin.
"""

__version__ = "0.1.0"
