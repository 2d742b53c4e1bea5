"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .catalog.category import Category, CategoryRepository, CategoryTable
from .catalog.product import Product, ProductRepository, ProductTable
from .catalog.skin_concern import SkinConcern, SkinConcernRepository, SkinConcernTable

__all__ = [
    "Category",
    "CategoryRepository",
    "CategoryTable",
    "Product",
    "ProductRepository",
    "ProductTable",
    "SkinConcern",
    "SkinConcernRepository",
    "SkinConcernTable",
]
