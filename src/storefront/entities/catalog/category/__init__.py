"""Entity package: Category."""

from .entity import Category, CategoryCreate
from .repository import CategoryRepository
from .table import CategoryTable

__all__ = ["Category", "CategoryCreate", "CategoryRepository", "CategoryTable"]
