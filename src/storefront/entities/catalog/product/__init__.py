"""Entity package: catalog Product."""

from .entity import Product, ProductCreate, ProductSearch, ProductUpdate
from .repository import ProductRepository
from .table import ProductTable

__all__ = [
    "Product",
    "ProductCreate",
    "ProductRepository",
    "ProductSearch",
    "ProductTable",
    "ProductUpdate",
]
