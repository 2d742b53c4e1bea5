"""Sanity CMS integration."""

from .product_service import (
    AdminProduct,
    SanityProductFilters,
    SanityProductInput,
    SanityProductService,
)
from .sanity_client import SanityClient

__all__ = [
    "AdminProduct",
    "SanityClient",
    "SanityProductFilters",
    "SanityProductInput",
    "SanityProductService",
]
