"""Entity package: SkinConcern."""

from .entity import SkinConcern, SkinConcernCreate
from .repository import SkinConcernRepository
from .table import SkinConcernTable

__all__ = [
    "SkinConcern",
    "SkinConcernCreate",
    "SkinConcernRepository",
    "SkinConcernTable",
]
