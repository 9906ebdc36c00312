"""Selection state and resolution."""

from .resolver import Resolver, document_order
from .state import SelectionSet

__all__ = [
    "Resolver",
    "SelectionSet",
    "document_order",
]
