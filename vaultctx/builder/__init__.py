"""Interactive context builder."""

from .session import ContextBuilder

__all__ = ["ContextBuilder"]
