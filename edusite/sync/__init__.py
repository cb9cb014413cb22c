"""Content state store and its write-then-confirm sync protocol."""

from __future__ import annotations

from .collections import COLLECTIONS, CollectionName, SingletonName, get_collection
from .state import ContentState, MutationResult

__all__ = [
    "COLLECTIONS",
    "CollectionName",
    "ContentState",
    "MutationResult",
    "SingletonName",
    "get_collection",
]
