"""Business logic services."""

from .history import HistoryStore
from .studio import Studio

__all__ = ["HistoryStore", "Studio"]
