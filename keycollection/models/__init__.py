from .models import (
    CollectionState,
    CollectionStats,
    CollectionOptions
)

from .statistics import Statistics

__all__ = [
    "CollectionState",
    "CollectionStats",
    "CollectionOptions",
    "Statistics"
]
