"""
Domain models and value objects.

Contains the market model evolution description and its error taxonomy.
"""

from src.core.domain.evolution import (
    EvolutionDescription,
    MarketModelError,
    NumeraireExpired,
    OrderingViolation,
    RangeExceeded,
    StructuralSizeMismatch,
)

__all__ = [
    # Evolution description
    "EvolutionDescription",
    # Errors
    "MarketModelError",
    "StructuralSizeMismatch",
    "OrderingViolation",
    "RangeExceeded",
    "NumeraireExpired",
]
