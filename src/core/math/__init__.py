"""
Core math modules для market models

Примитивы над временными сетками и two-pointer scan отсортированных сеток.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    MIN_RATE_TIMES,
    TIME_ORIGIN,
    consecutive_differences,
    first_non_increasing_index,
    read_only,
)

# Sorted Scan
from src.core.math.sorted_scan import (
    first_index_above,
    first_index_at_or_above,
    merge_index_scan,
)

__all__ = [
    # Numerical Safeguards — Constants
    "MIN_RATE_TIMES",
    "TIME_ORIGIN",
    # Numerical Safeguards — Functions
    "consecutive_differences",
    "first_non_increasing_index",
    "read_only",
    # Sorted Scan
    "first_index_above",
    "first_index_at_or_above",
    "merge_index_scan",
]
