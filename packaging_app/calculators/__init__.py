"""
Deterministic packaging math.

Pure Python arithmetic. No I/O, no database.
Given a ProductData snapshot, derive box / layer / pallet counts, weights,
costs, timeline and utilization, plus the timeline, truck and insight
projections built on top of those results.
"""

from .packaging import PackagingCalculator, calculate_unchecked, compute, try_compute
from .validation import InvalidInputError, validate_product_data

__all__ = [
    "PackagingCalculator",
    "InvalidInputError",
    "calculate_unchecked",
    "compute",
    "try_compute",
    "validate_product_data",
]
