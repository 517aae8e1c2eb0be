"""
Numeric tolerance helpers shared by the ledger and the settlement planner.

Amounts are plain floats in the trip's storage currency. Anything smaller
than EPSILON is rounding noise.
"""
import math
from typing import Iterable
from tripsettle.core.config import settings

EPSILON: float = settings.SETTLEMENT_TOLERANCE


def is_effectively_zero(value: float, tolerance: float = EPSILON) -> bool:
    """True when |value| is below the tolerance."""
    return abs(value) < tolerance


def amounts_match(first: float, second: float, tolerance: float = EPSILON) -> bool:
    """True when two amounts differ by less than the tolerance."""
    return is_effectively_zero(first - second, tolerance)


def sum_amounts(values: Iterable[float]) -> float:
    """Sum amounts without accumulating float error across many terms."""
    return math.fsum(values)


def round_amount(value: float) -> float:
    """Round to cents for summaries. Never used inside the settlement sweep."""
    rounded = round(value, 2)
    # Avoid printing "-0.00"
    return 0.0 if rounded == 0 else rounded
