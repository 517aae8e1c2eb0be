"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel
from typing import List
from tripsettle.schemas.expense import Expense


class TripLedger(BaseModel):
    """Snapshot of a trip's travelers and expenses."""
    travelers: List[str]
    expenses: List[Expense] = []
