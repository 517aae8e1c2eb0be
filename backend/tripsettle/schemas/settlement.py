"""
Pydantic schemas for balances and settlement.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Optional


class ExpenseInvolvement(BaseModel):
    """One expense a traveler paid for and/or shares."""
    expense_index: int  # Position in the expense list
    expense_id: Optional[str] = None
    title: Optional[str] = None
    amount: float  # Total expense amount
    paid: float = 0.0  # This traveler's contribution
    share: float = 0.0  # This traveler's equal share, 0 when not a participant
    is_payer: bool = False
    is_participant: bool = False


class BalanceDetail(BaseModel):
    """Paid, owed and net balance for one traveler."""
    name: str
    paid: float = 0.0
    owed: float = 0.0
    balance: float = 0.0  # paid - owed; positive = is owed money
    is_traveler: bool = True  # False for names only referenced by expenses
    expenses: List[ExpenseInvolvement] = []


class Settlement(BaseModel):
    """A single transfer: from_traveler pays to_traveler the amount."""
    model_config = ConfigDict(populate_by_name=True)

    from_traveler: str = Field(alias="from")
    to_traveler: str = Field(alias="to")
    amount: float


class SettlementPlanRequest(BaseModel):
    """Schema for planning transfers from precomputed balances."""
    balances: Dict[str, float]
    traveler_order: List[str] = []


class TripSettlementSummary(BaseModel):
    """Schema for a full trip settlement calculation."""
    balances: Dict[str, BalanceDetail]
    settlements: List[Settlement]
    total_expenses: float
    fair_share: float  # Total expenses divided by traveler count
    traveler_count: int
    settlement_count: int
    warnings: List[str] = []
    summary: str
