"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, AliasChoices, model_validator
from typing import List, Optional


class PayerContribution(BaseModel):
    """How much of an expense one traveler paid."""
    name: str
    amount: float


class ExpenseBase(BaseModel):
    """Base expense schema."""
    id: Optional[str] = None
    title: Optional[str] = None
    date: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    amount: float = Field(ge=0)  # Total cost in the trip's storage currency


class Expense(ExpenseBase):
    """
    Expense as handed over by the trip data layer.

    An absent or empty participants list means every traveler on the trip
    shares the cost. It is resolved when balances are computed, so travelers
    added later are included too.
    """
    payers: List[PayerContribution] = []
    participants: Optional[List[str]] = None
    # Older records carry a single payer instead of a payers list
    paid_by: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("paid_by", "paidBy"),
    )

    @model_validator(mode="after")
    def fill_payers_from_paid_by(self):
        """Turn a legacy single payer into a one-entry payers list."""
        if not self.payers and self.paid_by:
            self.payers = [PayerContribution(name=self.paid_by, amount=self.amount)]
        return self


class PayerMismatch(BaseModel):
    """An expense whose payer contributions do not add up to its amount."""
    expense_index: int
    expense_id: Optional[str] = None
    title: Optional[str] = None
    amount: float
    payers_total: float
    difference: float  # payers_total - amount
