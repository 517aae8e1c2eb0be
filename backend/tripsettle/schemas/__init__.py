"""Schemas package - Import all schemas for convenient access."""
from tripsettle.schemas.expense import Expense, PayerContribution, PayerMismatch
from tripsettle.schemas.settlement import (
    BalanceDetail,
    ExpenseInvolvement,
    Settlement,
    SettlementPlanRequest,
    TripSettlementSummary,
)
from tripsettle.schemas.trip import TripLedger

__all__ = [
    "Expense",
    "PayerContribution",
    "PayerMismatch",
    "BalanceDetail",
    "ExpenseInvolvement",
    "Settlement",
    "SettlementPlanRequest",
    "TripSettlementSummary",
    "TripLedger",
]
