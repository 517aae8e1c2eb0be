"""
Settlement calculation routes.
"""
from fastapi import APIRouter, HTTPException, status
from typing import Dict, List
from tripsettle.schemas.settlement import (
    BalanceDetail, Settlement, SettlementPlanRequest, TripSettlementSummary
)
from tripsettle.schemas.trip import TripLedger
from tripsettle.services.ledger_service import compute_balances
from tripsettle.services.settlement_service import compute_settlements, summarize_trip

router = APIRouter(prefix="/settlement", tags=["settlement"])


def _bad_request(error: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error)
    )


@router.post("/balances", response_model=Dict[str, BalanceDetail])
async def get_balances(ledger: TripLedger):
    """Compute paid, owed and net balance for every traveler."""
    try:
        return compute_balances(ledger.travelers, ledger.expenses)
    except (TypeError, ValueError) as e:
        raise _bad_request(e)


@router.post("/plan", response_model=List[Settlement])
async def plan_settlements(request: SettlementPlanRequest):
    """Plan transfers that settle the given net balances."""
    try:
        return compute_settlements(request.balances, request.traveler_order)
    except (TypeError, ValueError) as e:
        raise _bad_request(e)


@router.post("/calculate", response_model=TripSettlementSummary)
async def calculate_settlement(ledger: TripLedger):
    """Calculate balances, transfers and warnings for a trip."""
    try:
        return summarize_trip(ledger.travelers, ledger.expenses)
    except (TypeError, ValueError) as e:
        raise _bad_request(e)
