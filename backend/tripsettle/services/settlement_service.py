"""
Settlement service for turning net balances into a short list of transfers.
"""
import logging
from typing import List, Mapping, Optional, Sequence, Union
from tripsettle.core.money import EPSILON, is_effectively_zero, round_amount, sum_amounts
from tripsettle.schemas.settlement import BalanceDetail, Settlement, TripSettlementSummary
from tripsettle.services.ledger_service import (
    ExpenseInput,
    check_travelers,
    coerce_expenses,
    compute_balances,
    describe_expense,
    fair_share,
    find_payer_mismatches,
    resolve_participants,
    total_expenses,
)

logger = logging.getLogger(__name__)


def _as_amount(value: Union[float, BalanceDetail]) -> float:
    if isinstance(value, BalanceDetail):
        return value.balance
    return float(value)


def compute_settlements(
    balances: Mapping[str, Union[float, BalanceDetail]],
    traveler_order: Optional[Sequence[str]] = None,
    tolerance: float = EPSILON
) -> List[Settlement]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy two-pointer sweep: the largest debtor pays the largest creditor
    min(debt, credit), then whichever side reached zero is dropped. Gives at
    most N-1 transfers for N unsettled travelers, which is not always the
    global minimum.

    Travelers with equal balances keep their relative traveler_order position.
    Names in traveler_order missing from balances count as zero; names in
    balances missing from traveler_order are appended in mapping order.
    Amounts are left unrounded. The caller's balances are not modified.
    """
    if balances is None or not isinstance(balances, Mapping):
        raise TypeError("balances must be a mapping of traveler name to balance")
    if traveler_order is None:
        traveler_order = []
    elif isinstance(traveler_order, str) or not isinstance(traveler_order, (list, tuple)):
        raise TypeError("traveler_order must be a list of traveler names")

    names = list(dict.fromkeys(traveler_order))
    listed = set(names)
    names.extend(name for name in balances if name not in listed)

    # Stable sort: debtors first, creditors last
    working = sorted(
        ((name, _as_amount(balances.get(name, 0.0))) for name in names),
        key=lambda item: item[1]
    )
    names = [name for name, _ in working]
    remaining = [amount for _, amount in working]

    transfers: List[Settlement] = []
    i = 0
    j = len(remaining) - 1

    while i < j:
        if is_effectively_zero(remaining[i], tolerance):
            i += 1
            continue
        if is_effectively_zero(remaining[j], tolerance):
            j -= 1
            continue
        # Only reachable when balances do not sum to zero
        if remaining[i] > 0 or remaining[j] < 0:
            break

        transfer_amount = min(abs(remaining[i]), remaining[j])
        if transfer_amount >= tolerance:
            transfers.append(Settlement(
                from_traveler=names[i],
                to_traveler=names[j],
                amount=transfer_amount
            ))
            remaining[i] += transfer_amount
            remaining[j] -= transfer_amount

        if is_effectively_zero(remaining[i], tolerance):
            i += 1
        if is_effectively_zero(remaining[j], tolerance):
            j -= 1

    unsettled = {
        name: amount for name, amount in zip(names, remaining)
        if not is_effectively_zero(amount, tolerance)
    }
    if unsettled:
        logger.warning("Balances left unsettled (input does not sum to zero): %s", unsettled)

    return transfers


def format_settlement_summary(
    details: Mapping[str, BalanceDetail],
    settlements: Sequence[Settlement],
    total: float
) -> str:
    """Plain-text summary: totals, net balances and transfers."""
    summary_lines = []
    summary_lines.append(f"Total expenses: {round_amount(total):.2f}")
    summary_lines.append(f"Participants: {len(details)}")
    summary_lines.append("\nNet balances:")
    for name, detail in details.items():
        summary_lines.append(f"  {name}: {round_amount(detail.balance):+.2f}")
    summary_lines.append("\nTransfers:")
    if not settlements:
        summary_lines.append("  Everyone has paid their fair share!")
    for transfer in settlements:
        summary_lines.append(
            f"  {transfer.from_traveler} -> {transfer.to_traveler}: "
            f"{round_amount(transfer.amount):.2f}"
        )
    return "\n".join(summary_lines)


def summarize_trip(
    travelers: Sequence[str],
    expenses: Sequence[ExpenseInput]
) -> TripSettlementSummary:
    """
    Calculate balances and settlements for a trip in one pass.

    Data-quality problems (payer totals that do not match the amount, names
    that are not travelers, expenses nobody shares) are reported in
    warnings rather than rejected.
    """
    traveler_list = check_travelers(travelers)
    expense_list = coerce_expenses(expenses)

    details = compute_balances(traveler_list, expense_list)
    settlements = compute_settlements(details, traveler_list)

    warnings: List[str] = []
    for mismatch in find_payer_mismatches(expense_list):
        label = describe_expense(expense_list[mismatch.expense_index], mismatch.expense_index)
        warnings.append(
            f"Expense {label}: payers total {mismatch.payers_total:.2f} "
            f"but amount is {mismatch.amount:.2f}"
        )
    for index, expense in enumerate(expense_list):
        if not resolve_participants(expense, traveler_list):
            warnings.append(f"Expense {describe_expense(expense, index)} has no participants")
    for name, detail in details.items():
        if not detail.is_traveler:
            warnings.append(f"{name} is referenced by expenses but is not a traveler on this trip")

    balance_sum = sum_amounts(detail.balance for detail in details.values())
    if not is_effectively_zero(balance_sum):
        warnings.append(f"Balances do not sum to zero (off by {balance_sum:+.2f})")

    for warning in warnings:
        logger.warning(warning)

    total = total_expenses(expense_list)

    return TripSettlementSummary(
        balances=details,
        settlements=settlements,
        total_expenses=total,
        fair_share=fair_share(expense_list, traveler_list),
        traveler_count=len(dict.fromkeys(traveler_list)),
        settlement_count=len(settlements),
        warnings=warnings,
        summary=format_settlement_summary(details, settlements, total)
    )
