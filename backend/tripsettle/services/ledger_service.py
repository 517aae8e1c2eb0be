"""
Ledger service: per-traveler paid, owed and net balance for a trip.
"""
import logging
from typing import Dict, List, Mapping, Sequence, Union
from tripsettle.core.money import EPSILON, amounts_match, sum_amounts
from tripsettle.schemas.expense import Expense, PayerMismatch
from tripsettle.schemas.settlement import BalanceDetail, ExpenseInvolvement

logger = logging.getLogger(__name__)

ExpenseInput = Union[Expense, Mapping]


def check_travelers(travelers: Sequence[str]) -> List[str]:
    """Validate the traveler list shape and return it as a list."""
    if travelers is None or isinstance(travelers, str) or not isinstance(travelers, (list, tuple)):
        raise TypeError("travelers must be a list of traveler names")
    for name in travelers:
        if not isinstance(name, str):
            raise TypeError(f"Traveler name must be a string, got {type(name).__name__}")
    return list(travelers)


def coerce_expenses(expenses: Sequence[ExpenseInput]) -> List[Expense]:
    """
    Validate expenses into Expense models.

    Plain mappings in the stored record shape are accepted. Anything that does
    not validate raises pydantic's ValidationError (a ValueError).
    """
    if expenses is None or not isinstance(expenses, (list, tuple)):
        raise TypeError("expenses must be a list of expenses")
    return [
        expense if isinstance(expense, Expense) else Expense.model_validate(expense)
        for expense in expenses
    ]


def resolve_participants(expense: Expense, travelers: Sequence[str]) -> List[str]:
    """
    Participants who share this expense.

    An empty or missing list means all travelers currently on the trip.
    """
    if expense.participants:
        return list(dict.fromkeys(expense.participants))
    return list(dict.fromkeys(travelers))


def describe_expense(expense: Expense, index: int) -> str:
    """Short label for log lines and warnings."""
    if expense.title:
        return f"'{expense.title}'"
    if expense.id:
        return f"#{expense.id}"
    return f"at position {index}"


def compute_balances(
    travelers: Sequence[str],
    expenses: Sequence[ExpenseInput]
) -> Dict[str, BalanceDetail]:
    """
    Compute paid, owed and balance for every traveler.

    Args:
        travelers: Ordered traveler names of the trip
        expenses: Expenses of the trip

    Returns:
        Mapping of name -> BalanceDetail. Travelers come first in input order,
        followed by any names the expenses reference that are not travelers.
    """
    traveler_list = check_travelers(travelers)
    expense_list = coerce_expenses(expenses)

    known = set(traveler_list)
    involvement: Dict[str, List[ExpenseInvolvement]] = {name: [] for name in traveler_list}

    for index, expense in enumerate(expense_list):
        # Aggregate duplicate payer entries
        contributions: Dict[str, float] = {}
        for payer in expense.payers:
            contributions[payer.name] = contributions.get(payer.name, 0.0) + payer.amount

        participants = resolve_participants(expense, traveler_list)
        share = 0.0
        if participants:
            share = expense.amount / len(participants)
        else:
            logger.warning(
                "Expense %s has no participants; its cost is not shared",
                describe_expense(expense, index)
            )

        participant_set = set(participants)
        involved = list(contributions) + [name for name in participants if name not in contributions]

        for name in involved:
            if name not in involvement:
                logger.warning(
                    "Expense %s references %r who is not a traveler on this trip",
                    describe_expense(expense, index), name
                )
                involvement[name] = []
            is_participant = name in participant_set
            involvement[name].append(ExpenseInvolvement(
                expense_index=index,
                expense_id=expense.id,
                title=expense.title,
                amount=expense.amount,
                paid=contributions.get(name, 0.0),
                share=share if is_participant else 0.0,
                is_payer=name in contributions,
                is_participant=is_participant
            ))

    balances: Dict[str, BalanceDetail] = {}
    for name, entries in involvement.items():
        paid = sum_amounts(entry.paid for entry in entries)
        owed = sum_amounts(entry.share for entry in entries)
        balances[name] = BalanceDetail(
            name=name,
            paid=paid,
            owed=owed,
            balance=paid - owed,
            is_traveler=name in known,
            expenses=entries
        )

    return balances


def net_balances(details: Mapping[str, BalanceDetail]) -> Dict[str, float]:
    """Reduce balance details to name -> net balance."""
    return {name: detail.balance for name, detail in details.items()}


def find_payer_mismatches(
    expenses: Sequence[ExpenseInput],
    tolerance: float = EPSILON
) -> List[PayerMismatch]:
    """List expenses whose payer contributions do not add up to the amount."""
    mismatches = []
    for index, expense in enumerate(coerce_expenses(expenses)):
        payers_total = sum_amounts(payer.amount for payer in expense.payers)
        if not amounts_match(payers_total, expense.amount, tolerance):
            mismatches.append(PayerMismatch(
                expense_index=index,
                expense_id=expense.id,
                title=expense.title,
                amount=expense.amount,
                payers_total=payers_total,
                difference=payers_total - expense.amount
            ))
    return mismatches


def total_expenses(expenses: Sequence[ExpenseInput]) -> float:
    """Total cost of all expenses."""
    return sum_amounts(expense.amount for expense in coerce_expenses(expenses))


def fair_share(expenses: Sequence[ExpenseInput], travelers: Sequence[str]) -> float:
    """Total cost divided evenly over the trip's travelers."""
    traveler_count = len(dict.fromkeys(check_travelers(travelers)))
    if traveler_count == 0:
        return 0.0
    return total_expenses(expenses) / traveler_count
