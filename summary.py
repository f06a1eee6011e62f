"""Group spending summary: totals, per-member figures and category breakdown."""
from typing import Sequence

from expense_categorizer import categorizer
from models import Expense, GroupSummary, MemberSummary
from money import round_half_up_div, split_evenly
from settlement_optimizer import SettlementOptimizer


def summarize_group(expenses: Sequence[Expense], roster: Sequence[str]) -> GroupSummary:
    """
    Summarize a group's spending.

    Shares use the same split and remainder rule as the balances, so for
    every member `paid - share` equals their settlement balance.
    """
    balances = SettlementOptimizer.calculate_balances(expenses, roster)

    paid = {member: 0 for member in roster}
    share = {member: 0 for member in roster}
    spending_by_category = {}

    for expense in expenses:
        participants = SettlementOptimizer.participants_of(expense, roster)
        paid[expense.payer] += expense.amount
        for member, amount in zip(participants, split_evenly(expense.amount, len(participants))):
            share[member] += amount

        category = categorizer.categorize(expense.description, expense.category)
        spending_by_category[category] = spending_by_category.get(category, 0) + expense.amount

    total = SettlementOptimizer.total_spend(expenses)
    average = round_half_up_div(total, len(expenses)) if expenses else 0

    return GroupSummary(
        total=total,
        expense_count=len(expenses),
        average_expense=average,
        members=[
            MemberSummary(member=member, paid=paid[member], share=share[member], balance=balances[member])
            for member in roster
        ],
        spending_by_category=spending_by_category
    )
