import logging
from typing import Dict, List, NamedTuple, Sequence, Tuple

from errors import InvalidInputError, UnbalancedLedgerError
from models import Expense, Settlement
from money import MINOR_UNIT_TOLERANCE, format_minor_units, is_amount, is_settled, split_evenly

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    """A member's outstanding amount on one side of the ledger (always positive)"""
    member: str
    amount: int


class SettlementOptimizer:
    @staticmethod
    def validate_roster(roster: Sequence[str]) -> None:
        """Reject empty, undersized or duplicated rosters"""
        if not roster:
            raise InvalidInputError("roster must not be empty", field="roster")

        seen = set()
        for index, member in enumerate(roster):
            if not isinstance(member, str) or not member:
                raise InvalidInputError(
                    f"roster[{index}] must be a non-empty member identifier",
                    index=index, field="roster"
                )
            if member in seen:
                raise InvalidInputError(
                    f"roster[{index}] duplicates member {member!r}",
                    index=index, field="roster"
                )
            seen.add(member)

        if len(roster) < 2:
            raise InvalidInputError(
                "roster needs at least two members to settle between",
                field="roster"
            )

    @staticmethod
    def validate_expenses(expenses: Sequence[Expense], roster: Sequence[str]) -> None:
        """Check every expense against the roster before any arithmetic happens"""
        members = set(roster)

        for index, expense in enumerate(expenses):
            if expense.payer not in members:
                raise InvalidInputError(
                    f"expenses[{index}].payer {expense.payer!r} is not a roster member",
                    index=index, field="payer"
                )

            if not is_amount(expense.amount) or expense.amount <= 0:
                raise InvalidInputError(
                    f"expenses[{index}].amount must be a positive number of minor units, got {expense.amount!r}",
                    index=index, field="amount"
                )

            if expense.participants is None:
                continue

            if not expense.participants:
                raise InvalidInputError(
                    f"expenses[{index}].participants must not be empty",
                    index=index, field="participants"
                )

            seen = set()
            for participant in expense.participants:
                if participant not in members:
                    raise InvalidInputError(
                        f"expenses[{index}].participants contains unknown member {participant!r}",
                        index=index, field="participants"
                    )
                if participant in seen:
                    raise InvalidInputError(
                        f"expenses[{index}].participants lists {participant!r} more than once",
                        index=index, field="participants"
                    )
                seen.add(participant)

    @staticmethod
    def participants_of(expense: Expense, roster: Sequence[str]) -> List[str]:
        """Participants of an expense in roster order (the whole roster when unspecified)"""
        if expense.participants is None:
            return list(roster)

        chosen = set(expense.participants)
        return [member for member in roster if member in chosen]

    @staticmethod
    def total_spend(expenses: Sequence[Expense]) -> int:
        return sum(expense.amount for expense in expenses)

    @staticmethod
    def calculate_balances(expenses: Sequence[Expense], roster: Sequence[str]) -> Dict[str, int]:
        """
        Calculate the net balance of every roster member, in minor units.

        Positive means the member is owed money, negative means they owe.
        Each expense is split evenly among its participants; an inexact
        division hands the leftover units to participants in roster order,
        so the balances always sum to exactly zero.
        """
        SettlementOptimizer.validate_roster(roster)
        SettlementOptimizer.validate_expenses(expenses, roster)

        balances = {member: 0 for member in roster}

        for expense in expenses:
            participants = SettlementOptimizer.participants_of(expense, roster)
            shares = split_evenly(expense.amount, len(participants))

            balances[expense.payer] += expense.amount
            for member, share in zip(participants, shares):
                balances[member] -= share

        SettlementOptimizer.verify_conservation(balances)
        return balances

    @staticmethod
    def verify_conservation(balances: Dict[str, int]) -> None:
        total = sum(balances.values())
        if total != 0:
            logger.error(f"Balances sum to {total} minor units instead of zero: {balances}")
            raise UnbalancedLedgerError(
                f"balances sum to {total} minor units instead of zero",
                residuals=balances
            )

    @staticmethod
    def partition(
        balances: Dict[str, int],
        tolerance: int = MINOR_UNIT_TOLERANCE
    ) -> Tuple[List[Position], List[Position]]:
        """
        Split balances into creditors and debtors, largest amount first.

        Debtor amounts are returned as positive magnitudes. Members within
        tolerance of zero are left out. Equal amounts keep the order of the
        balances mapping, which is roster order for aggregated balances.
        """
        if not is_amount(tolerance) or tolerance < 1:
            raise InvalidInputError(
                f"tolerance must be a positive number of minor units, got {tolerance!r}",
                field="tolerance"
            )

        rank = {member: position for position, member in enumerate(balances)}

        creditors = [
            Position(member, balance) for member, balance in balances.items()
            if balance >= tolerance
        ]
        debtors = [
            Position(member, -balance) for member, balance in balances.items()
            if balance <= -tolerance
        ]

        creditors.sort(key=lambda position: (-position.amount, rank[position.member]))
        debtors.sort(key=lambda position: (-position.amount, rank[position.member]))

        return creditors, debtors

    @staticmethod
    def _working_copy(entries: Sequence[Tuple[str, int]], side: str) -> Tuple[List[str], List[int]]:
        members = []
        amounts = []
        for index, (member, amount) in enumerate(entries):
            if member in members:
                raise InvalidInputError(
                    f"{side}[{index}] lists member {member!r} more than once",
                    index=index, field=side
                )
            if not is_amount(amount) or amount <= 0:
                raise InvalidInputError(
                    f"{side}[{index}] amount must be a positive number of minor units, got {amount!r}",
                    index=index, field=side
                )
            members.append(member)
            amounts.append(amount)
        return members, amounts

    @staticmethod
    def minimize_transactions(
        creditors: Sequence[Tuple[str, int]],
        debtors: Sequence[Tuple[str, int]],
        tolerance: int = MINOR_UNIT_TOLERANCE
    ) -> List[Settlement]:
        """
        Pair the largest remaining debtor with the largest remaining creditor
        until every balance is settled.

        Every round settles at least one side completely, so a conserved
        ledger needs at most len(creditors) + len(debtors) - 1 transfers.
        Any balance still open when either side runs out means the input did
        not net to zero, and UnbalancedLedgerError is raised instead of
        returning a partial plan.
        """
        creditor_members, credit_left = SettlementOptimizer._working_copy(creditors, "creditors")
        debtor_members, debt_left = SettlementOptimizer._working_copy(debtors, "debtors")

        both_sides = set(creditor_members) & set(debtor_members)
        if both_sides:
            raise InvalidInputError(
                f"members cannot be both creditor and debtor: {sorted(both_sides)}",
                field="creditors"
            )

        bound = max(len(credit_left) + len(debt_left) - 1, 0)
        settlements = []

        i = j = 0
        while i < len(credit_left) and j < len(debt_left):
            # Each round closes at least one side; amounts that never shrink stop here
            if len(settlements) >= bound:
                logger.error(f"Matching exceeded {bound} transfers for {len(credit_left)} creditors and {len(debt_left)} debtors")
                raise UnbalancedLedgerError(
                    f"matching did not finish within {bound} transfers"
                )

            amount = min(credit_left[i], debt_left[j])
            settlements.append(Settlement(
                from_member=debtor_members[j],
                to_member=creditor_members[i],
                amount=amount
            ))

            credit_left[i] -= amount
            debt_left[j] -= amount

            if is_settled(credit_left[i], tolerance):
                i += 1
            if is_settled(debt_left[j], tolerance):
                j += 1

        residuals = {}
        for member, left in zip(creditor_members, credit_left):
            if not is_settled(left, tolerance):
                residuals[member] = left
        for member, left in zip(debtor_members, debt_left):
            if not is_settled(left, tolerance):
                residuals[member] = -left

        if residuals:
            logger.error(f"Matching left unsettled balances: {residuals}")
            raise UnbalancedLedgerError(
                f"ledger does not balance; {len(residuals)} member(s) left unsettled",
                residuals=residuals
            )

        return settlements

    @staticmethod
    def apply_settlements(balances: Dict[str, int], settlements: Sequence[Settlement]) -> Dict[str, int]:
        """Return the balances left after every settlement has been paid"""
        remaining = dict(balances)
        for settlement in settlements:
            remaining[settlement.from_member] = remaining.get(settlement.from_member, 0) + settlement.amount
            remaining[settlement.to_member] = remaining.get(settlement.to_member, 0) - settlement.amount
        return remaining

    @staticmethod
    def optimize_settlements(
        expenses: Sequence[Expense],
        roster: Sequence[str]
    ):
        """
        Main method to calculate optimal settlements.

        Always settles to the single minor unit: a wider threshold would drop
        small balances that still offset a creditor.
        """
        balances = SettlementOptimizer.calculate_balances(expenses, roster)
        creditors, debtors = SettlementOptimizer.partition(balances)
        settlements = SettlementOptimizer.minimize_transactions(creditors, debtors)
        total = SettlementOptimizer.total_spend(expenses)

        logger.debug(
            f"Planned {len(settlements)} transfers for {len(roster)} members, "
            f"total spend {format_minor_units(total)}"
        )

        return {
            "total": total,
            "balances": balances,
            "settlements": settlements
        }
