import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Hashable, Iterable, List, Sequence

from app.core.utils import ZERO, qround, to_decimal

logger = logging.getLogger("wager_ledger.core.settlement")

EPSILON = Decimal("0.01")


@dataclass(frozen=True)
class ParticipantBalance:
    participant_id: Hashable
    display_name: str | None
    net_amount: Decimal


@dataclass(frozen=True)
class SettlementInstruction:
    from_id: Hashable
    from_name: str | None
    to_id: Hashable
    to_name: str | None
    amount: Decimal


@dataclass
class SettlementResult:
    instructions: List[SettlementInstruction] = field(default_factory=list)
    residuals: List[ParticipantBalance] = field(default_factory=list)

    @property
    def balanced(self) -> bool:
        return not self.residuals


@dataclass
class _Open:
    # working copy so callers' balances are never mutated
    index: int
    participant: ParticipantBalance
    remaining: Decimal


def _normalize(balances: Iterable[ParticipantBalance]) -> List[ParticipantBalance]:
    seen = set()
    out = []

    for b in balances:
        if b.participant_id in seen:
            raise ValueError(f"Duplicate participant_id: {b.participant_id!r}")
        seen.add(b.participant_id)

        out.append(
            ParticipantBalance(b.participant_id, b.display_name, to_decimal(b.net_amount))
        )

    return out


def settle(
    balances: Sequence[ParticipantBalance],
    epsilon: Decimal = EPSILON,
) -> SettlementResult:
    """
    Greedy largest-pair matching.

    Each round pays the most negative debtor into the largest creditor
    (ties go to whoever came first in the input). Only the emitted amount
    is rounded to cents; running balances keep full precision. Anyone left
    outside epsilon when one side runs dry is reported as a residual.
    """
    epsilon = to_decimal(epsilon)
    if epsilon < 0:
        raise ValueError(f"Tolerance cannot be negative, got {epsilon}")
    participants = _normalize(balances)

    creditors: List[_Open] = []
    debtors: List[_Open] = []

    for i, p in enumerate(participants):
        if p.net_amount > epsilon:
            creditors.append(_Open(i, p, p.net_amount))
        elif p.net_amount < -epsilon:
            debtors.append(_Open(i, p, p.net_amount))

    result = SettlementResult()

    while creditors and debtors:
        creditor = min(creditors, key=lambda o: (-o.remaining, o.index))
        debtor = min(debtors, key=lambda o: (o.remaining, o.index))

        amount = min(creditor.remaining, -debtor.remaining)
        pay_amt = qround(amount)

        if pay_amt > 0:
            result.instructions.append(
                SettlementInstruction(
                    from_id=debtor.participant.participant_id,
                    from_name=debtor.participant.display_name,
                    to_id=creditor.participant.participant_id,
                    to_name=creditor.participant.display_name,
                    amount=pay_amt,
                )
            )

        creditor.remaining -= amount
        debtor.remaining += amount

        creditors = [o for o in creditors if abs(o.remaining) > epsilon]
        debtors = [o for o in debtors if abs(o.remaining) > epsilon]

    for o in sorted(creditors + debtors, key=lambda o: o.index):
        result.residuals.append(
            ParticipantBalance(
                o.participant.participant_id,
                o.participant.display_name,
                o.remaining,
            )
        )

    if result.residuals:
        logger.debug(
            "Unbalanced input: %d participant(s) left unsettled (%s)",
            len(result.residuals),
            ", ".join(f"{r.participant_id}={qround(r.net_amount)}" for r in result.residuals),
        )

    return result


def compute_settlements(
    balances: Sequence[ParticipantBalance],
    epsilon: Decimal = EPSILON,
) -> List[SettlementInstruction]:
    return settle(balances, epsilon).instructions


def apply_instructions(
    balances: Sequence[ParticipantBalance],
    instructions: Iterable[SettlementInstruction],
) -> Dict[Hashable, Decimal]:
    """Replays payments against the starting balances."""
    after = {b.participant_id: to_decimal(b.net_amount) for b in balances}

    for ins in instructions:
        after[ins.from_id] = after.get(ins.from_id, ZERO) + ins.amount
        after[ins.to_id] = after.get(ins.to_id, ZERO) - ins.amount

    return after
