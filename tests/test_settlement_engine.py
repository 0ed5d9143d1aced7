"""
Unit tests for the greedy settlement engine
"""
import logging
import random
from decimal import Decimal

import pytest

from app.core.settlement import (
    ParticipantBalance,
    SettlementInstruction,
    apply_instructions,
    compute_settlements,
    settle,
)


def balances(*pairs):
    return [ParticipantBalance(pid, pid.title(), Decimal(str(amount))) for pid, amount in pairs]


def as_tuples(instructions):
    return [(i.from_id, i.to_id, i.amount) for i in instructions]


class TestExamples:

    def test_single_creditor_two_debtors(self):
        result = compute_settlements(balances(("a", 30), ("b", -10), ("c", -20)))

        # largest debtor goes first
        assert as_tuples(result) == [
            ("c", "a", Decimal("20.00")),
            ("b", "a", Decimal("10.00")),
        ]
        assert sum(i.amount for i in result) == Decimal("30")

    def test_single_debtor_drained_into_largest_creditor_first(self):
        result = compute_settlements(balances(("a", 50), ("b", 30), ("c", -80)))

        assert as_tuples(result) == [
            ("c", "a", Decimal("50.00")),
            ("c", "b", Decimal("30.00")),
        ]

    def test_one_to_one(self):
        result = compute_settlements(balances(("a", 10), ("b", -10)))

        assert result == [
            SettlementInstruction("b", "B", "a", "A", Decimal("10.00")),
        ]

    def test_within_epsilon_is_settled(self):
        assert compute_settlements(balances(("a", "0.005"), ("b", "-0.005"))) == []

    def test_empty_input(self):
        assert compute_settlements([]) == []

    def test_single_unbalanced_participant(self):
        result = settle(balances(("a", 15)))

        assert result.instructions == []
        assert not result.balanced
        assert [(r.participant_id, r.net_amount) for r in result.residuals] == [("a", Decimal("15"))]


class TestProperties:

    def random_balanced(self, rng, n):
        cents = [rng.randint(-50000, 50000) for _ in range(n - 1)]
        cents.append(-sum(cents))
        return [
            ParticipantBalance(f"p{i}", f"P{i}", Decimal(c) / 100)
            for i, c in enumerate(cents)
        ]

    @pytest.mark.parametrize("seed", range(25))
    def test_balanced_input_settles_everyone(self, seed):
        rng = random.Random(seed)
        data = self.random_balanced(rng, rng.randint(2, 9))

        result = settle(data)
        after = apply_instructions(data, result.instructions)

        assert result.balanced
        assert all(abs(v) <= Decimal("0.01") for v in after.values())

        total_paid = sum(i.amount for i in result.instructions)
        total_owed = sum(b.net_amount for b in data if b.net_amount > 0)
        assert abs(total_paid - total_owed) <= Decimal("0.01") * len(result.instructions)

    @pytest.mark.parametrize("seed", range(25))
    def test_structural_guarantees(self, seed):
        rng = random.Random(seed)
        data = self.random_balanced(rng, rng.randint(2, 9))
        nonzero = [b for b in data if abs(b.net_amount) > Decimal("0.01")]

        result = compute_settlements(data)

        assert all(i.from_id != i.to_id for i in result)
        assert all(i.amount > 0 for i in result)
        assert len(result) <= max(len(nonzero) - 1, 0)

    def test_all_zero_is_noop(self):
        data = balances(("a", 0), ("b", "0.01"), ("c", "-0.01"))
        assert compute_settlements(data) == []

    def test_deterministic(self):
        data = balances(("a", 40), ("b", 40), ("c", -25), ("d", -25), ("e", -30))

        first = compute_settlements(data)
        for _ in range(5):
            assert compute_settlements(data) == first

    def test_ties_follow_input_order(self):
        result = compute_settlements(balances(("a", 20), ("b", 20), ("c", -20), ("d", -20)))

        assert as_tuples(result) == [
            ("c", "a", Decimal("20.00")),
            ("d", "b", Decimal("20.00")),
        ]

    def test_input_is_not_mutated(self):
        data = balances(("a", 30), ("b", -30))
        snapshot = list(data)

        compute_settlements(data)

        assert data == snapshot


class TestRounding:

    def test_only_emitted_amount_is_rounded(self):
        # three-way split of 10.00 leaves thirds behind
        third = Decimal(10) / 3
        data = [
            ParticipantBalance("a", "A", Decimal("10")),
            ParticipantBalance("b", "B", -third),
            ParticipantBalance("c", "C", -third),
            ParticipantBalance("d", "D", -(Decimal("10") - 2 * third)),
        ]

        result = settle(data)

        assert [i.amount for i in result.instructions] == [Decimal("3.33")] * 3
        assert result.balanced

    def test_float_amounts_are_accepted(self):
        result = compute_settlements(
            [ParticipantBalance(1, "A", 0.1 + 0.2), ParticipantBalance(2, "B", -0.3)]
        )

        assert as_tuples(result) == [(2, 1, Decimal("0.30"))]

    def test_amounts_have_two_places(self):
        result = compute_settlements(balances(("a", "12.345"), ("b", "-12.345")))

        assert result[0].amount == Decimal("12.35")
        assert result[0].amount.as_tuple().exponent == -2


class TestUnbalancedInput:

    def test_leftover_creditor_reported(self):
        result = settle(balances(("a", 100), ("b", -60)))

        assert as_tuples(result.instructions) == [("b", "a", Decimal("60.00"))]
        assert [(r.participant_id, r.net_amount) for r in result.residuals] == [("a", Decimal("40"))]

    def test_engine_leaves_warnings_to_callers(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="wager_ledger"):
            settle(balances(("a", 100), ("b", -60)))

        assert [r.levelno for r in caplog.records] == [logging.DEBUG]

    def test_leftover_debtor_reported(self):
        result = settle(balances(("a", 10), ("b", -15), ("c", -5)))

        assert as_tuples(result.instructions) == [("b", "a", Decimal("10.00"))]
        assert {r.participant_id for r in result.residuals} == {"b", "c"}


class TestInputValidation:

    def test_duplicate_participant_rejected(self):
        with pytest.raises(ValueError):
            compute_settlements(balances(("a", 10), ("a", -10)))

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            compute_settlements([ParticipantBalance("a", "A", Decimal("NaN"))])

    def test_negative_epsilon_rejected(self):
        with pytest.raises(ValueError):
            settle(balances(("a", 5), ("b", -5)), epsilon=Decimal("-0.01"))

    def test_zero_epsilon_still_terminates(self):
        result = settle(balances(("a", 5), ("b", -5)), epsilon=Decimal("0"))

        assert as_tuples(result.instructions) == [("b", "a", Decimal("5.00"))]
        assert result.balanced

    def test_custom_epsilon(self):
        data = balances(("a", "0.5"), ("b", "-0.5"))

        assert compute_settlements(data, epsilon=Decimal("1")) == []
        assert len(compute_settlements(data)) == 1
