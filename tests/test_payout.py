"""
Settlement payout tests.

Contract: win pays bet * 2 * (100 - 5) / 100, draw refunds, loss pays 0.
"""

from fractions import Fraction

import pytest

from fate_echo.engine.calc.payout import (
    MAX_BET_WEI,
    MIN_BET_WEI,
    calculate_payout,
    outcome_of,
    payout_multiplier,
    validate_bet,
)
from fate_echo.engine.state.battle import BattleOutcome


class TestContractPayout:

    def test_multipliers(self):
        assert payout_multiplier(BattleOutcome.WIN) == Fraction(19, 10)
        assert payout_multiplier(BattleOutcome.DRAW) == 1
        assert payout_multiplier(BattleOutcome.LOSS) == 0

    @pytest.mark.parametrize("bet,outcome,expected", [
        (10 ** 15, BattleOutcome.WIN, 19 * 10 ** 14),
        (10 ** 18, BattleOutcome.WIN, 19 * 10 ** 17),
        (10 ** 15, BattleOutcome.DRAW, 10 ** 15),
        (10 ** 15, BattleOutcome.LOSS, 0),
        (7, BattleOutcome.WIN, 13),  # 13.3 rounds down
        (0, BattleOutcome.WIN, 0),
    ])
    def test_amounts(self, bet, outcome, expected):
        assert calculate_payout(bet, outcome) == expected

    def test_negative_bet(self):
        with pytest.raises(ValueError):
            calculate_payout(-1, BattleOutcome.WIN)

    def test_outcome_of(self, golden_result):
        assert outcome_of(golden_result) is BattleOutcome.WIN


class TestDifficultyPayout:

    @pytest.mark.parametrize("difficulty,win,draw", [
        ("safe", Fraction(3, 2), Fraction(1)),
        ("normal", Fraction(2), Fraction(1)),
        ("risky", Fraction(3), Fraction(3, 2)),
        ("extreme", Fraction(5), Fraction(2)),
        ("abyss", Fraction(10), Fraction(3)),
    ])
    def test_multipliers(self, difficulty, win, draw):
        assert payout_multiplier(BattleOutcome.WIN, difficulty) == win
        assert payout_multiplier(BattleOutcome.DRAW, difficulty) == draw
        assert payout_multiplier(BattleOutcome.LOSS, difficulty) == 0

    def test_amounts(self):
        assert calculate_payout(10 ** 15, BattleOutcome.WIN, "risky") == 3 * 10 ** 15
        assert calculate_payout(3, BattleOutcome.DRAW, "risky") == 4  # 4.5 rounds down
        assert calculate_payout(10 ** 15, BattleOutcome.LOSS, "abyss") == 0


class TestBetLimits:

    @pytest.mark.parametrize("bet", [MIN_BET_WEI, 5 * 10 ** 16, MAX_BET_WEI])
    def test_valid(self, bet):
        assert validate_bet(bet) == bet

    @pytest.mark.parametrize("bet", [0, MIN_BET_WEI - 1, MAX_BET_WEI + 1])
    def test_invalid(self, bet):
        with pytest.raises(ValueError):
            validate_bet(bet)
