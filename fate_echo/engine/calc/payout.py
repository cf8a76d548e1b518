"""
Settlement payout math.

Contract settlement (FateEcho.sol, HOUSE_EDGE = 5):
- win:  bet * 2 * (100 - HOUSE_EDGE) / 100   (1.9x)
- draw: bet returned                          (1x)
- loss: nothing

The scaled difficulty mode uses the multipliers from the difficulty table
instead. It is never settled on-chain.

All amounts are integer wei; division rounds down like Solidity.
"""

from fractions import Fraction
from typing import Optional, Union

from ..content.difficulty import DifficultyConfig, DifficultyId, get_difficulty
from ..state.battle import BattleOutcome, BattleResult

__all__ = [
    "HOUSE_EDGE_PERCENT",
    "MIN_BET_WEI",
    "MAX_BET_WEI",
    "outcome_of",
    "payout_multiplier",
    "calculate_payout",
    "validate_bet",
]


HOUSE_EDGE_PERCENT = 5
MIN_BET_WEI = 10 ** 15  # 0.001 ETH
MAX_BET_WEI = 10 ** 18  # 1 ETH

_CONTRACT_WIN_MULTIPLIER = Fraction(2 * (100 - HOUSE_EDGE_PERCENT), 100)


def outcome_of(result: BattleResult) -> BattleOutcome:
    """Win/draw/loss for a resolved battle."""
    return result.outcome


def payout_multiplier(
    outcome: BattleOutcome,
    difficulty: Optional[Union[DifficultyId, DifficultyConfig, str]] = None,
) -> Fraction:
    """
    Payout multiplier for an outcome.

    difficulty=None means contract settlement.
    """
    if outcome is BattleOutcome.LOSS:
        return Fraction(0)

    if difficulty is None:
        if outcome is BattleOutcome.WIN:
            return _CONTRACT_WIN_MULTIPLIER
        return Fraction(1)

    config = get_difficulty(difficulty)
    if outcome is BattleOutcome.WIN:
        return Fraction(str(config.multiplier))
    return Fraction(str(config.draw_multiplier))


def validate_bet(bet_wei: int) -> int:
    """Check a bet against the contract's MIN_BET / MAX_BET."""
    if not MIN_BET_WEI <= bet_wei <= MAX_BET_WEI:
        raise ValueError(
            f"bet must be between {MIN_BET_WEI} and {MAX_BET_WEI} wei, got {bet_wei}"
        )
    return bet_wei


def calculate_payout(
    bet_wei: int,
    outcome: BattleOutcome,
    difficulty: Optional[Union[DifficultyId, DifficultyConfig, str]] = None,
) -> int:
    """Payout in wei for a bet and outcome, rounded down."""
    if bet_wei < 0:
        raise ValueError(f"bet must be non-negative, got {bet_wei}")
    multiplier = payout_multiplier(outcome, difficulty)
    return bet_wei * multiplier.numerator // multiplier.denominator
