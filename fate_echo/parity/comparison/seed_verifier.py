"""
Seed Verification Tool

Resolve a seed with the contract-exact engine and compare the outcome against
what FateEcho.sol settled for the same seed. Also cross-checks the engine's
card table and constants against the recorded contract values.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from fate_echo.engine.calc.payout import HOUSE_EDGE_PERCENT, MAX_BET_WEI, MIN_BET_WEI
from fate_echo.engine.combat_engine import resolve_battle
from fate_echo.engine.content.cards import (
    COUNTER_BONUS,
    DECK_SIZE,
    EVENT_CARD_COUNT,
    MAX_HP,
    TOTAL_ROUNDS,
    Suit,
    beats,
    event_effect_kind,
    event_effect_magnitude,
)
from fate_echo.engine.state.battle import BattleResult
from fate_echo.parity.seed_catalog import (
    CONTRACT_CONSTANTS,
    COUNTER_CYCLE,
    MAJOR_EFFECT_TABLE,
    VERIFIED_BATTLES,
)

logger = logging.getLogger(__name__)

# Settlement fields compared for every battle
SETTLEMENT_FIELDS = ("player_won", "is_draw", "player_final_hp", "enemy_final_hp")


@dataclass
class Discrepancy:
    """A single discrepancy between the engine and the contract."""
    category: str  # "battle", "card", "constant"
    field: str
    expected: Any  # Contract value
    actual: Any  # Engine value
    severity: str = "error"  # "error", "warning", "info"
    message: str = ""


@dataclass
class VerificationReport:
    """Result of verifying engine output against recorded contract values."""
    match: bool = True
    checked: int = 0
    discrepancies: List[Discrepancy] = field(default_factory=list)
    results: Dict[str, BattleResult] = field(default_factory=dict)

    def add_discrepancy(
        self,
        category: str,
        field: str,
        expected: Any,
        actual: Any,
        severity: str = "error",
        message: str = "",
    ):
        self.discrepancies.append(Discrepancy(
            category=category,
            field=field,
            expected=expected,
            actual=actual,
            severity=severity,
            message=message,
        ))
        if severity == "error":
            self.match = False

    def merge(self, other: "VerificationReport"):
        self.checked += other.checked
        self.results.update(other.results)
        for d in other.discrepancies:
            self.add_discrepancy(d.category, d.field, d.expected, d.actual, d.severity, d.message)

    def error_count(self) -> int:
        return sum(1 for d in self.discrepancies if d.severity == "error")

    def summary(self) -> str:
        status = "MATCH" if self.match else "MISMATCH"
        return f"{status}: {self.checked} checks, {self.error_count()} errors"


# =============================================================================
# Battles
# =============================================================================

def verify_battle(seed: Union[str, int], expected: Mapping[str, Any]) -> VerificationReport:
    """
    Resolve one seed and compare its settlement fields.

    Args:
        seed: Seed as stored on-chain (decimal string or int)
        expected: Mapping with any of player_won / is_draw /
            player_final_hp / enemy_final_hp

    Returns:
        VerificationReport with one result and any discrepancies
    """
    report = VerificationReport()
    result = resolve_battle(seed)
    report.results[str(seed)] = result

    for name in SETTLEMENT_FIELDS:
        if name not in expected:
            continue
        report.checked += 1
        want = expected[name]
        got = getattr(result, name)
        if want != got:
            report.add_discrepancy(
                category="battle",
                field=name,
                expected=want,
                actual=got,
                message=f"seed {seed}: {name} contract={want}, engine={got}",
            )

    if report.match:
        logger.debug("seed %s matches settlement", seed)
    else:
        logger.warning("seed %s: %d mismatched fields", seed, report.error_count())
    return report


# =============================================================================
# Static tables
# =============================================================================

def verify_card_table(table: Optional[Mapping[int, Any]] = None) -> VerificationReport:
    """Compare event card (kind, magnitude) pairs with the contract table."""
    report = VerificationReport()
    table = MAJOR_EFFECT_TABLE if table is None else table
    for card_id, (kind, magnitude) in sorted(table.items()):
        report.checked += 1
        actual = (event_effect_kind(card_id).value, event_effect_magnitude(card_id))
        if actual != (kind, magnitude):
            report.add_discrepancy(
                category="card",
                field=f"major_{card_id}",
                expected=(kind, magnitude),
                actual=actual,
            )
    return report


def verify_constants() -> VerificationReport:
    """Compare engine constants and the counter cycle with the contract."""
    report = VerificationReport()
    engine_values = {
        "MAX_HP": MAX_HP,
        "TOTAL_ROUNDS": TOTAL_ROUNDS,
        "COUNTER_BONUS": COUNTER_BONUS,
        "DECK_SIZE": DECK_SIZE,
        "MAJOR_COUNT": EVENT_CARD_COUNT,
        "HOUSE_EDGE": HOUSE_EDGE_PERCENT,
        "MIN_BET": MIN_BET_WEI,
        "MAX_BET": MAX_BET_WEI,
    }
    for name, expected in CONTRACT_CONSTANTS.items():
        report.checked += 1
        actual = engine_values.get(name)
        if actual != expected:
            report.add_discrepancy("constant", name, expected, actual)

    for attacker, defender in COUNTER_CYCLE.items():
        report.checked += 1
        if not beats(Suit(attacker), Suit(defender)):
            report.add_discrepancy(
                "constant",
                f"counter_{Suit(attacker).label}",
                Suit(defender).label,
                None,
            )
    return report


def verify_catalog(battles: Optional[Mapping[str, Mapping[str, Any]]] = None) -> VerificationReport:
    """Run every verified battle plus the static table checks."""
    report = VerificationReport()
    battles = VERIFIED_BATTLES if battles is None else battles
    for seed, expected in battles.items():
        report.merge(verify_battle(seed, expected))
    report.merge(verify_card_table())
    report.merge(verify_constants())
    logger.info("catalog verification: %s", report.summary())
    return report
