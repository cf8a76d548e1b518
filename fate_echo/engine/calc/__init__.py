"""
Calculation utilities for battle resolution.

Contains:
- Round resolution (pure functions, no side effects)
- Settlement payout math
"""

from .damage import (
    MatchupType,
    RoundDamage,
    classify_matchup,
    resolve_round,
    resolve_clash,
    resolve_event_vs_combat,
    resolve_combat_vs_combat,
    combat_power,
    retaliation,
    apply_damage,
    apply_heal,
    # Constants
    CLASH_BASE_DAMAGE,
    CLASH_DAMAGE_SPREAD,
    CLASH_ENEMY_SHIFT,
    GLANCING_BLOW_DAMAGE,
    TIE_DAMAGE,
    WIN_DAMAGE_BONUS,
)

from .payout import (
    HOUSE_EDGE_PERCENT,
    MIN_BET_WEI,
    MAX_BET_WEI,
    outcome_of,
    payout_multiplier,
    calculate_payout,
    validate_bet,
)

__all__ = [
    # Round resolution
    "MatchupType",
    "RoundDamage",
    "classify_matchup",
    "resolve_round",
    "resolve_clash",
    "resolve_event_vs_combat",
    "resolve_combat_vs_combat",
    "combat_power",
    "retaliation",
    "apply_damage",
    "apply_heal",
    # Constants
    "CLASH_BASE_DAMAGE",
    "CLASH_DAMAGE_SPREAD",
    "CLASH_ENEMY_SHIFT",
    "GLANCING_BLOW_DAMAGE",
    "TIE_DAMAGE",
    "WIN_DAMAGE_BONUS",
    # Payout
    "HOUSE_EDGE_PERCENT",
    "MIN_BET_WEI",
    "MAX_BET_WEI",
    "outcome_of",
    "payout_multiplier",
    "calculate_payout",
    "validate_bet",
]
