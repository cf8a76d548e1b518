"""
Fate's Echo Engine

A faithful Python recreation of the FateEcho.sol battle resolver.
Contract-mode results must match on-chain settlement exactly (verified via
parity tests).

Core subsystems:
- state: seed normalization, keccak card draws, battle records
- content: 78-card tarot deck, difficulty table
- calc: round resolution, saturating HP math, payouts
- narrative: replay flavor text and special-effect flags

Usage:
    from fate_echo.engine import resolve_battle, calculate_payout

    result = resolve_battle("my seed phrase")
    print(result.player_won, result.player_final_hp, result.enemy_final_hp)
    for r in result.rounds:
        print(r.round, r.player_card.name, "vs", r.enemy_card.name, r.narrative)

    payout = calculate_payout(10 ** 15, result.outcome)

    # Client-only difficulty mode (never settled on-chain)
    scaled = resolve_battle("my seed phrase", difficulty="extreme")
"""

__version__ = "0.1.0"

# Seeds & card draws
from .state.rng import (
    UINT256_MAX, CardDraws,
    keccak_uint256, normalize_seed, parse_uint256_literal,
    seed_to_decimal, seed_to_hex,
    player_nonce, enemy_nonce, card_id_for, draw_cards,
)

# Battle records
from .state.battle import (
    RoundOutcome, BattleResult, BattleOutcome, BattlePhase, SpecialEffect,
)

# Cards
from .content.cards import (
    Card, CardCategory, Suit, EffectKind,
    FULL_DECK, EVENT_CARDS, COMBAT_CARDS,
    MAX_HP, TOTAL_ROUNDS, COUNTER_BONUS, DECK_SIZE,
    beats, get_card, get_cards_by_suit,
)

# Difficulty
from .content.difficulty import (
    DifficultyId, DifficultyConfig, DIFFICULTIES, DIFFICULTY_ORDER, get_difficulty,
)

# Round resolution
from .calc.damage import (
    MatchupType, RoundDamage, classify_matchup, resolve_round,
    apply_damage, apply_heal,
)

# Payout
from .calc.payout import (
    HOUSE_EDGE_PERCENT, MIN_BET_WEI, MAX_BET_WEI,
    payout_multiplier, calculate_payout, validate_bet,
)

# Narrative
from .narrative import CRITICAL_THRESHOLD, RoundAnnotation, describe_round

# Battle orchestration
from .combat_engine import (
    BattleEngine, ContractBattleEngine, ScaledBattleEngine,
    get_engine, resolve_battle, resolve_many,
)

__all__ = [
    # Seeds
    "UINT256_MAX", "CardDraws",
    "keccak_uint256", "normalize_seed", "parse_uint256_literal",
    "seed_to_decimal", "seed_to_hex",
    "player_nonce", "enemy_nonce", "card_id_for", "draw_cards",
    # Records
    "RoundOutcome", "BattleResult", "BattleOutcome", "BattlePhase", "SpecialEffect",
    # Cards
    "Card", "CardCategory", "Suit", "EffectKind",
    "FULL_DECK", "EVENT_CARDS", "COMBAT_CARDS",
    "MAX_HP", "TOTAL_ROUNDS", "COUNTER_BONUS", "DECK_SIZE",
    "beats", "get_card", "get_cards_by_suit",
    # Difficulty
    "DifficultyId", "DifficultyConfig", "DIFFICULTIES", "DIFFICULTY_ORDER", "get_difficulty",
    # Round resolution
    "MatchupType", "RoundDamage", "classify_matchup", "resolve_round",
    "apply_damage", "apply_heal",
    # Payout
    "HOUSE_EDGE_PERCENT", "MIN_BET_WEI", "MAX_BET_WEI",
    "payout_multiplier", "calculate_payout", "validate_bet",
    # Narrative
    "CRITICAL_THRESHOLD", "RoundAnnotation", "describe_round",
    # Orchestration
    "BattleEngine", "ContractBattleEngine", "ScaledBattleEngine",
    "get_engine", "resolve_battle", "resolve_many",
]
