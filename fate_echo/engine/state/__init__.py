"""
State module - Seeds, card draws and battle records.

Contains:
- Seed normalization and keccak card draws (contract-exact)
- Immutable round / battle result records
"""

# Seeds & card draws
from .rng import (
    UINT256_MAX,
    CardDraws,
    keccak_uint256,
    parse_uint256_literal,
    normalize_seed,
    seed_to_decimal,
    seed_to_hex,
    player_nonce,
    enemy_nonce,
    card_id_for,
    draw_cards,
)

# Battle records
from .battle import (
    RoundOutcome,
    BattleResult,
    BattleOutcome,
    BattlePhase,
    SpecialEffect,
)

__all__ = [
    # Seeds
    "UINT256_MAX", "CardDraws", "keccak_uint256", "parse_uint256_literal",
    "normalize_seed", "seed_to_decimal", "seed_to_hex",
    "player_nonce", "enemy_nonce", "card_id_for", "draw_cards",
    # Records
    "RoundOutcome", "BattleResult", "BattleOutcome", "BattlePhase", "SpecialEffect",
]
