"""
Content module - Static game data.

Contains the 78-card tarot catalogue and the difficulty table.
"""

# Cards
from .cards import (
    Card, CardCategory, Suit, EffectKind,
    FULL_DECK, EVENT_CARDS, COMBAT_CARDS,
    MAX_HP, TOTAL_ROUNDS, COUNTER_BONUS,
    DECK_SIZE, EVENT_CARD_COUNT, COMBAT_CARD_COUNT, RANKS_PER_SUIT,
    COUNTER_MAP, SUIT_ELEMENTS, RANK_NAMES,
    beats, get_card, get_cards_by_suit, build_deck,
    is_event_card, event_effect_kind, event_effect_magnitude,
    combat_rank, combat_suit,
)

# Difficulty
from .difficulty import (
    DifficultyId, DifficultyConfig, DIFFICULTIES, DIFFICULTY_ORDER,
    get_difficulty, estimate_win_rate, expected_value,
)

__all__ = [
    # Cards
    "Card", "CardCategory", "Suit", "EffectKind",
    "FULL_DECK", "EVENT_CARDS", "COMBAT_CARDS",
    "MAX_HP", "TOTAL_ROUNDS", "COUNTER_BONUS",
    "DECK_SIZE", "EVENT_CARD_COUNT", "COMBAT_CARD_COUNT", "RANKS_PER_SUIT",
    "COUNTER_MAP", "SUIT_ELEMENTS", "RANK_NAMES",
    "beats", "get_card", "get_cards_by_suit", "build_deck",
    "is_event_card", "event_effect_kind", "event_effect_magnitude",
    "combat_rank", "combat_suit",
    # Difficulty
    "DifficultyId", "DifficultyConfig", "DIFFICULTIES", "DIFFICULTY_ORDER",
    "get_difficulty", "estimate_win_rate", "expected_value",
]
