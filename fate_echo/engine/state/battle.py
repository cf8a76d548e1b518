"""
Battle records - immutable outputs of the battle resolver.

RoundOutcome is created once per round and owned by the BattleResult that
contains it. BattleResult is created once per resolve call and never mutated.
Both serialize to plain dicts for the CLI, the replay server and settlement
comparisons.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..content.cards import TOTAL_ROUNDS, Card, get_card


class SpecialEffect(Enum):
    """Special conditions that occurred in a round."""
    CRITICAL = "critical"
    COUNTER = "counter"  # elemental counter
    MAJOR_CLASH = "major_clash"  # event vs event
    MAJOR_ABILITY = "major_ability"  # event vs combat


class BattleOutcome(Enum):
    """Final result from the player's point of view."""
    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"


class BattlePhase(Enum):
    """Orchestrator states: Round(i) for i in 0..5, then Done."""
    ROUND = "ROUND"
    DONE = "DONE"


@dataclass(frozen=True)
class RoundOutcome:
    """Everything that happened in one round."""
    round: int  # 1-based
    player_card_id: int
    enemy_card_id: int

    player_damage_dealt: int  # player -> enemy
    enemy_damage_dealt: int  # enemy -> player
    player_heal: int
    enemy_heal: int

    player_hp_before: int
    enemy_hp_before: int
    player_hp_after: int
    enemy_hp_after: int

    narrative: str = ""
    is_critical: bool = False
    special_effects: Tuple[SpecialEffect, ...] = ()

    @property
    def player_card(self) -> Card:
        return get_card(self.player_card_id)

    @property
    def enemy_card(self) -> Card:
        return get_card(self.enemy_card_id)

    def has_effect(self, effect: SpecialEffect) -> bool:
        return effect in self.special_effects

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round,
            "player_card_id": self.player_card_id,
            "enemy_card_id": self.enemy_card_id,
            "player_card": self.player_card.name,
            "enemy_card": self.enemy_card.name,
            "player_damage_dealt": self.player_damage_dealt,
            "enemy_damage_dealt": self.enemy_damage_dealt,
            "player_heal": self.player_heal,
            "enemy_heal": self.enemy_heal,
            "player_hp_before": self.player_hp_before,
            "enemy_hp_before": self.enemy_hp_before,
            "player_hp_after": self.player_hp_after,
            "enemy_hp_after": self.enemy_hp_after,
            "narrative": self.narrative,
            "is_critical": self.is_critical,
            "special_effects": [e.value for e in self.special_effects],
        }


@dataclass(frozen=True)
class BattleResult:
    """Terminal record of one battle."""
    seed: int  # normalized uint256
    rounds: Tuple[RoundOutcome, ...]
    player_won: bool
    is_draw: bool
    player_final_hp: int
    enemy_final_hp: int
    player_max_hp: int
    enemy_max_hp: int
    total_rounds_played: int
    difficulty: Optional[str] = None  # None = contract-exact

    @property
    def outcome(self) -> BattleOutcome:
        if self.player_won:
            return BattleOutcome.WIN
        if self.is_draw:
            return BattleOutcome.DRAW
        return BattleOutcome.LOSS

    @property
    def contract_exact(self) -> bool:
        return self.difficulty is None

    @property
    def ended_early(self) -> bool:
        """True if a side hit 0 HP before the last round."""
        return self.total_rounds_played < TOTAL_ROUNDS

    def to_dict(self) -> Dict[str, Any]:
        return {
            # uint256 does not fit a JSON number safely
            "seed": str(self.seed),
            "difficulty": self.difficulty,
            "contract_exact": self.contract_exact,
            "outcome": self.outcome.value,
            "player_won": self.player_won,
            "is_draw": self.is_draw,
            "player_final_hp": self.player_final_hp,
            "enemy_final_hp": self.enemy_final_hp,
            "player_max_hp": self.player_max_hp,
            "enemy_max_hp": self.enemy_max_hp,
            "total_rounds_played": self.total_rounds_played,
            "rounds": [r.to_dict() for r in self.rounds],
        }
