"""
Difficulty / Risk levels for the scaled (client-only) battle mode.

Each level changes starting HP, flat damage/heal bonuses and the payout
multipliers. Seed + difficulty together define the scaled battle outcome.

The scaled mode is NOT settled on-chain. The contract always resolves with
30/30 HP and no bonuses (see combat_engine.ContractBattleEngine).
"""

from dataclasses import dataclass
from typing import Dict, List, Union
from enum import Enum


class DifficultyId(Enum):
    SAFE = "safe"
    NORMAL = "normal"
    RISKY = "risky"
    EXTREME = "extreme"
    ABYSS = "abyss"


@dataclass(frozen=True)
class DifficultyConfig:
    """Battle modifiers and reward multipliers for one difficulty."""
    id: DifficultyId
    name: str
    icon: str
    description: str
    multiplier: float  # Win payout multiplier
    draw_multiplier: float  # Draw payout multiplier

    # Battle modifiers
    player_start_hp: int
    enemy_start_hp: int
    enemy_dmg_bonus: int  # Flat bonus to all enemy damage
    enemy_heal_bonus: int  # Flat bonus to enemy healing
    player_dmg_bonus: int  # Flat bonus to all player damage (can be negative)

    def to_dict(self) -> dict:
        return {
            "id": self.id.value,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "multiplier": self.multiplier,
            "draw_multiplier": self.draw_multiplier,
            "player_start_hp": self.player_start_hp,
            "enemy_start_hp": self.enemy_start_hp,
            "enemy_dmg_bonus": self.enemy_dmg_bonus,
            "enemy_heal_bonus": self.enemy_heal_bonus,
            "player_dmg_bonus": self.player_dmg_bonus,
        }


DIFFICULTIES: Dict[DifficultyId, DifficultyConfig] = {
    DifficultyId.SAFE: DifficultyConfig(
        id=DifficultyId.SAFE,
        name="Safe",
        icon="🌙",
        description="A gentle fate. Enemy is weakened, but the reward is modest.",
        multiplier=1.5,
        draw_multiplier=1.0,
        player_start_hp=30,
        enemy_start_hp=25,
        enemy_dmg_bonus=0,
        enemy_heal_bonus=0,
        player_dmg_bonus=1,
    ),
    DifficultyId.NORMAL: DifficultyConfig(
        id=DifficultyId.NORMAL,
        name="Normal",
        icon="⚔",
        description="The standard duel. Fair odds, balanced combat.",
        multiplier=2.0,
        draw_multiplier=1.0,
        player_start_hp=30,
        enemy_start_hp=30,
        enemy_dmg_bonus=0,
        enemy_heal_bonus=0,
        player_dmg_bonus=0,
    ),
    DifficultyId.RISKY: DifficultyConfig(
        id=DifficultyId.RISKY,
        name="Risky",
        icon="🔥",
        description="The enemy is empowered. Greater danger, greater reward.",
        multiplier=3.0,
        draw_multiplier=1.5,
        player_start_hp=30,
        enemy_start_hp=35,
        enemy_dmg_bonus=2,
        enemy_heal_bonus=1,
        player_dmg_bonus=0,
    ),
    DifficultyId.EXTREME: DifficultyConfig(
        id=DifficultyId.EXTREME,
        name="Extreme",
        icon="💀",
        description="A deadly gambit. The enemy is a titan. Only the bold survive.",
        multiplier=5.0,
        draw_multiplier=2.0,
        player_start_hp=25,
        enemy_start_hp=40,
        enemy_dmg_bonus=3,
        enemy_heal_bonus=2,
        player_dmg_bonus=0,
    ),
    DifficultyId.ABYSS: DifficultyConfig(
        id=DifficultyId.ABYSS,
        name="Abyss",
        icon="☠",
        description="The void beckons. Near-impossible odds, legendary payout.",
        multiplier=10.0,
        draw_multiplier=3.0,
        player_start_hp=20,
        enemy_start_hp=50,
        enemy_dmg_bonus=5,
        enemy_heal_bonus=3,
        player_dmg_bonus=-1,
    ),
}

DIFFICULTY_ORDER: List[DifficultyId] = [
    DifficultyId.SAFE,
    DifficultyId.NORMAL,
    DifficultyId.RISKY,
    DifficultyId.EXTREME,
    DifficultyId.ABYSS,
]

# Static display estimates, not measured
_WIN_RATE_ESTIMATES: Dict[DifficultyId, float] = {
    DifficultyId.SAFE: 0.72,
    DifficultyId.NORMAL: 0.48,
    DifficultyId.RISKY: 0.32,
    DifficultyId.EXTREME: 0.18,
    DifficultyId.ABYSS: 0.08,
}


def get_difficulty(value: Union[DifficultyId, DifficultyConfig, str]) -> DifficultyConfig:
    """Resolve a difficulty id, its string value, or a config to a config."""
    if isinstance(value, DifficultyConfig):
        return value
    if isinstance(value, str):
        try:
            value = DifficultyId(value.strip().lower())
        except ValueError:
            valid = ", ".join(d.value for d in DIFFICULTY_ORDER)
            raise ValueError(f"unknown difficulty {value!r} (expected one of: {valid})") from None
    return DIFFICULTIES[value]


def estimate_win_rate(difficulty: Union[DifficultyId, str]) -> float:
    """Approximate win rate for display."""
    return _WIN_RATE_ESTIMATES[get_difficulty(difficulty).id]


def expected_value(difficulty: Union[DifficultyId, str]) -> float:
    """EV per unit bet for display: winRate * (mult - 1) - (1 - winRate)."""
    config = get_difficulty(difficulty)
    wr = _WIN_RATE_ESTIMATES[config.id]
    return wr * (config.multiplier - 1) - (1 - wr)
