"""
Round narration - flavor text and special-effect flags for replays.

Everything here is derived from a round's inputs and its resolved
RoundDamage. Nothing feeds back into HP math.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .calc.damage import MatchupType, RoundDamage, classify_matchup
from .content.cards import COUNTER_BONUS, EffectKind, beats, get_card
from .state.battle import SpecialEffect


# A combat round is critical when the winner deals at least this much
CRITICAL_THRESHOLD = 10


@dataclass(frozen=True)
class RoundAnnotation:
    narrative: str
    is_critical: bool
    effects: Tuple[SpecialEffect, ...]


def _effect_verb(card_id: int) -> str:
    return "strikes" if get_card(card_id).effect_kind is EffectKind.DAMAGE else "heals"


def describe_round(player_card_id: int, enemy_card_id: int, damage: RoundDamage) -> RoundAnnotation:
    """Build the narrative line and flags for a resolved round."""
    p_card = get_card(player_card_id)
    e_card = get_card(enemy_card_id)
    matchup = classify_matchup(player_card_id, enemy_card_id)
    effects: List[SpecialEffect] = []

    if matchup is MatchupType.CLASH:
        narrative = (
            f"⚡ FATE CLASH - {p_card.name} vs {e_card.name}! "
            f"Player deals {damage.player_damage}, takes {damage.enemy_damage} damage!"
        )
        effects.append(SpecialEffect.MAJOR_CLASH)
        return RoundAnnotation(narrative, True, tuple(effects))

    if matchup is MatchupType.PLAYER_EVENT:
        parts = [f"✨ {p_card.name} {_effect_verb(player_card_id)}!"]
        if damage.player_damage > 0:
            parts.append(f"Deals {damage.player_damage} damage.")
        if damage.player_heal > 0:
            parts.append(f"Heals {damage.player_heal} HP.")
        if damage.enemy_damage > 0:
            parts.append(f"{e_card.name} retaliates for {damage.enemy_damage}.")
        effects.append(SpecialEffect.MAJOR_ABILITY)
        return RoundAnnotation(" ".join(parts), True, tuple(effects))

    if matchup is MatchupType.ENEMY_EVENT:
        parts = [f"💀 {e_card.name} {_effect_verb(enemy_card_id)}!"]
        if damage.enemy_damage > 0:
            parts.append(f"Deals {damage.enemy_damage} damage.")
        if damage.enemy_heal > 0:
            parts.append(f"Heals {damage.enemy_heal} HP.")
        if damage.player_damage > 0:
            parts.append(f"{p_card.name} retaliates for {damage.player_damage}.")
        effects.append(SpecialEffect.MAJOR_ABILITY)
        return RoundAnnotation(" ".join(parts), True, tuple(effects))

    # Combat vs combat
    parts = []
    if beats(p_card.suit, e_card.suit):
        parts.append(f"🔥 {p_card.suit.label} counters {e_card.suit.label}! (+{COUNTER_BONUS})")
        effects.append(SpecialEffect.COUNTER)
    elif beats(e_card.suit, p_card.suit):
        parts.append(f"🔥 {e_card.suit.label} counters {p_card.suit.label}! (+{COUNTER_BONUS})")
        effects.append(SpecialEffect.COUNTER)

    is_critical = False
    if damage.player_damage > damage.enemy_damage:
        parts.append(f"{p_card.name} overpowers {e_card.name}!")
        is_critical = damage.player_damage >= CRITICAL_THRESHOLD
    elif damage.enemy_damage > damage.player_damage:
        parts.append(f"{e_card.name} overpowers {p_card.name}!")
        is_critical = damage.enemy_damage >= CRITICAL_THRESHOLD
    else:
        parts.append(f"{p_card.name} clashes with {e_card.name}! It's a tie!")

    if is_critical:
        parts.append("💥 CRITICAL!")
        effects.append(SpecialEffect.CRITICAL)

    return RoundAnnotation(" ".join(parts), is_critical, tuple(effects))
