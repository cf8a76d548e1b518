"""
Round Resolver - Single source of truth for per-round damage and healing.

Design principles:
1. Pure functions - no side effects, no state
2. Integer-only arithmetic (floor division, saturating add/sub)
3. Branching mirrors FateEcho.sol _resolveRound line-by-line

Matchup precedence (from _resolveRound):
1. Event vs Event   -> _resolveMajorClash
2. Event vs Combat  -> _resolveMajorVsMinor (player owns the event)
3. Combat vs Event  -> _resolveMajorVsMinor (enemy owns the event)
4. Combat vs Combat -> _resolveMinorVsMinor

Naming: player_damage is damage the PLAYER DEALS (to the enemy);
enemy_damage is damage the ENEMY DEALS (to the player).
"""

from dataclasses import dataclass
from enum import Enum

from ..content.cards import (
    COUNTER_BONUS,
    EffectKind,
    beats,
    combat_rank,
    combat_suit,
    event_effect_kind,
    event_effect_magnitude,
    is_event_card,
)
from ..state.rng import keccak_uint256

__all__ = [
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
]


# =============================================================================
# CONSTANTS - from the settlement contract
# =============================================================================

# Clash: 5 + slice % 11 -> [5, 16)
CLASH_BASE_DAMAGE = 5
CLASH_DAMAGE_SPREAD = 11
CLASH_ENEMY_SHIFT = 8  # enemy slice is hash >> 8

# Combat vs combat
WIN_DAMAGE_BONUS = 2  # winner deals (diff + 2)
GLANCING_BLOW_DAMAGE = 1  # loser always deals 1 back
TIE_DAMAGE = 2


class MatchupType(Enum):
    """Card category pairing for a round, in resolution precedence order."""
    CLASH = "clash"  # event vs event
    PLAYER_EVENT = "player_event"  # player event vs enemy combat
    ENEMY_EVENT = "enemy_event"  # player combat vs enemy event
    COMBAT = "combat"  # combat vs combat


@dataclass(frozen=True)
class RoundDamage:
    """Raw numeric result of one round. All values are non-negative."""
    player_damage: int = 0  # dealt by player to enemy
    enemy_damage: int = 0  # dealt by enemy to player
    player_heal: int = 0
    enemy_heal: int = 0


def classify_matchup(player_card_id: int, enemy_card_id: int) -> MatchupType:
    """Classify a round by card categories."""
    player_event = is_event_card(player_card_id)
    enemy_event = is_event_card(enemy_card_id)
    if player_event and enemy_event:
        return MatchupType.CLASH
    if player_event:
        return MatchupType.PLAYER_EVENT
    if enemy_event:
        return MatchupType.ENEMY_EVENT
    return MatchupType.COMBAT


# =============================================================================
# ROUND RESOLUTION
# =============================================================================

def resolve_round(player_card_id: int, enemy_card_id: int) -> RoundDamage:
    """
    Resolve one round from two card ids.

    Matches Solidity: _resolveRound(pCardId, eCardId)
    """
    matchup = classify_matchup(player_card_id, enemy_card_id)
    if matchup is MatchupType.CLASH:
        return resolve_clash(player_card_id, enemy_card_id)
    if matchup is MatchupType.PLAYER_EVENT:
        return resolve_event_vs_combat(player_card_id, enemy_card_id, event_is_player=True)
    if matchup is MatchupType.ENEMY_EVENT:
        return resolve_event_vs_combat(enemy_card_id, player_card_id, event_is_player=False)
    return resolve_combat_vs_combat(player_card_id, enemy_card_id)


def resolve_clash(player_card_id: int, enemy_card_id: int) -> RoundDamage:
    """
    Two event cards: both sides take hash-derived damage, nobody heals.

    Matches Solidity: _resolveMajorClash
        hash = keccak256(abi.encodePacked(pCardId, eCardId))
        pDmg = 5 + hash % 11
        eDmg = 5 + (hash >> 8) % 11
    """
    h = keccak_uint256(player_card_id, enemy_card_id)
    return RoundDamage(
        player_damage=CLASH_BASE_DAMAGE + h % CLASH_DAMAGE_SPREAD,
        enemy_damage=CLASH_BASE_DAMAGE + (h >> CLASH_ENEMY_SHIFT) % CLASH_DAMAGE_SPREAD,
    )


def retaliation(card_id: int) -> int:
    """Counter-damage a combat card deals against an event card: floor(rank / 2)."""
    return combat_rank(card_id) // 2


def resolve_event_vs_combat(event_card_id: int, combat_card_id: int, event_is_player: bool) -> RoundDamage:
    """
    One event card against one combat card.

    The event fires at full magnitude for its owner (damage dealt or HP
    healed). The combat card always retaliates against the event owner,
    whatever the event's effect kind.

    Matches Solidity: _resolveMajorVsMinor(majorId, minorId, majorIsPlayer)
    """
    magnitude = event_effect_magnitude(event_card_id)
    counter = retaliation(combat_card_id)

    if event_effect_kind(event_card_id) is EffectKind.DAMAGE:
        owner_damage, owner_heal = magnitude, 0
    else:
        owner_damage, owner_heal = 0, magnitude

    if event_is_player:
        return RoundDamage(
            player_damage=owner_damage,
            enemy_damage=counter,
            player_heal=owner_heal,
        )
    return RoundDamage(
        player_damage=counter,
        enemy_damage=owner_damage,
        enemy_heal=owner_heal,
    )


def combat_power(card_id: int, opponent_card_id: int) -> int:
    """Rank, +COUNTER_BONUS if this card's suit counters the opponent's."""
    power = combat_rank(card_id)
    if beats(combat_suit(card_id), combat_suit(opponent_card_id)):
        power += COUNTER_BONUS
    return power


def resolve_combat_vs_combat(player_card_id: int, enemy_card_id: int) -> RoundDamage:
    """
    Two combat cards: compare power.

    Matches Solidity: _resolveMinorVsMinor
    - higher power deals (diff + 2), lower deals 1
    - tie: both deal 2
    """
    p_power = combat_power(player_card_id, enemy_card_id)
    e_power = combat_power(enemy_card_id, player_card_id)

    if p_power > e_power:
        return RoundDamage(
            player_damage=p_power - e_power + WIN_DAMAGE_BONUS,
            enemy_damage=GLANCING_BLOW_DAMAGE,
        )
    if e_power > p_power:
        return RoundDamage(
            player_damage=GLANCING_BLOW_DAMAGE,
            enemy_damage=e_power - p_power + WIN_DAMAGE_BONUS,
        )
    return RoundDamage(player_damage=TIE_DAMAGE, enemy_damage=TIE_DAMAGE)


# =============================================================================
# SATURATING HP ARITHMETIC
# =============================================================================

def apply_damage(hp: int, damage: int) -> int:
    """
    Subtract damage, flooring at 0.

    Contract: hp > dmg ? hp - dmg : 0
    """
    return hp - damage if hp > damage else 0


def apply_heal(hp: int, heal: int, max_hp: int) -> int:
    """
    Add healing, capping at max_hp.

    Contract: hp > MAX_HP - heal ? MAX_HP : hp + heal
    """
    return max_hp if hp > max_hp - heal else hp + heal
