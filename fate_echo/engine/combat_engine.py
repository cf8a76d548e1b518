"""
Battle Engine - Five-round battle resolution from a single seed.

This module drives the round resolver across a battle:
1. Normalize the seed
2. For each round: stop if either side is at 0 HP, otherwise draw both
   cards (keccak, nonce 2i / 2i+1), resolve, and apply HP changes
3. Decide win / draw / loss from final HP

Two strategies share the same interface:
- ContractBattleEngine: bit-exact with FateEcho.sol _resolveBattle. This is
  the only strategy whose results may be used for settlement.
- ScaledBattleEngine: client-only difficulty mode. Same draws and base round
  damage, then flat post-hoc bonuses and per-side starting HP. Its clamp
  order differs from the contract on purpose (see apply_round).

Usage:
    from fate_echo.engine.combat_engine import resolve_battle

    result = resolve_battle("37698387514118761970935242375478848299354595623015966326986973238447737190831")
    assert result.player_won and result.player_final_hp == 29

    scaled = resolve_battle("hello", difficulty="risky")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from .calc.damage import RoundDamage, apply_damage, apply_heal, resolve_round
from .content.cards import MAX_HP, TOTAL_ROUNDS
from .content.difficulty import DifficultyConfig, DifficultyId, get_difficulty
from .narrative import describe_round
from .state.battle import BattlePhase, BattleResult, RoundOutcome
from .state.rng import card_id_for, enemy_nonce, normalize_seed, player_nonce

logger = logging.getLogger(__name__)


DifficultyLike = Union[DifficultyId, DifficultyConfig, str]


# =============================================================================
# BATTLE STATE
# =============================================================================

@dataclass
class SideState:
    """Running HP for one side. Only lives inside a single resolve call."""
    hp: int
    max_hp: int

    @property
    def is_dead(self) -> bool:
        return self.hp == 0


# =============================================================================
# BASE ENGINE
# =============================================================================

class BattleEngine:
    """
    Shared round loop.

    Subclasses decide starting HP, how raw round damage is adjusted, and how
    it is applied to HP.
    """

    rounds: int = TOTAL_ROUNDS

    def resolve(self, seed: Union[str, int]) -> BattleResult:
        """Resolve a full battle. Pure: same seed, same result."""
        normalized = normalize_seed(seed)
        player, enemy = self.starting_sides()
        outcomes: List[RoundOutcome] = []
        phase = self.next_phase(player, enemy, 0)

        while phase is BattlePhase.ROUND:
            i = len(outcomes)
            p_card_id = card_id_for(normalized, player_nonce(i))
            e_card_id = card_id_for(normalized, enemy_nonce(i))

            damage = self.adjust_damage(resolve_round(p_card_id, e_card_id))
            p_before, e_before = player.hp, enemy.hp
            self.apply_round(player, enemy, damage)

            annotation = describe_round(p_card_id, e_card_id, damage)
            outcome = RoundOutcome(
                round=i + 1,
                player_card_id=p_card_id,
                enemy_card_id=e_card_id,
                player_damage_dealt=damage.player_damage,
                enemy_damage_dealt=damage.enemy_damage,
                player_heal=damage.player_heal,
                enemy_heal=damage.enemy_heal,
                player_hp_before=p_before,
                enemy_hp_before=e_before,
                player_hp_after=player.hp,
                enemy_hp_after=enemy.hp,
                narrative=annotation.narrative,
                is_critical=annotation.is_critical,
                special_effects=annotation.effects,
            )
            outcomes.append(outcome)
            logger.debug(
                "round %d: cards %d vs %d, dmg %d/%d, heal %d/%d, hp %d/%d -> %d/%d",
                outcome.round, p_card_id, e_card_id,
                damage.player_damage, damage.enemy_damage,
                damage.player_heal, damage.enemy_heal,
                p_before, e_before, player.hp, enemy.hp,
            )
            phase = self.next_phase(player, enemy, len(outcomes))

        result = self._finish(normalized, player, enemy, outcomes)
        logger.info(
            "battle %s [%s]: %s, hp %d vs %d after %d rounds",
            hex(normalized)[:12], self.label, result.outcome.value,
            result.player_final_hp, result.enemy_final_hp, result.total_rounds_played,
        )
        return result

    # -------------------------------------------------------------------------
    # Strategy hooks
    # -------------------------------------------------------------------------

    @property
    def label(self) -> str:
        raise NotImplementedError

    @property
    def difficulty_id(self) -> Optional[str]:
        return None

    def starting_sides(self) -> Tuple[SideState, SideState]:
        raise NotImplementedError

    def adjust_damage(self, damage: RoundDamage) -> RoundDamage:
        return damage

    def apply_round(self, player: SideState, enemy: SideState, damage: RoundDamage):
        raise NotImplementedError

    def next_phase(self, player: SideState, enemy: SideState, rounds_played: int) -> BattlePhase:
        """ROUND while both sides stand and rounds remain, otherwise DONE."""
        if rounds_played >= self.rounds or player.is_dead or enemy.is_dead:
            return BattlePhase.DONE
        return BattlePhase.ROUND

    # -------------------------------------------------------------------------

    def _finish(
        self,
        seed: int,
        player: SideState,
        enemy: SideState,
        outcomes: List[RoundOutcome],
    ) -> BattleResult:
        player_hp = max(player.hp, 0)
        enemy_hp = max(enemy.hp, 0)
        return BattleResult(
            seed=seed,
            rounds=tuple(outcomes),
            player_won=player_hp > enemy_hp,
            is_draw=player_hp == enemy_hp,
            player_final_hp=player_hp,
            enemy_final_hp=enemy_hp,
            player_max_hp=player.max_hp,
            enemy_max_hp=enemy.max_hp,
            total_rounds_played=len(outcomes),
            difficulty=self.difficulty_id,
        )


# =============================================================================
# CONTRACT-EXACT ENGINE
# =============================================================================

class ContractBattleEngine(BattleEngine):
    """
    Matches FateEcho.sol _resolveBattle(seed) exactly.

    Per round, in contract order:
        enemyHp  = enemyHp  > pDmg ? enemyHp  - pDmg : 0
        playerHp = playerHp > eDmg ? playerHp - eDmg : 0
        playerHp = playerHp > MAX_HP - pHeal ? MAX_HP : playerHp + pHeal
        enemyHp  = enemyHp  > MAX_HP - eHeal ? MAX_HP : enemyHp  + eHeal

    Healing is applied after damage, so a side knocked to 0 by retaliation
    in the same round it heals ends the round above 0.
    """

    def __init__(self, max_hp: int = MAX_HP):
        self.max_hp = max_hp

    @property
    def label(self) -> str:
        return "contract"

    def starting_sides(self) -> Tuple[SideState, SideState]:
        return SideState(self.max_hp, self.max_hp), SideState(self.max_hp, self.max_hp)

    def apply_round(self, player: SideState, enemy: SideState, damage: RoundDamage):
        enemy.hp = apply_damage(enemy.hp, damage.player_damage)
        player.hp = apply_damage(player.hp, damage.enemy_damage)
        player.hp = apply_heal(player.hp, damage.player_heal, player.max_hp)
        enemy.hp = apply_heal(enemy.hp, damage.enemy_heal, enemy.max_hp)


# =============================================================================
# SCALED (DIFFICULTY) ENGINE
# =============================================================================

class ScaledBattleEngine(BattleEngine):
    """
    Client-only difficulty mode. NOT contract-exact.

    Bonuses are applied post-hoc to the contract's raw round damage:
    - player_dmg_bonus when the player deals damage (floored at 0)
    - enemy_dmg_bonus when the enemy deals damage
    - enemy_heal_bonus when the enemy heals

    HP is then updated net-then-clamp per side:
        hp = clamp(hp - incoming + heal, 0, side_max)
    """

    def __init__(self, difficulty: DifficultyLike):
        self.config = get_difficulty(difficulty)

    @property
    def label(self) -> str:
        return self.config.id.value

    @property
    def difficulty_id(self) -> Optional[str]:
        return self.config.id.value

    def starting_sides(self) -> Tuple[SideState, SideState]:
        return (
            SideState(self.config.player_start_hp, self.config.player_start_hp),
            SideState(self.config.enemy_start_hp, self.config.enemy_start_hp),
        )

    def adjust_damage(self, damage: RoundDamage) -> RoundDamage:
        cfg = self.config
        player_damage = damage.player_damage
        if player_damage > 0:
            player_damage = max(0, player_damage + cfg.player_dmg_bonus)
        enemy_damage = damage.enemy_damage
        if enemy_damage > 0:
            enemy_damage = max(0, enemy_damage + cfg.enemy_dmg_bonus)
        enemy_heal = damage.enemy_heal
        if enemy_heal > 0:
            enemy_heal += cfg.enemy_heal_bonus
        return RoundDamage(
            player_damage=player_damage,
            enemy_damage=enemy_damage,
            player_heal=damage.player_heal,
            enemy_heal=enemy_heal,
        )

    def apply_round(self, player: SideState, enemy: SideState, damage: RoundDamage):
        enemy.hp = _clamp(enemy.hp - damage.player_damage + damage.enemy_heal, enemy.max_hp)
        player.hp = _clamp(player.hp - damage.enemy_damage + damage.player_heal, player.max_hp)


def _clamp(hp: int, max_hp: int) -> int:
    return max(0, min(max_hp, hp))


# =============================================================================
# ENTRY POINTS
# =============================================================================

_CONTRACT_ENGINE = ContractBattleEngine()


def get_engine(difficulty: Optional[DifficultyLike] = None) -> BattleEngine:
    """Contract engine for None, scaled engine for any difficulty."""
    if difficulty is None:
        return _CONTRACT_ENGINE
    return ScaledBattleEngine(difficulty)


def resolve_battle(seed: Union[str, int], difficulty: Optional[DifficultyLike] = None) -> BattleResult:
    """
    Resolve a battle deterministically from a seed.

    With difficulty=None the result is identical to the on-chain settlement.
    Passing any difficulty (even "normal") selects the scaled client mode.
    """
    return get_engine(difficulty).resolve(seed)


def resolve_many(
    seeds: Iterable[Union[str, int]],
    difficulty: Optional[DifficultyLike] = None,
) -> List[BattleResult]:
    """Resolve several independent battles."""
    engine = get_engine(difficulty)
    return [engine.resolve(seed) for seed in seeds]
