"""
Round Resolver Tests

Hand-computed matchups for every branch of _resolveRound plus a totality
sweep over all 78 x 78 card pairs.

Card ids used below:
    22 Ace of Wands (1)     35 King of Wands (14)
    36 Ace of Cups (1)      64 Ace of Pentacles (1)
    77 King of Pentacles (14)
"""

import pytest

from fate_echo.engine.calc.damage import (
    MatchupType,
    RoundDamage,
    apply_damage,
    apply_heal,
    classify_matchup,
    combat_power,
    resolve_clash,
    resolve_round,
    retaliation,
)
from fate_echo.engine.state.rng import keccak_uint256


class TestClassification:
    """Test matchup precedence."""

    @pytest.mark.parametrize("p_id,e_id,matchup", [
        (0, 21, MatchupType.CLASH),
        (5, 22, MatchupType.PLAYER_EVENT),
        (22, 5, MatchupType.ENEMY_EVENT),
        (22, 77, MatchupType.COMBAT),
    ])
    def test_classify(self, p_id, e_id, matchup):
        assert classify_matchup(p_id, e_id) is matchup


class TestClash:
    """Test event vs event."""

    def test_formula(self):
        h = keccak_uint256(3, 10)
        dmg = resolve_clash(3, 10)
        assert dmg.player_damage == 5 + h % 11
        assert dmg.enemy_damage == 5 + (h >> 8) % 11

    def test_no_healing_even_for_heal_cards(self):
        # 1 and 5 are both heal events; a clash ignores effect kinds
        dmg = resolve_round(1, 5)
        assert dmg.player_heal == 0
        assert dmg.enemy_heal == 0

    def test_range(self):
        for p_id in range(22):
            for e_id in range(22):
                dmg = resolve_clash(p_id, e_id)
                assert 5 <= dmg.player_damage <= 15
                assert 5 <= dmg.enemy_damage <= 15

    def test_order_sensitive(self):
        assert keccak_uint256(0, 1) != keccak_uint256(1, 0)


class TestEventVsCombat:
    """Test event vs combat in both directions."""

    def test_retaliation_is_half_rank(self):
        assert retaliation(22) == 0  # Ace
        assert retaliation(27) == 3  # 6 of Wands
        assert retaliation(35) == 7  # King

    def test_player_damage_event(self):
        # The Fool: 5 damage; King of Wands retaliates for 7
        assert resolve_round(0, 35) == RoundDamage(player_damage=5, enemy_damage=7)

    def test_player_heal_event(self):
        # The Magician: heal 8; an Ace retaliates for 0
        assert resolve_round(1, 22) == RoundDamage(player_heal=8)

    def test_heal_event_still_takes_retaliation(self):
        assert resolve_round(5, 35) == RoundDamage(player_heal=20, enemy_damage=7)

    def test_enemy_damage_event(self):
        # Wheel of Fortune: 19 damage
        assert resolve_round(35, 10) == RoundDamage(player_damage=7, enemy_damage=19)

    def test_enemy_heal_event(self):
        assert resolve_round(35, 5) == RoundDamage(player_damage=7, enemy_heal=20)


class TestCombatVsCombat:
    """Test rank comparison with counter bonus."""

    def test_counter_bonus_power(self):
        assert combat_power(35, 77) == 17  # Wands counters Pentacles
        assert combat_power(77, 35) == 14

    def test_counter_decides_equal_ranks(self):
        assert resolve_round(35, 77) == RoundDamage(player_damage=5, enemy_damage=1)

    def test_higher_rank_wins_same_suit(self):
        assert resolve_round(22, 35) == RoundDamage(player_damage=1, enemy_damage=15)

    def test_enemy_counter(self):
        # Cups counters Wands: 4 vs 1
        assert resolve_round(22, 36) == RoundDamage(player_damage=1, enemy_damage=5)

    def test_tie(self):
        assert resolve_round(22, 22) == RoundDamage(player_damage=2, enemy_damage=2)

    def test_max_damage(self):
        # King of Wands (17 with counter) vs Ace of Pentacles (1)
        assert resolve_round(35, 64) == RoundDamage(player_damage=18, enemy_damage=1)


class TestTotality:
    """Every pair of card ids resolves to sane, non-negative values."""

    def test_all_pairs(self):
        for p_id in range(78):
            for e_id in range(78):
                dmg = resolve_round(p_id, e_id)
                assert dmg.player_damage >= 0
                assert dmg.enemy_damage >= 0
                assert dmg.player_heal >= 0
                assert dmg.enemy_heal >= 0
                assert dmg.player_damage <= 20
                assert dmg.enemy_damage <= 20
                # Only one side can heal in a round, and only from its own event
                assert not (dmg.player_heal and dmg.enemy_heal)
                if dmg.player_heal:
                    assert p_id < 22 and e_id >= 22
                if dmg.enemy_heal:
                    assert e_id < 22 and p_id >= 22

    def test_combat_rounds_always_hurt_both(self):
        for p_id in range(22, 78):
            for e_id in range(22, 78):
                dmg = resolve_round(p_id, e_id)
                assert dmg.player_damage >= 1
                assert dmg.enemy_damage >= 1


class TestSaturatingArithmetic:
    """Test contract HP helpers."""

    @pytest.mark.parametrize("hp,dmg,expected", [
        (30, 5, 25),
        (6, 5, 1),
        (5, 5, 0),
        (3, 19, 0),
        (0, 2, 0),
        (30, 0, 30),
    ])
    def test_apply_damage(self, hp, dmg, expected):
        assert apply_damage(hp, dmg) == expected

    @pytest.mark.parametrize("hp,heal,expected", [
        (0, 8, 8),
        (22, 8, 30),
        (23, 8, 30),
        (21, 8, 29),
        (30, 0, 30),
        (10, 20, 30),
    ])
    def test_apply_heal(self, hp, heal, expected):
        assert apply_heal(hp, heal, 30) == expected
