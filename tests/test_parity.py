"""
Settlement Parity Tests

Checks the engine against recorded on-chain settlements and contract tables.
"""

import pytest

from fate_echo.parity.comparison.seed_verifier import (
    verify_battle,
    verify_card_table,
    verify_catalog,
    verify_constants,
)
from fate_echo.parity.seed_catalog import (
    GOLDEN_SEED,
    MAJOR_EFFECT_TABLE,
    VERIFIED_BATTLES,
)


class TestVerifiedBattles:
    """Every catalogued settlement must match exactly."""

    @pytest.mark.parametrize("seed", list(VERIFIED_BATTLES))
    def test_verified_seed(self, seed):
        report = verify_battle(seed, VERIFIED_BATTLES[seed])
        assert report.match, report.discrepancies
        assert report.checked == 4

    def test_golden_seed_is_catalogued(self):
        assert VERIFIED_BATTLES[GOLDEN_SEED]["player_final_hp"] == 29
        assert VERIFIED_BATTLES[GOLDEN_SEED]["enemy_final_hp"] == 26

    def test_full_catalog(self):
        report = verify_catalog()
        assert report.match
        assert report.error_count() == 0
        assert GOLDEN_SEED in report.results
        assert report.summary().startswith("MATCH")


class TestDiscrepancyReporting:
    """Wrong expectations are reported field by field."""

    def test_wrong_hp(self):
        report = verify_battle(GOLDEN_SEED, {"player_won": True, "player_final_hp": 30, "enemy_final_hp": 26})
        assert not report.match
        assert report.checked == 3
        assert len(report.discrepancies) == 1
        d = report.discrepancies[0]
        assert (d.category, d.field, d.expected, d.actual) == ("battle", "player_final_hp", 30, 29)

    def test_partial_expectation(self):
        report = verify_battle(GOLDEN_SEED, {"player_won": True})
        assert report.match
        assert report.checked == 1

    def test_catalog_with_bad_entry(self):
        report = verify_catalog({GOLDEN_SEED: {"player_won": False}})
        assert not report.match
        assert report.summary().startswith("MISMATCH")


class TestStaticTables:

    def test_card_table(self):
        report = verify_card_table()
        assert report.match
        assert report.checked == len(MAJOR_EFFECT_TABLE) == 22

    def test_card_table_mismatch(self):
        report = verify_card_table({0: (1, 5)})
        assert not report.match
        assert report.discrepancies[0].field == "major_0"

    def test_constants(self):
        report = verify_constants()
        assert report.match, report.discrepancies
