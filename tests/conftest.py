"""
Shared pytest fixtures for the Fate's Echo test suite.

This module provides reusable fixtures for:
- Known seeds (on-chain verified and synthetic)
- Resolved battles
- Recorded settlement exports
"""

import json
import os
import sys

import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from fate_echo.engine.combat_engine import resolve_battle
from fate_echo.parity.seed_catalog import GOLDEN_SEED


# =============================================================================
# Seed Fixtures
# =============================================================================


@pytest.fixture
def golden_seed():
    """Seed with an on-chain settlement: player wins 29 vs 26."""
    return GOLDEN_SEED


@pytest.fixture
def golden_result(golden_seed):
    """Contract-exact battle for the golden seed."""
    return resolve_battle(golden_seed)


@pytest.fixture
def sample_seeds():
    """A spread of seed forms: decimal, hex, phrases, edge values."""
    return [
        "0",
        "1",
        "42",
        "0x2a",
        "hello",
        "fate's echo",
        "The Tower",
        "  padded phrase  ",
        "115792089237316195423570985008687907853269984665640564039457584007913129639935",
    ] + [f"seed-{i}" for i in range(40)]


# =============================================================================
# Settlement export Fixtures
# =============================================================================


def make_game_record(request_id, seed, result, bet=10 ** 15, payout=None, state=1):
    """Build a getGame-shaped dict from a resolved battle."""
    if payout is None:
        if result.player_won:
            payout = bet * 190 // 100
        elif result.is_draw:
            payout = bet
        else:
            payout = 0
    return {
        "requestId": str(request_id),
        "player": "0x000000000000000000000000000000000000dEaD",
        "betAmount": str(bet),
        "seed": str(seed),
        "playerWon": result.player_won,
        "isDraw": result.is_draw,
        "playerFinalHp": result.player_final_hp,
        "enemyFinalHp": result.enemy_final_hp,
        "payout": str(payout),
        "state": state,
    }


@pytest.fixture
def write_jsonl(tmp_path):
    """Write a list of dicts (or raw strings) to a JSONL file and return its path."""
    def _write(rows, name="games.jsonl"):
        path = tmp_path / name
        with open(path, "w") as f:
            for row in rows:
                f.write(row if isinstance(row, str) else json.dumps(row))
                f.write("\n")
        return path
    return _write


@pytest.fixture
def game_record():
    """Factory for getGame-shaped records."""
    return make_game_record
