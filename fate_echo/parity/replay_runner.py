"""
Settlement Replay Runner - Re-resolves recorded on-chain games and compares them.

Parses a JSONL export of FateEcho getGame(requestId) tuples, one game per
line, recomputes each battle and its payout with the contract-exact engine,
and records any field that disagrees with what the contract settled.

Line format (uint256 values may be JSON numbers or decimal strings):
    {"requestId": "7", "player": "0xabc...", "betAmount": "1000000000000000",
     "seed": "3769...", "playerWon": true, "isDraw": false,
     "playerFinalHp": 29, "enemyFinalHp": 26,
     "payout": "1900000000000000", "state": 1}

Usage:
    from fate_echo.parity.replay_runner import SettlementReplayRunner

    runner = SettlementReplayRunner("exports/games.jsonl")
    results = runner.run()
    for d in results.discrepancies:
        print(f"Game {d.request_id}: {d.field} expected={d.expected} actual={d.actual}")
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fate_echo.engine.calc.payout import calculate_payout
from fate_echo.engine.combat_engine import resolve_battle
from fate_echo.engine.state.battle import BattleResult
from fate_echo.engine.state.rng import UINT256_MAX

logger = logging.getLogger(__name__)


# =============================================================================
# Data types
# =============================================================================

class GameState(IntEnum):
    """Contract game lifecycle. Only RESOLVED games carry a settlement."""
    PENDING = 0
    RESOLVED = 1


@dataclass
class RecordedGame:
    """One settled game as returned by getGame."""
    request_id: int
    player: str
    bet_amount: int
    seed: int
    player_won: bool
    is_draw: bool
    player_final_hp: int
    enemy_final_hp: int
    payout: int
    state: GameState
    line_number: int = 0


@dataclass
class Discrepancy:
    """A mismatch between the recorded settlement and the engine."""
    request_id: int
    field: str
    expected: Any  # Recorded on-chain
    actual: Any  # Recomputed


@dataclass
class ReplayResult:
    """Result of replaying a whole export."""
    games_total: int = 0
    games_replayed: int = 0
    games_skipped: int = 0
    discrepancies: List[Discrepancy] = field(default_factory=list)

    @property
    def match(self) -> bool:
        return not self.discrepancies

    def mismatched_games(self) -> List[int]:
        return sorted({d.request_id for d in self.discrepancies})


# =============================================================================
# JSONL Parser
# =============================================================================

def _parse_uint(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        value = int(value, 16) if value.lower().startswith("0x") else int(value)
    if not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def _parse_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    return value


def _parse_seed(value: Any) -> int:
    seed = _parse_uint(value, "seed")
    if seed > UINT256_MAX:
        raise ValueError(f"seed out of uint256 range: {seed}")
    return seed


def _parse_state(value: Any) -> GameState:
    if isinstance(value, str) and not value.strip().isdigit():
        try:
            return GameState[value.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown game state {value!r}") from None
    return GameState(_parse_uint(value, "state"))


def parse_game(obj: Dict[str, Any], line_number: int = 0) -> RecordedGame:
    """Build a RecordedGame from one decoded JSON object."""
    return RecordedGame(
        request_id=_parse_uint(obj["requestId"], "requestId"),
        player=str(obj.get("player", "")),
        bet_amount=_parse_uint(obj["betAmount"], "betAmount"),
        seed=_parse_seed(obj["seed"]),
        player_won=_parse_bool(obj["playerWon"], "playerWon"),
        is_draw=_parse_bool(obj["isDraw"], "isDraw"),
        player_final_hp=_parse_uint(obj["playerFinalHp"], "playerFinalHp"),
        enemy_final_hp=_parse_uint(obj["enemyFinalHp"], "enemyFinalHp"),
        payout=_parse_uint(obj["payout"], "payout"),
        state=_parse_state(obj["state"]),
        line_number=line_number,
    )


def parse_jsonl(path: Union[str, Path]) -> List[RecordedGame]:
    """Parse a getGame JSONL export. Blank lines are ignored."""
    games = []
    with open(path, "r") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
                if not isinstance(obj, dict):
                    raise ValueError("expected a JSON object")
                games.append(parse_game(obj, line_number))
            except KeyError as e:
                raise ValueError(f"line {line_number}: missing field {e.args[0]}") from e
            except ValueError as e:
                raise ValueError(f"line {line_number}: {e}") from e
    return games


# =============================================================================
# Replay Runner
# =============================================================================

class SettlementReplayRunner:
    """
    Replays recorded settlements through the contract-exact engine.

    Compares winner, draw flag, both final HPs and the payout. Games whose
    state is not RESOLVED have no settlement yet and are skipped.
    """

    def __init__(self, jsonl_path: Union[str, Path], verbose: bool = False):
        self.jsonl_path = jsonl_path
        self.verbose = verbose
        self.games = parse_jsonl(jsonl_path)

    def run(self, max_games: Optional[int] = None) -> ReplayResult:
        """
        Run the replay.

        Args:
            max_games: Stop after this many games (None = whole export)

        Returns:
            ReplayResult with discrepancies
        """
        result = ReplayResult(games_total=len(self.games))

        for game in self.games:
            if max_games is not None and result.games_replayed >= max_games:
                break
            if game.state is not GameState.RESOLVED:
                result.games_skipped += 1
                continue
            battle = resolve_battle(game.seed)
            self._compare(game, battle, result)
            result.games_replayed += 1
            if self.verbose:
                logger.info(
                    "game %d: %s, hp %d vs %d",
                    game.request_id, battle.outcome.value,
                    battle.player_final_hp, battle.enemy_final_hp,
                )

        logger.info(
            "replayed %d games (%d skipped), %d discrepancies",
            result.games_replayed, result.games_skipped, len(result.discrepancies),
        )
        return result

    def _compare(self, game: RecordedGame, battle: BattleResult, result: ReplayResult):
        """Compare one recorded game with its recomputation."""
        actual = {
            "player_won": battle.player_won,
            "is_draw": battle.is_draw,
            "player_final_hp": battle.player_final_hp,
            "enemy_final_hp": battle.enemy_final_hp,
            "payout": calculate_payout(game.bet_amount, battle.outcome),
        }
        for field_name, act_val in actual.items():
            exp_val = getattr(game, field_name)
            if exp_val != act_val:
                result.discrepancies.append(Discrepancy(
                    request_id=game.request_id, field=field_name,
                    expected=exp_val, actual=act_val,
                ))
