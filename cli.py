#!/usr/bin/env python3
"""
Fate's Echo - Command Line Interface

CLI for resolving Fate's Echo battles and checking them against on-chain
settlement. Every contract-mode result printed here is what FateEcho.sol
settles for the same seed.

Usage:
    uv run python cli.py battle --seed 37698387514118761970935242375478848299354595623015966326986973238447737190831
    uv run python cli.py battle --seed "my phrase" --difficulty risky --json
    uv run python cli.py draw --seed 0x2a --rounds 5
    uv run python cli.py cards --category event
    uv run python cli.py normalize --seed "my phrase"
    uv run python cli.py payout --seed 42 --bet 1000000000000000
    uv run python cli.py verify
    uv run python cli.py replay exports/games.jsonl
"""

import argparse
import json
import logging
import sys
import os
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fate_echo.engine import (
    DIFFICULTY_ORDER,
    EVENT_CARDS,
    COMBAT_CARDS,
    FULL_DECK,
    BattleResult,
    RoundOutcome,
    calculate_payout,
    draw_cards,
    normalize_seed,
    payout_multiplier,
    resolve_battle,
    seed_to_decimal,
    seed_to_hex,
)
from fate_echo.parity.comparison.seed_verifier import verify_catalog
from fate_echo.parity.replay_runner import SettlementReplayRunner

logger = logging.getLogger(__name__)


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_seed_info(raw_seed: str, seed: int) -> str:
    """Format seed information header."""
    return f"Seed: {raw_seed} (uint256: {seed_to_hex(seed)})"


def format_round(outcome: RoundOutcome) -> str:
    """Format a single round for display."""
    lines = [
        f"Round {outcome.round}: {outcome.player_card.name} vs {outcome.enemy_card.name}",
        f"  {outcome.narrative}",
        f"  Player HP {outcome.player_hp_before} -> {outcome.player_hp_after}"
        f" | Enemy HP {outcome.enemy_hp_before} -> {outcome.enemy_hp_after}",
    ]
    return "\n".join(lines)


def format_battle(result: BattleResult) -> str:
    """Format a full battle replay."""
    lines = []
    mode = result.difficulty or "contract"
    lines.append(f"Mode: {mode}{'' if result.contract_exact else ' (client-only, not settled on-chain)'}")
    lines.append(f"HP: {result.player_max_hp} vs {result.enemy_max_hp}")
    lines.append("")
    for outcome in result.rounds:
        lines.append(format_round(outcome))
    if result.ended_early:
        lines.append(f"\nBattle ended after {result.total_rounds_played} rounds")
    lines.append("")
    lines.append(f"Result: {result.outcome.value.upper()}"
                 f" (player {result.player_final_hp} HP, enemy {result.enemy_final_hp} HP)")
    return "\n".join(lines)


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_battle(args) -> int:
    """Resolve a battle and show the round-by-round replay."""
    result = resolve_battle(args.seed, difficulty=args.difficulty)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print(format_seed_info(args.seed, result.seed))
    print()
    print(format_battle(result))
    return 0


def cmd_draw(args) -> int:
    """Show the card ids drawn for each round."""
    seed = normalize_seed(args.seed)
    if args.rounds < 1:
        raise ValueError(f"rounds must be at least 1, got {args.rounds}")
    draws = draw_cards(seed, rounds=args.rounds)

    if args.json:
        data = {
            "seed": seed_to_decimal(seed),
            "player": list(draws.player_card_ids),
            "enemy": list(draws.enemy_card_ids),
        }
        print(json.dumps(data, indent=2))
        return 0

    print(format_seed_info(args.seed, seed))
    print()
    for i in range(draws.rounds):
        p_id, e_id = draws.pair(i)
        print(f"  Round {i + 1}: player {p_id:2d} ({FULL_DECK[p_id].name})"
              f" | enemy {e_id:2d} ({FULL_DECK[e_id].name})")
    return 0


def cmd_cards(args) -> int:
    """List the card catalogue."""
    if args.category == "event":
        cards = EVENT_CARDS
    elif args.category == "combat":
        cards = COMBAT_CARDS
    else:
        cards = FULL_DECK

    if args.json:
        print(json.dumps([c.to_dict() for c in cards], indent=2, ensure_ascii=False))
        return 0

    for card in cards:
        print(f"{card.id:2d}  {card.name:<22s} {card.description}")
    return 0


def cmd_normalize(args) -> int:
    """Show the decimal and hex forms of a normalized seed."""
    seed = normalize_seed(args.seed)
    if args.json:
        print(json.dumps({"decimal": seed_to_decimal(seed), "hex": seed_to_hex(seed)}, indent=2))
        return 0
    print(f"Decimal: {seed_to_decimal(seed)}")
    print(f"Hex:     {seed_to_hex(seed)}")
    return 0


def cmd_payout(args) -> int:
    """Resolve a battle and compute the payout for a bet."""
    if args.bet < 0:
        raise ValueError(f"bet must be non-negative, got {args.bet}")
    result = resolve_battle(args.seed, difficulty=args.difficulty)
    payout = calculate_payout(args.bet, result.outcome, args.difficulty)
    multiplier = payout_multiplier(result.outcome, args.difficulty)

    if args.json:
        data = {
            "seed": seed_to_decimal(result.seed),
            "difficulty": result.difficulty,
            "outcome": result.outcome.value,
            "bet": str(args.bet),
            "multiplier": str(multiplier),
            "payout": str(payout),
        }
        print(json.dumps(data, indent=2))
        return 0

    print(format_seed_info(args.seed, result.seed))
    print(f"Outcome: {result.outcome.value}")
    print(f"Multiplier: {float(multiplier):g}x")
    print(f"Payout: {payout} wei")
    return 0


def cmd_verify(args) -> int:
    """Check the engine against the verified settlement catalogue."""
    report = verify_catalog()
    for d in report.discrepancies:
        print(f"  [{d.severity.upper()}] {d.category}.{d.field}: expected={d.expected} actual={d.actual}")
    print(report.summary())
    return 0 if report.match else 1


def cmd_replay(args) -> int:
    """Replay a getGame JSONL export through the engine."""
    runner = SettlementReplayRunner(args.file, verbose=args.verbose)
    result = runner.run(max_games=args.limit)
    for d in result.discrepancies:
        print(f"Game {d.request_id}: {d.field} expected={d.expected} actual={d.actual}")
    print(f"Replayed {result.games_replayed} games, skipped {result.games_skipped},"
          f" {len(result.discrepancies)} discrepancies")
    return 0 if result.match else 1


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fate's Echo - battle resolver and settlement checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s battle --seed 42
  %(prog)s battle --seed "my phrase" --difficulty extreme --json
  %(prog)s draw --seed 0x2a
  %(prog)s cards --category event
  %(prog)s normalize --seed "my phrase"
  %(prog)s payout --seed 42 --bet 1000000000000000
  %(prog)s verify
  %(prog)s replay games.jsonl
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    difficulties = [d.value for d in DIFFICULTY_ORDER]

    # Battle command
    battle_parser = subparsers.add_parser("battle", help="Resolve a battle from a seed")
    battle_parser.add_argument("--seed", "-s", required=True, help="Seed (decimal, 0x hex, or any text)")
    battle_parser.add_argument("--difficulty", "-d", choices=difficulties,
                               help="Client-only difficulty mode (omit for contract-exact)")
    battle_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Draw command
    draw_parser = subparsers.add_parser("draw", help="Show card draws for a seed")
    draw_parser.add_argument("--seed", "-s", required=True, help="Seed")
    draw_parser.add_argument("--rounds", "-n", type=int, default=5, help="Number of rounds to draw")
    draw_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Cards command
    cards_parser = subparsers.add_parser("cards", help="List the card catalogue")
    cards_parser.add_argument("--category", "-c", choices=["event", "combat"], help="Filter by category")
    cards_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Normalize command
    normalize_parser = subparsers.add_parser("normalize", help="Normalize a seed to uint256")
    normalize_parser.add_argument("--seed", "-s", required=True, help="Seed")
    normalize_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Payout command
    payout_parser = subparsers.add_parser("payout", help="Compute the payout for a bet")
    payout_parser.add_argument("--seed", "-s", required=True, help="Seed")
    payout_parser.add_argument("--bet", "-b", type=int, required=True, help="Bet amount in wei")
    payout_parser.add_argument("--difficulty", "-d", choices=difficulties,
                               help="Client-only difficulty mode (omit for contract payout)")
    payout_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Verify command
    subparsers.add_parser("verify", help="Verify the engine against known settlements")

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Replay a getGame JSONL export")
    replay_parser.add_argument("file", help="Path to JSONL export")
    replay_parser.add_argument("--limit", type=int, help="Maximum games to replay")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch to command handler
    commands = {
        "battle": cmd_battle,
        "draw": cmd_draw,
        "cards": cmd_cards,
        "normalize": cmd_normalize,
        "payout": cmd_payout,
        "verify": cmd_verify,
        "replay": cmd_replay,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (ValueError, OSError) as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
