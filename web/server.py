#!/usr/bin/env python3
"""
Fate's Echo Replay Server

A small JSON API over the battle engine so a frontend (or a curl) can replay
any seed round by round, look up cards and check payouts. Contract-mode
results are identical to on-chain settlement.

Configuration (environment or .env):
    FATE_ECHO_HOST       default 127.0.0.1
    FATE_ECHO_PORT       default 8080
    FATE_ECHO_LOG_LEVEL  default INFO

Usage:
    uv run python web/server.py

Then open http://localhost:8080/api/battle?seed=42
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
import uvicorn

from fate_echo.engine import (
    DIFFICULTY_ORDER,
    DIFFICULTIES,
    FULL_DECK,
    calculate_payout,
    get_card,
    payout_multiplier,
    resolve_battle,
    seed_to_decimal,
    validate_bet,
)
from fate_echo.engine import __version__ as ENGINE_VERSION
from fate_echo.parity.comparison.seed_verifier import verify_catalog

load_dotenv()

logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class ServerSettings:
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"


def load_settings(env: Mapping[str, str] = os.environ) -> ServerSettings:
    """Read server settings from environment variables."""
    port_value = env.get("FATE_ECHO_PORT", "8080")
    try:
        port = int(port_value)
    except ValueError:
        raise ValueError(f"FATE_ECHO_PORT must be an integer, got {port_value!r}") from None
    log_level = env.get("FATE_ECHO_LOG_LEVEL", "INFO").upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"unknown FATE_ECHO_LOG_LEVEL {log_level!r}")
    return ServerSettings(
        host=env.get("FATE_ECHO_HOST", "127.0.0.1"),
        port=port,
        log_level=log_level,
    )


app = FastAPI(title="Fate's Echo Replay Server")


def _bad_request(e: ValueError) -> HTTPException:
    logger.debug("rejected request: %s", e)
    return HTTPException(status_code=400, detail=str(e))


# ============================================================================
# ENDPOINTS
# ============================================================================

@app.get("/api/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "version": ENGINE_VERSION}


@app.get("/api/cards")
async def list_cards() -> Dict[str, Any]:
    """The full 78-card catalogue."""
    return {"cards": [c.to_dict() for c in FULL_DECK]}


@app.get("/api/cards/{card_id}")
async def card_detail(card_id: int) -> Dict[str, Any]:
    try:
        return get_card(card_id).to_dict()
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/api/difficulties")
async def list_difficulties() -> Dict[str, Any]:
    return {"difficulties": [DIFFICULTIES[d].to_dict() for d in DIFFICULTY_ORDER]}


@app.get("/api/battle")
async def battle(seed: str, difficulty: Optional[str] = None) -> Dict[str, Any]:
    """Round-by-round replay of a seed."""
    try:
        result = resolve_battle(seed, difficulty=difficulty)
    except ValueError as e:
        raise _bad_request(e)
    return result.to_dict()


@app.get("/api/payout")
async def payout(seed: str, bet: int, difficulty: Optional[str] = None) -> Dict[str, Any]:
    """Outcome and payout for a bet placed on a seed."""
    try:
        validate_bet(bet)
        result = resolve_battle(seed, difficulty=difficulty)
        amount = calculate_payout(bet, result.outcome, difficulty)
        multiplier = payout_multiplier(result.outcome, difficulty)
    except ValueError as e:
        raise _bad_request(e)
    # wei amounts as strings; they overflow JS numbers
    return {
        "seed": seed_to_decimal(result.seed),
        "difficulty": result.difficulty,
        "outcome": result.outcome.value,
        "bet": str(bet),
        "multiplier": str(multiplier),
        "payout": str(amount),
    }


@app.get("/api/verify")
async def verify() -> Dict[str, Any]:
    """Run the verified settlement catalogue."""
    report = verify_catalog()
    return {
        "match": report.match,
        "checked": report.checked,
        "summary": report.summary(),
        "discrepancies": [
            {
                "category": d.category,
                "field": d.field,
                "expected": str(d.expected),
                "actual": str(d.actual),
                "severity": d.severity,
            }
            for d in report.discrepancies
        ],
    }


# ============================================================================
# MAIN
# ============================================================================

def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    print(f"""
    ========================================
    Fate's Echo Replay Server
    ========================================

    API URL: http://{settings.host}:{settings.port}/api/battle?seed=42

    Press Ctrl+C to stop.
    ========================================
    """)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
