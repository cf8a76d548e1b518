"""
Seed normalization and keccak card draws - Exact replication of FateEcho.sol.

The contract draws every card with:
    uint256(keccak256(abi.encodePacked(seed, nonce))) % 78

abi.encodePacked of two uint256 values is 64 bytes: both operands as 32-byte
big-endian words, concatenated, no length prefix. Any other encoding (or
Python's hashlib.sha3_256, which pads differently from keccak) produces
plausible but WRONG cards.

Nonces per battle:
- player card, round i: 2 * i
- enemy card,  round i: 2 * i + 1

There is no draw state: each card is a pure function of (seed, nonce), so the
same id can appear more than once in a battle.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from eth_abi.packed import encode_packed
from eth_hash.auto import keccak

from ..content.cards import DECK_SIZE, TOTAL_ROUNDS


UINT256_MAX = 2 ** 256 - 1

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")


def _check_uint256(value: int, label: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{label} must be an int, got {type(value).__name__}")
    if not 0 <= value <= UINT256_MAX:
        raise ValueError(f"{label} out of uint256 range: {value}")
    return value


def keccak_uint256(*values: int) -> int:
    """keccak256(abi.encodePacked(uint256...)) as an unsigned integer."""
    for v in values:
        _check_uint256(v, "operand")
    packed = encode_packed(["uint256"] * len(values), list(values))
    return int.from_bytes(keccak(packed), "big")


# =============================================================================
# SEED NORMALIZER
# =============================================================================

def parse_uint256_literal(text: str) -> Optional[int]:
    """
    Parse a decimal or 0x-hex literal within uint256 range.

    Surrounding whitespace is ignored and a blank string reads as 0.
    Returns None for anything else (signed, underscores, out of range).
    """
    stripped = text.strip()
    if not stripped:
        return 0
    if _DECIMAL_RE.match(stripped):
        value = int(stripped, 10)
    elif _HEX_RE.match(stripped):
        value = int(stripped, 16)
    else:
        return None
    if value > UINT256_MAX:
        return None
    return value


def normalize_seed(seed: Union[str, int]) -> int:
    """
    Normalize any seed to a uint256.

    - uint256 decimal/hex strings (e.g. raw VRF words) pass through verbatim
    - blank strings are seed 0
    - any other string is hashed: keccak256(utf8(seed))
    - ints are taken as already-normalized and must be in range

    Never fails for string input.
    """
    if isinstance(seed, int) and not isinstance(seed, bool):
        return _check_uint256(seed, "seed")
    if not isinstance(seed, str):
        raise ValueError(f"seed must be str or int, got {type(seed).__name__}")

    literal = parse_uint256_literal(seed)
    if literal is not None:
        return literal
    return int.from_bytes(keccak(seed.encode("utf-8")), "big")


def seed_to_decimal(seed: int) -> str:
    """Decimal form, as the contract reports it."""
    return str(_check_uint256(seed, "seed"))


def seed_to_hex(seed: int) -> str:
    """0x-prefixed, zero-padded 32-byte hex form."""
    return "0x" + _check_uint256(seed, "seed").to_bytes(32, "big").hex()


# =============================================================================
# CARD GENERATOR
# =============================================================================

def player_nonce(round_index: int) -> int:
    """Nonce for the player's card in a 0-based round."""
    return round_index * 2


def enemy_nonce(round_index: int) -> int:
    """Nonce for the enemy's card in a 0-based round."""
    return round_index * 2 + 1


def card_id_for(seed: int, nonce: int) -> int:
    """
    Card id (0-77) for a seed and nonce.

    Matches Solidity _hashToCardId:
        uint256(keccak256(abi.encodePacked(seed, nonce))) % 78
    """
    return keccak_uint256(seed, nonce) % DECK_SIZE


@dataclass(frozen=True)
class CardDraws:
    """Card ids for every round of a battle."""
    seed: int
    player_card_ids: Tuple[int, ...]
    enemy_card_ids: Tuple[int, ...]

    @property
    def rounds(self) -> int:
        return len(self.player_card_ids)

    def pair(self, round_index: int) -> Tuple[int, int]:
        """(player_card_id, enemy_card_id) for a 0-based round."""
        return self.player_card_ids[round_index], self.enemy_card_ids[round_index]


def draw_cards(seed: int, rounds: int = TOTAL_ROUNDS) -> CardDraws:
    """Draw both sides' cards for a battle."""
    _check_uint256(seed, "seed")
    if rounds < 0:
        raise ValueError(f"rounds must be non-negative, got {rounds}")
    return CardDraws(
        seed=seed,
        player_card_ids=tuple(card_id_for(seed, player_nonce(i)) for i in range(rounds)),
        enemy_card_ids=tuple(card_id_for(seed, enemy_nonce(i)) for i in range(rounds)),
    )
