"""
Seed Normalizer and Card Generator Tests

The keccak vectors here are independent of the engine (published keccak256
values), so a wrong hash backend (e.g. SHA3-256) fails loudly.
"""

import pytest

from eth_hash.auto import keccak

from fate_echo.engine.state.rng import (
    UINT256_MAX,
    card_id_for,
    draw_cards,
    enemy_nonce,
    keccak_uint256,
    normalize_seed,
    parse_uint256_literal,
    player_nonce,
    seed_to_decimal,
    seed_to_hex,
)


KECCAK_EMPTY = 0xC5D2460186F7233C927E7DB2DCC703C0E500B653CA82273B7BFAD8045D85A470
KECCAK_HELLO = 0x1C8AFF950685C2ED4BC3174F3472287B56D9517B9C948127319A09A7A36DEAC8


class TestKeccak:
    """Test the keccak256 / abi.encodePacked primitive."""

    def test_known_vectors(self):
        assert int.from_bytes(keccak(b""), "big") == KECCAK_EMPTY
        assert int.from_bytes(keccak(b"hello"), "big") == KECCAK_HELLO

    def test_packed_encoding_is_two_words(self):
        expected = keccak((7).to_bytes(32, "big") + (3).to_bytes(32, "big"))
        assert keccak_uint256(7, 3) == int.from_bytes(expected, "big")

    def test_operand_order_matters(self):
        assert keccak_uint256(1, 2) != keccak_uint256(2, 1)

    @pytest.mark.parametrize("bad", [-1, UINT256_MAX + 1])
    def test_rejects_out_of_range(self, bad):
        with pytest.raises(ValueError):
            keccak_uint256(bad, 0)


class TestNormalizeSeed:
    """Test seed normalization for every input form."""

    @pytest.mark.parametrize("text,expected", [
        ("0", 0),
        ("42", 42),
        ("  42  ", 42),
        ("0x2a", 42),
        ("0X2A", 42),
        ("007", 7),
        (str(UINT256_MAX), UINT256_MAX),
        ("0x" + "f" * 64, UINT256_MAX),
    ])
    def test_literals_pass_through(self, text, expected):
        assert normalize_seed(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_string_is_zero(self, text):
        assert normalize_seed(text) == 0
        assert parse_uint256_literal(text) == 0

    def test_phrase_is_hashed(self):
        assert normalize_seed("hello") == KECCAK_HELLO

    def test_hash_uses_original_string(self):
        # Whitespace is only stripped for literal detection
        assert normalize_seed(" hello ") != normalize_seed("hello")
        assert normalize_seed(" hello ") == int.from_bytes(keccak(b" hello "), "big")

    def test_unicode_is_utf8(self):
        assert normalize_seed("命运") == int.from_bytes(keccak("命运".encode("utf-8")), "big")

    @pytest.mark.parametrize("text", ["-5", "+5", "1_000", "0x", "1e3", "0xZZ", "12abc"])
    def test_non_literals_are_hashed(self, text):
        assert normalize_seed(text) == int.from_bytes(keccak(text.encode("utf-8")), "big")

    def test_out_of_range_literal_is_hashed(self):
        text = str(UINT256_MAX + 1)
        assert parse_uint256_literal(text) is None
        assert normalize_seed(text) == int.from_bytes(keccak(text.encode("utf-8")), "big")

    def test_int_passthrough(self):
        assert normalize_seed(0) == 0
        assert normalize_seed(12345) == 12345
        assert normalize_seed(UINT256_MAX) == UINT256_MAX

    @pytest.mark.parametrize("bad", [-1, UINT256_MAX + 1, True, 1.5, None])
    def test_invalid_non_string(self, bad):
        with pytest.raises(ValueError):
            normalize_seed(bad)

    def test_always_in_range(self):
        for text in ["", " ", "a", "zzz", "0x" + "f" * 65, "9" * 100]:
            assert 0 <= normalize_seed(text) <= UINT256_MAX


class TestSeedFormatting:
    """Test decimal / hex output forms."""

    def test_decimal(self):
        assert seed_to_decimal(42) == "42"

    def test_hex_padded(self):
        assert seed_to_hex(42) == "0x" + "0" * 62 + "2a"
        assert len(seed_to_hex(UINT256_MAX)) == 66

    def test_hex_roundtrips_through_normalizer(self):
        seed = normalize_seed("fate")
        assert normalize_seed(seed_to_hex(seed)) == seed
        assert normalize_seed(seed_to_decimal(seed)) == seed


class TestCardGenerator:
    """Test keccak card draws."""

    def test_nonces(self):
        assert [player_nonce(i) for i in range(5)] == [0, 2, 4, 6, 8]
        assert [enemy_nonce(i) for i in range(5)] == [1, 3, 5, 7, 9]

    def test_card_id_formula(self):
        seed = normalize_seed("formula")
        for nonce in range(10):
            assert card_id_for(seed, nonce) == keccak_uint256(seed, nonce) % 78

    def test_card_ids_in_range(self):
        for i in range(50):
            seed = normalize_seed(f"range-{i}")
            for nonce in range(10):
                assert 0 <= card_id_for(seed, nonce) < 78

    def test_draws_are_deterministic(self):
        seed = normalize_seed("repeat me")
        assert draw_cards(seed) == draw_cards(seed)

    def test_draws_match_nonces(self):
        seed = normalize_seed("pairs")
        draws = draw_cards(seed)
        assert draws.rounds == 5
        for i in range(5):
            assert draws.pair(i) == (card_id_for(seed, 2 * i), card_id_for(seed, 2 * i + 1))

    def test_prefix_stable(self):
        seed = normalize_seed("prefix")
        short = draw_cards(seed, rounds=3)
        full = draw_cards(seed, rounds=5)
        assert full.player_card_ids[:3] == short.player_card_ids
        assert full.enemy_card_ids[:3] == short.enemy_card_ids

    def test_draw_rejects_bad_input(self):
        with pytest.raises(ValueError):
            draw_cards(-1)
        with pytest.raises(ValueError):
            draw_cards(1, rounds=-1)
