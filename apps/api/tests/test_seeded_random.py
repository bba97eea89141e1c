"""
Tests for the seeded random stream

The stream must match the browser implementation bit for bit, so these
pin down the 32-bit arithmetic and the hash input encoding.
"""
import pytest
from services.seeded_random import MASK32, SeededRandom, _code_units, cyrb128, imul


class TestImul:
    """32-bit multiply keeps only the low word"""

    def test_small_values(self):
        assert imul(2, 3) == 6

    def test_wraps_like_math_imul(self):
        """Math.imul(0xffffffff, 5) === -5"""
        assert imul(0xFFFFFFFF, 5) == (-5) & MASK32

    def test_result_is_unsigned_32_bit(self):
        assert 0 <= imul(2716044179, 2869860233) <= MASK32


class TestCyrb128:
    """Seed hashing"""

    def test_known_daily_seed(self):
        """Hash of a daily seed as computed in the browser"""
        assert cyrb128("Deniusth-Sat Oct 17 2026") == (712436856, 3803896863, 2012123044, 1482935624)

    def test_known_empty_seed(self):
        """Empty input still mixes the initial constants"""
        assert cyrb128("") == (41608494, 3507833936, 3451745039, 1474919459)

    def test_returns_four_unsigned_words(self):
        words = cyrb128("Deniusth-Sat Oct 17 2026")
        assert len(words) == 4
        assert all(0 <= w <= MASK32 for w in words)

    def test_deterministic(self):
        assert cyrb128("seed") == cyrb128("seed")

    def test_single_character_changes_hash(self):
        assert cyrb128("seed-a") != cyrb128("seed-b")

    def test_astral_characters_hash_as_surrogate_pairs(self):
        """Input is read as UTF-16 code units, like String.charCodeAt"""
        assert _code_units("\U0001F600") == [0xD83D, 0xDE00]
        assert _code_units("Aé") == [0x41, 0xE9]


class TestSeededRandom:
    """mulberry32 stream"""

    def test_from_seed_uses_first_hash_word(self):
        """Stream state starts at the first cyrb128 word"""
        assert SeededRandom.from_seed("abc").state == cyrb128("abc")[0]
        assert SeededRandom.from_seed("Deniusth-Sat Oct 17 2026").state == 712436856

    def test_same_seed_same_sequence(self):
        a = SeededRandom.from_seed("Deniusth")
        b = SeededRandom.from_seed("Deniusth")
        assert [a.random() for _ in range(50)] == [b.random() for _ in range(50)]

    def test_different_seeds_diverge(self):
        a = SeededRandom.from_seed("one")
        b = SeededRandom.from_seed("two")
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_values_in_unit_interval(self):
        """random() is in [0, 1)"""
        rng = SeededRandom.from_seed("range")
        for _ in range(1000):
            value = rng.random()
            assert 0.0 <= value < 1.0

    def test_state_wraps_at_32_bits(self):
        rng = SeededRandom(MASK32)
        rng.next_uint32()
        assert rng.state == (MASK32 + 0x6D2B79F5) & MASK32

    @pytest.mark.parametrize("low,high", [(0, 100), (40, 97), (0, 0), (-15, 15)])
    def test_between_is_inclusive(self, low, high):
        """Both bounds are reachable and nothing falls outside"""
        rng = SeededRandom.from_seed(f"between-{low}-{high}")
        values = [rng.between(low, high) for _ in range(2000)]
        assert min(values) >= low
        assert max(values) <= high
        if high - low <= 30:
            assert set(values) == set(range(low, high + 1))

    def test_pick_returns_member(self):
        rng = SeededRandom.from_seed("pick")
        items = ["a", "b", "c"]
        assert all(rng.pick(items) in items for _ in range(100))
