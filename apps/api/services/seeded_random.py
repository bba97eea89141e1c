"""
Seeded Random Stream

Reproducible pseudo-random numbers for shareable prophecies. A seed string
is hashed with cyrb128 and the first word drives a mulberry32 stream.

Every operation is 32-bit wraparound arithmetic so that the same seed gives
the same sequence as the browser implementation the share links were first
produced with. Changing any constant, the hash input encoding, or the order
in which callers draw values invalidates every link already in circulation.
"""
import math
from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296

# cyrb128 lane seeds and multipliers
_H_INIT = (1779033703, 3144134277, 1013904242, 2773480762)
_M1, _M2, _M3, _M4 = 597399067, 2869860233, 951274213, 2716044179

# mulberry32 increment
_GOLDEN = 0x6D2B79F5


def imul(a: int, b: int) -> int:
    """Low 32 bits of a * b, as an unsigned int."""
    return ((a & MASK32) * (b & MASK32)) & MASK32


def _code_units(text: str) -> List[int]:
    # Hash input is UTF-16 code units, so astral characters contribute
    # their surrogate pair rather than a single code point.
    raw = text.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def cyrb128(text: str) -> Tuple[int, int, int, int]:
    """128-bit string hash returned as four unsigned 32-bit words."""
    h1, h2, h3, h4 = _H_INIT
    for k in _code_units(text):
        h1 = h2 ^ imul(h1 ^ k, _M1)
        h2 = h3 ^ imul(h2 ^ k, _M2)
        h3 = h4 ^ imul(h3 ^ k, _M3)
        h4 = h1 ^ imul(h4 ^ k, _M4)
    h1 = imul(h3 ^ (h1 >> 18), _M1)
    h2 = imul(h4 ^ (h2 >> 22), _M2)
    h3 = imul(h1 ^ (h3 >> 17), _M3)
    h4 = imul(h2 ^ (h4 >> 19), _M4)
    return (h1 ^ h2 ^ h3 ^ h4) & MASK32, h1, h2, h3


class SeededRandom:
    """
    mulberry32 stream over a 32-bit state.

    Not thread-safe; create one per prophecy.
    """

    def __init__(self, state: int):
        self.state = state & MASK32

    @classmethod
    def from_seed(cls, seed: str) -> "SeededRandom":
        return cls(cyrb128(seed)[0])

    def next_uint32(self) -> int:
        self.state = (self.state + _GOLDEN) & MASK32
        t = self.state
        t = imul(t ^ (t >> 15), t | 1)
        t ^= (t + imul(t ^ (t >> 7), t | 61)) & MASK32
        return (t ^ (t >> 14)) & MASK32

    def random(self) -> float:
        """Next value in [0, 1)."""
        return self.next_uint32() / TWO_POW_32

    def between(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        return math.floor(self.random() * (high - low + 1)) + low

    def pick(self, items: Sequence[T]) -> T:
        return items[math.floor(self.random() * len(items))]
