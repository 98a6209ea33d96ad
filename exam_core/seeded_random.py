"""
exam_core/seeded_random.py
-----------------------------------
Reproducible random stream for exam versioning.

- string_hash: polynomial rolling hash (x31) wrapped to signed 32-bit
- mulberry32: small counter-based generator, floats in [0, 1)
- make_rng: seed string -> generator

Same seed gives the same sequence on every platform and every run.
Không dùng module `random` ở đây: answer key phải tái tạo được.
"""

from typing import Callable

MASK32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296.0
MULBERRY_INCREMENT = 0x6D2B79F5

RandomSource = Callable[[], float]


def _to_int32(x: int) -> int:
    x &= MASK32
    return x - 0x100000000 if x & 0x80000000 else x


def _imul(a: int, b: int) -> int:
    """32-bit multiply, low 32 bits kept (unsigned)."""
    return (a * b) & MASK32


def string_hash(seed: str) -> int:
    """
    hash = hash * 31 + code_unit over the UTF-16 code units of `seed`,
    wrapped to a signed 32-bit integer after every step.
    """
    data = seed.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _to_int32(h * 31 + unit)
    return h


def mulberry32(state: int) -> RandomSource:
    """Return a generator closure over a 32-bit state."""
    s = state & MASK32

    def next_float() -> float:
        nonlocal s
        s = (s + MULBERRY_INCREMENT) & MASK32
        t = s
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        t &= MASK32
        return ((t ^ (t >> 14)) & MASK32) / TWO_POW_32

    return next_float


def make_rng(seed: str) -> RandomSource:
    return mulberry32(string_hash(seed))
