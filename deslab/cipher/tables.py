"""DES permutation / substitution tables and bit-level primitives.

Tables are reproduced verbatim from FIPS 46-3. Every position table is
1-indexed into its input, so a table may repeat positions (expansion) or
omit them (compression).

Bit sequences are plain lists of 0/1 ints, most significant bit first.

Research / education only. Do NOT use in production.
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from deslab.errors import InputFormatError

Bits = List[int]


# ============================================================================
# PERMUTATION TABLES
# ============================================================================

IP_TABLE: Tuple[int, ...] = (
    58, 50, 42, 34, 26, 18, 10, 2,
    60, 52, 44, 36, 28, 20, 12, 4,
    62, 54, 46, 38, 30, 22, 14, 6,
    64, 56, 48, 40, 32, 24, 16, 8,
    57, 49, 41, 33, 25, 17, 9, 1,
    59, 51, 43, 35, 27, 19, 11, 3,
    61, 53, 45, 37, 29, 21, 13, 5,
    63, 55, 47, 39, 31, 23, 15, 7,
)

FP_TABLE: Tuple[int, ...] = (
    40, 8, 48, 16, 56, 24, 64, 32,
    39, 7, 47, 15, 55, 23, 63, 31,
    38, 6, 46, 14, 54, 22, 62, 30,
    37, 5, 45, 13, 53, 21, 61, 29,
    36, 4, 44, 12, 52, 20, 60, 28,
    35, 3, 43, 11, 51, 19, 59, 27,
    34, 2, 42, 10, 50, 18, 58, 26,
    33, 1, 41, 9, 49, 17, 57, 25,
)

# Expansion: 32 -> 48 bits
E_TABLE: Tuple[int, ...] = (
    32, 1, 2, 3, 4, 5,
    4, 5, 6, 7, 8, 9,
    8, 9, 10, 11, 12, 13,
    12, 13, 14, 15, 16, 17,
    16, 17, 18, 19, 20, 21,
    20, 21, 22, 23, 24, 25,
    24, 25, 26, 27, 28, 29,
    28, 29, 30, 31, 32, 1,
)

P_TABLE: Tuple[int, ...] = (
    16, 7, 20, 21, 29, 12, 28, 17,
    1, 15, 23, 26, 5, 18, 31, 10,
    2, 8, 24, 14, 32, 27, 3, 9,
    19, 13, 30, 6, 22, 11, 4, 25,
)

# Permuted Choice 1: drops the 8 parity bits, 64 -> 56
PC1_TABLE: Tuple[int, ...] = (
    57, 49, 41, 33, 25, 17, 9,
    1, 58, 50, 42, 34, 26, 18,
    10, 2, 59, 51, 43, 35, 27,
    19, 11, 3, 60, 52, 44, 36,
    63, 55, 47, 39, 31, 23, 15,
    7, 62, 54, 46, 38, 30, 22,
    14, 6, 61, 53, 45, 37, 29,
    21, 13, 5, 28, 20, 12, 4,
)

# Permuted Choice 2: 56 -> 48
PC2_TABLE: Tuple[int, ...] = (
    14, 17, 11, 24, 1, 5,
    3, 28, 15, 6, 21, 10,
    23, 19, 12, 4, 26, 8,
    16, 7, 27, 20, 13, 2,
    41, 52, 31, 37, 47, 55,
    30, 40, 51, 45, 33, 48,
    44, 49, 39, 56, 34, 53,
    46, 42, 50, 36, 29, 32,
)

SHIFT_SCHEDULE: Tuple[int, ...] = (1, 1, 2, 2, 2, 2, 2, 2, 1, 2, 2, 2, 2, 2, 2, 1)


# ============================================================================
# DES S-BOXES (6-bit input, 4-bit output)
# ============================================================================

S_BOXES: Tuple[Tuple[Tuple[int, ...], ...], ...] = (
    (  # S1
        (14, 4, 13, 1, 2, 15, 11, 8, 3, 10, 6, 12, 5, 9, 0, 7),
        (0, 15, 7, 4, 14, 2, 13, 1, 10, 6, 12, 11, 9, 5, 3, 8),
        (4, 1, 14, 8, 13, 6, 2, 11, 15, 12, 9, 7, 3, 10, 5, 0),
        (15, 12, 8, 2, 4, 9, 1, 7, 5, 11, 3, 14, 10, 0, 6, 13),
    ),
    (  # S2
        (15, 1, 8, 14, 6, 11, 3, 4, 9, 7, 2, 13, 12, 0, 5, 10),
        (3, 13, 4, 7, 15, 2, 8, 14, 12, 0, 1, 10, 6, 9, 11, 5),
        (0, 14, 7, 11, 10, 4, 13, 1, 5, 8, 12, 6, 9, 3, 2, 15),
        (13, 8, 10, 1, 3, 15, 4, 2, 11, 6, 7, 12, 0, 5, 14, 9),
    ),
    (  # S3
        (10, 0, 9, 14, 6, 3, 15, 5, 1, 13, 12, 7, 11, 4, 2, 8),
        (13, 7, 0, 9, 3, 4, 6, 10, 2, 8, 5, 14, 12, 11, 15, 1),
        (13, 6, 4, 9, 8, 15, 3, 0, 11, 1, 2, 12, 5, 10, 14, 7),
        (1, 10, 13, 0, 6, 9, 8, 7, 4, 15, 14, 3, 11, 5, 2, 12),
    ),
    (  # S4
        (7, 13, 14, 3, 0, 6, 9, 10, 1, 2, 8, 5, 11, 12, 4, 15),
        (13, 8, 11, 5, 6, 15, 0, 3, 4, 7, 2, 12, 1, 10, 14, 9),
        (10, 6, 9, 0, 12, 11, 7, 13, 15, 1, 3, 14, 5, 2, 8, 4),
        (3, 15, 0, 6, 10, 1, 13, 8, 9, 4, 5, 11, 12, 7, 2, 14),
    ),
    (  # S5
        (2, 12, 4, 1, 7, 10, 11, 6, 8, 5, 3, 15, 13, 0, 14, 9),
        (14, 11, 2, 12, 4, 7, 13, 1, 5, 0, 15, 10, 3, 9, 8, 6),
        (4, 2, 1, 11, 10, 13, 7, 8, 15, 9, 12, 5, 6, 3, 0, 14),
        (11, 8, 12, 7, 1, 14, 2, 13, 6, 15, 0, 9, 10, 4, 5, 3),
    ),
    (  # S6
        (12, 1, 10, 15, 9, 2, 6, 8, 0, 13, 3, 4, 14, 7, 5, 11),
        (10, 15, 4, 2, 7, 12, 9, 5, 6, 1, 13, 14, 0, 11, 3, 8),
        (9, 14, 15, 5, 2, 8, 12, 3, 7, 0, 4, 10, 1, 13, 11, 6),
        (4, 3, 2, 12, 9, 5, 15, 10, 11, 14, 1, 7, 6, 0, 8, 13),
    ),
    (  # S7
        (4, 11, 2, 14, 15, 0, 8, 13, 3, 12, 9, 7, 5, 10, 6, 1),
        (13, 0, 11, 7, 4, 9, 1, 10, 14, 3, 5, 12, 2, 15, 8, 6),
        (1, 4, 11, 13, 12, 3, 7, 14, 10, 15, 6, 8, 0, 5, 9, 2),
        (6, 11, 13, 8, 1, 4, 10, 7, 9, 5, 0, 15, 14, 2, 3, 12),
    ),
    (  # S8
        (13, 2, 8, 4, 6, 15, 11, 1, 10, 9, 3, 14, 5, 0, 12, 7),
        (1, 15, 13, 8, 10, 3, 7, 4, 12, 5, 6, 11, 0, 14, 9, 2),
        (7, 11, 4, 1, 9, 12, 14, 2, 0, 6, 10, 13, 15, 3, 5, 8),
        (2, 1, 14, 7, 4, 10, 8, 13, 15, 12, 9, 0, 3, 5, 6, 11),
    ),
)

S_BOX_LABELS: Tuple[str, ...] = ("S1", "S2", "S3", "S4", "S5", "S6", "S7", "S8")


# ============================================================================
# PRIMITIVES
# ============================================================================

_HEX_DIGITS = "0123456789abcdef"
_BLOCK_HEX_RE = re.compile(r"^[0-9a-fA-F]{16}$")


def require_block_hex(value: str, what: str = "Block") -> str:
    """Accept exactly 16 hex characters (one 64-bit block or key), lower-cased."""
    if not isinstance(value, str) or not _BLOCK_HEX_RE.match(value):
        raise InputFormatError(f"{what} must be exactly 16 hex characters, got {value!r}")
    return value.lower()


def permute(bits: Sequence[int], table: Sequence[int]) -> Bits:
    """Select input bits by 1-indexed table positions."""
    return [bits[i - 1] for i in table]


def left_shift(bits: Sequence[int], n: int) -> Bits:
    """Rotate left by n mod len(bits)."""
    if not bits:
        return []
    n %= len(bits)
    return list(bits[n:]) + list(bits[:n])


def xor_bits(a: Sequence[int], b: Sequence[int]) -> Bits:
    if len(a) != len(b):
        raise ValueError("xor_bits length mismatch")
    return [(x ^ y) & 1 for x, y in zip(a, b)]


def chunk_bits(bits: Sequence[int], size: int) -> List[Bits]:
    return [list(bits[i:i + size]) for i in range(0, len(bits), size)]


def bits_to_int(bits: Sequence[int]) -> int:
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return value


def int_to_bits(value: int, width: int) -> Bits:
    return [(value >> (width - 1 - i)) & 1 for i in range(width)]


def bits_to_hex(bits: Sequence[int]) -> str:
    """MSB-first, one hex digit per 4-bit group (short last group is left as-is)."""
    return "".join(_HEX_DIGITS[bits_to_int(chunk)] for chunk in chunk_bits(bits, 4))


def hex_to_bits(hex_str: str, width: int | None = None) -> Bits:
    """Convert hex to bits, MSB first.

    With ``width`` the value is left-padded with zeros and only the low
    ``width`` bits are kept.
    """
    digits = hex_str.strip().lower()
    if any(ch not in _HEX_DIGITS for ch in digits):
        raise InputFormatError(f"Not a hex string: {hex_str!r}")
    if width is None:
        width = len(digits) * 4
    nibbles = -(-width // 4)
    digits = digits.rjust(nibbles, "0")
    bits: Bits = []
    for ch in digits:
        bits.extend(int_to_bits(int(ch, 16), 4))
    return bits[len(bits) - width:]
