"""The DES round function F and the per-round Feistel update.

Every stage of F is returned so callers can show or compare it.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .tables import (
    E_TABLE,
    P_TABLE,
    S_BOXES,
    Bits,
    bits_to_int,
    chunk_bits,
    int_to_bits,
    permute,
    xor_bits,
)


@dataclass(frozen=True)
class FOutput:
    expanded: Bits      # E(R), 48 bits
    xor_result: Bits    # E(R) ^ K, 48 bits
    sbox_output: Bits   # 32 bits
    pbox_output: Bits   # P(S(...)), 32 bits


@dataclass(frozen=True)
class RoundOutput:
    left: Bits
    right: Bits
    f: FOutput


def expansion_permutation(bits: Sequence[int]) -> Bits:
    return permute(bits, E_TABLE)


def p_box_permutation(bits: Sequence[int]) -> Bits:
    return permute(bits, P_TABLE)


def s_box_substitution(bits: Sequence[int]) -> Bits:
    """Eight 6-bit groups -> eight 4-bit S-box outputs.

    Row is bits {0, 5} of the group, column is bits {1..4}.
    """
    out: Bits = []
    for idx, chunk in enumerate(chunk_bits(bits, 6)):
        row = (chunk[0] << 1) | chunk[5]
        col = bits_to_int(chunk[1:5])
        out.extend(int_to_bits(S_BOXES[idx][row][col], 4))
    return out


def f_function(right: Sequence[int], sub_key: Sequence[int]) -> FOutput:
    expanded = expansion_permutation(right)
    xor_result = xor_bits(expanded, sub_key)
    sbox_output = s_box_substitution(xor_result)
    pbox_output = p_box_permutation(sbox_output)
    return FOutput(
        expanded=expanded,
        xor_result=xor_result,
        sbox_output=sbox_output,
        pbox_output=pbox_output,
    )


def feistel_round(left: Sequence[int], right: Sequence[int], sub_key: Sequence[int]) -> RoundOutput:
    """L' = R, R' = L ^ F(R, K)."""
    f = f_function(right, sub_key)
    return RoundOutput(left=list(right), right=xor_bits(left, f.pbox_output), f=f)
