"""Avalanche effect: how far a single flipped plaintext bit spreads.

Compares two round traces round by round, runs a single random bit-flip
demo, and aggregates differing-bit counts over many random trials.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from deslab.cipher.des import CipherResult, RoundTrace, des_encrypt
from deslab.cipher.tables import bits_to_hex, hex_to_bits

BLOCK_BITS = 64


@dataclass(frozen=True)
class AvalancheRoundDiff:
    round: int
    differing_bits: int
    percentage: float


@dataclass
class AvalancheDemo:
    """One bit-flip experiment on a fixed plaintext/key."""
    bit_index: int              # 0 = most significant bit
    mutated_input: str
    base: CipherResult
    mutated: CipherResult
    round_diffs: List[AvalancheRoundDiff] = field(default_factory=list)
    ciphertext_diff: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bit_index": self.bit_index,
            "mutated_input": self.mutated_input,
            "base_output": self.base.output_hex,
            "mutated_output": self.mutated.output_hex,
            "round_diffs": [asdict(d) for d in self.round_diffs],
            "ciphertext_diff": self.ciphertext_diff,
        }


@dataclass
class AvalancheStats:
    """Differing output bits over many random single-bit flips."""
    key_hex: str
    num_trials: int
    per_trial_bits: List[int] = field(default_factory=list)
    mean_bits: float = 0.0
    std_bits: float = 0.0
    min_bits: int = 0
    max_bits: int = 0

    @property
    def mean_fraction(self) -> float:
        return self.mean_bits / BLOCK_BITS

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["mean_fraction"] = self.mean_fraction
        return d

    def summary(self) -> str:
        return (
            f"Avalanche over {self.num_trials} flips: "
            f"mean={self.mean_bits:.2f}/64 bits ({self.mean_fraction:.4f}), "
            f"std={self.std_bits:.2f}, min={self.min_bits}, max={self.max_bits}"
        )


def hamming_distance_hex(a_hex: str, b_hex: str, width: int = BLOCK_BITS) -> int:
    a = np.array(hex_to_bits(a_hex, width), dtype=np.uint8)
    b = np.array(hex_to_bits(b_hex, width), dtype=np.uint8)
    return int(np.count_nonzero(a != b))


def flip_bit(block_hex: str, bit_index: int) -> str:
    """Flip one bit of a 64-bit block; index 0 is the most significant bit."""
    if not 0 <= bit_index < BLOCK_BITS:
        raise IndexError("bit_index out of range")
    bits = hex_to_bits(block_hex, BLOCK_BITS)
    bits[bit_index] ^= 1
    return bits_to_hex(bits)


def compare_round_traces(
    base: Sequence[RoundTrace],
    mutated: Sequence[RoundTrace],
) -> List[AvalancheRoundDiff]:
    """Count differing bits of each round's 64-bit output.

    Only rounds present in both traces (at most 16) are compared.
    """
    diffs: List[AvalancheRoundDiff] = []
    for i in range(min(len(base), len(mutated), 16)):
        diff = hamming_distance_hex(base[i].round_output, mutated[i].round_output)
        diffs.append(AvalancheRoundDiff(
            round=i + 1,
            differing_bits=diff,
            percentage=round(diff / BLOCK_BITS * 100, 2),
        ))
    return diffs


def run_avalanche_demo(
    plaintext_hex: str,
    key_hex: str,
    bit_index: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> AvalancheDemo:
    """Encrypt a block and a one-bit-flipped copy and compare them.

    When ``bit_index`` is not given it is drawn from ``rng``.
    """
    if bit_index is None:
        bit_index = (rng or random.Random()).randrange(BLOCK_BITS)

    base = des_encrypt(plaintext_hex, key_hex)
    mutated_input = flip_bit(base.input_hex, bit_index)
    mutated = des_encrypt(mutated_input, key_hex)

    return AvalancheDemo(
        bit_index=bit_index,
        mutated_input=mutated_input,
        base=base,
        mutated=mutated,
        round_diffs=compare_round_traces(base.rounds, mutated.rounds),
        ciphertext_diff=hamming_distance_hex(base.output_hex, mutated.output_hex),
    )


def measure_avalanche(
    key_hex: str,
    *,
    trials: int = 200,
    seed: int = 1337,
) -> AvalancheStats:
    """Average differing ciphertext bits over random plaintexts and random flips."""
    rng = random.Random(seed)
    counts: List[int] = []
    for _ in range(trials):
        pt = f"{rng.getrandbits(BLOCK_BITS):016x}"
        demo = run_avalanche_demo(pt, key_hex, rng=rng)
        counts.append(demo.ciphertext_diff)

    arr = np.array(counts, dtype=float)
    return AvalancheStats(
        key_hex=key_hex.lower(),
        num_trials=trials,
        per_trial_bits=counts,
        mean_bits=round(float(arr.mean()), 4) if counts else 0.0,
        std_bits=round(float(arr.std()), 4) if counts else 0.0,
        min_bits=int(arr.min()) if counts else 0,
        max_bits=int(arr.max()) if counts else 0,
    )
