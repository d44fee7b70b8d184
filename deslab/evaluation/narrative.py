"""Plain-language helpers for presenting a cipher run.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from deslab.cipher.des import CipherResult

_REPEATED_PAIR_RE = re.compile(r"(..).*\1", re.IGNORECASE)
_ZERO_OR_F_RE = re.compile(r"[0f]", re.IGNORECASE)


@dataclass(frozen=True)
class KeyStrength:
    label: str      # "Strong" | "Moderate" | "Weak"
    score: int


def evaluate_key_strength(key_hex: str) -> KeyStrength:
    """Heuristic only: rewards distinct digits, penalises repeats and 0/f runs."""
    unique = len(set(key_hex))
    repeating = 1 if _REPEATED_PAIR_RE.search(key_hex) else 0
    score = max(0, unique - repeating - len(_ZERO_OR_F_RE.findall(key_hex)))
    if score >= 10:
        return KeyStrength("Strong", score)
    if score >= 6:
        return KeyStrength("Moderate", score)
    return KeyStrength("Weak", score)


def execution_narrative(result: CipherResult) -> List[str]:
    messages = [
        "Applied Initial Permutation to diffuse the plaintext bits.",
        f"Entering {len(result.rounds)} Feistel rounds where subkeys expand confusion.",
    ]
    for r in result.rounds:
        messages.append(
            f"Round {r.round}: Expanded R{r.round - 1}, XORed with K{r.round}, "
            f"passed through S-boxes, and permuted."
        )
    messages.append("Swapped halves, applied Final Permutation, and produced the 64-bit output block.")
    return messages
