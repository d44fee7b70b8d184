"""DES key schedule: PC-1, per-round C/D rotation, PC-2.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .tables import (
    PC1_TABLE,
    PC2_TABLE,
    SHIFT_SCHEDULE,
    bits_to_hex,
    hex_to_bits,
    left_shift,
    permute,
    require_block_hex,
)


@dataclass(frozen=True)
class KeyScheduleRound:
    """One round of the schedule: rotation applied and resulting subkey."""
    round: int
    shifts: int
    c: str          # rotated 28-bit C half (7 hex chars)
    d: str          # rotated 28-bit D half (7 hex chars)
    sub_key: str    # 48-bit subkey (12 hex chars)


@dataclass(frozen=True)
class KeySchedule:
    parity_dropped_key: str                 # 56 bits (14 hex chars)
    rounds: Tuple[KeyScheduleRound, ...]

    @property
    def sub_keys(self) -> List[str]:
        """Subkeys in generation (encryption) order, K1..K16."""
        return [r.sub_key for r in self.rounds]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def derive_key_schedule(
    key_hex: str,
    shift_schedule: Optional[Sequence[int]] = None,
) -> KeySchedule:
    """Derive the parity-dropped key and the round subkeys from a 64-bit key.

    Args:
        key_hex: 16 hex characters.
        shift_schedule: Per-round left-rotation amounts; defaults to the
            standard DES schedule. One subkey is produced per entry.

    Returns:
        KeySchedule with records in generation order (round 1 first).

    Raises:
        InputFormatError: key_hex is not exactly 16 hex characters.
    """
    key_hex = require_block_hex(key_hex, "Key")
    schedule = SHIFT_SCHEDULE if shift_schedule is None else tuple(shift_schedule)

    key_bits = hex_to_bits(key_hex, 64)
    parity_dropped = permute(key_bits, PC1_TABLE)
    c, d = parity_dropped[:28], parity_dropped[28:]

    rounds: List[KeyScheduleRound] = []
    for idx, shift in enumerate(schedule):
        c = left_shift(c, shift)
        d = left_shift(d, shift)
        sub_key = permute(c + d, PC2_TABLE)
        rounds.append(KeyScheduleRound(
            round=idx + 1,
            shifts=shift,
            c=bits_to_hex(c),
            d=bits_to_hex(d),
            sub_key=bits_to_hex(sub_key),
        ))

    return KeySchedule(
        parity_dropped_key=bits_to_hex(parity_dropped),
        rounds=tuple(rounds),
    )
