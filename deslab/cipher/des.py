"""Single-block DES with a full execution trace.

One generic path (`run_des`) serves plain encryption, decryption and the
mutated variants used by the diagnostic engine.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from deslab.errors import InputFormatError
from .feistel import feistel_round
from .key_schedule import KeySchedule, derive_key_schedule
from .spec import CipherDirection, VariantParameters
from .tables import FP_TABLE, IP_TABLE, bits_to_hex, hex_to_bits, permute, require_block_hex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundTrace:
    """Every intermediate value of one executed round (hex strings)."""
    round: int
    left: str           # L before the round
    right: str          # R before the round
    sub_key: str
    expanded: str
    xor_with_key: str
    sbox_output: str
    pbox_output: str
    round_output: str   # 64-bit L||R after the round


@dataclass(frozen=True)
class CipherResult:
    result_id: str
    mode: CipherDirection
    input_hex: str
    output_hex: str
    ip_output: str
    fp_output: str
    rounds: Tuple[RoundTrace, ...]
    sub_keys: Tuple[str, ...]       # in the order actually applied
    key_schedule: KeySchedule

    @property
    def output_bytes(self) -> bytes:
        return bytes.fromhex(self.output_hex)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def run_des(
    block_hex: str,
    key_hex: str,
    mode: CipherDirection = "encrypt",
    variant: Optional[VariantParameters] = None,
) -> CipherResult:
    """Run one 64-bit block through DES, optionally with structural mutations.

    Args:
        block_hex: 16 hex characters.
        key_hex: 16 hex characters (parity bits included).
        mode: "encrypt" applies K1..K16, "decrypt" applies K16..K1.
        variant: Mutations to apply; None means standard DES.

    Returns:
        CipherResult with the output block and a trace of every round.
    """
    block_hex = require_block_hex(block_hex, "Block")
    key_hex = require_block_hex(key_hex, "Key")
    if mode not in ("encrypt", "decrypt"):
        raise InputFormatError(f"mode must be 'encrypt' or 'decrypt', got {mode!r}")
    v = variant or VariantParameters()

    block = hex_to_bits(block_hex, 64)
    ip = block if v.skip_ip else permute(block, IP_TABLE)

    key_schedule = derive_key_schedule(key_hex, v.shift_schedule)
    sequence: List[str] = key_schedule.sub_keys
    if mode == "decrypt":
        sequence.reverse()
    if v.reverse_subkeys:
        sequence.reverse()
    if v.round_limit is not None:
        sequence = sequence[:v.round_limit]

    left, right = ip[:32], ip[32:]
    traces: List[RoundTrace] = []

    for idx, sub_key_hex in enumerate(sequence):
        out = feistel_round(left, right, hex_to_bits(sub_key_hex, 48))
        next_left, next_right = out.left, out.right
        if idx + 1 in v.swap_after_rounds:
            next_left, next_right = next_right, next_left
        traces.append(RoundTrace(
            round=idx + 1,
            left=bits_to_hex(left),
            right=bits_to_hex(right),
            sub_key=sub_key_hex,
            expanded=bits_to_hex(out.f.expanded),
            xor_with_key=bits_to_hex(out.f.xor_result),
            sbox_output=bits_to_hex(out.f.sbox_output),
            pbox_output=bits_to_hex(out.f.pbox_output),
            round_output=bits_to_hex(next_left + next_right),
        ))
        left, right = next_left, next_right

    pre_output = left + right if v.skip_final_swap else right + left
    fp = pre_output if v.skip_fp else permute(pre_output, FP_TABLE)
    output_hex = bits_to_hex(fp)

    if not v.is_standard:
        logger.debug("Variant run %s -> %s (%s)", block_hex, output_hex, v)

    return CipherResult(
        result_id=uuid.uuid4().hex,
        mode=mode,
        input_hex=block_hex,
        output_hex=output_hex,
        ip_output=bits_to_hex(ip),
        fp_output=output_hex,
        rounds=tuple(traces),
        sub_keys=tuple(sequence),
        key_schedule=key_schedule,
    )


def des_encrypt(plaintext_hex: str, key_hex: str) -> CipherResult:
    return run_des(plaintext_hex, key_hex, "encrypt")


def des_decrypt(ciphertext_hex: str, key_hex: str) -> CipherResult:
    return run_des(ciphertext_hex, key_hex, "decrypt")


def encrypt_block(block: bytes, key_hex: str) -> Tuple[bytes, CipherResult]:
    """Byte-level convenience wrapper used by the mode layer."""
    result = des_encrypt(block.hex(), key_hex)
    return result.output_bytes, result


def decrypt_block(block: bytes, key_hex: str) -> Tuple[bytes, CipherResult]:
    result = des_decrypt(block.hex(), key_hex)
    return result.output_bytes, result
