"""Modes of operation (ECB, CBC, CFB, OFB, CTR) over the single-block cipher.

Payloads are padded to whole 8-byte blocks (value = pad length, a full
block of 8s when already aligned). Every non-ECB mode prepends its 8-byte
IV / nonce to the ciphertext and expects it back in front on decryption.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from deslab.errors import InputFormatError, LengthError, MissingIvError, PaddingError
from .des import CipherResult, decrypt_block, encrypt_block
from .spec import MODES, DesMode

logger = logging.getLogger(__name__)

BLOCK_SIZE = 8


@dataclass(frozen=True)
class ModeResult:
    """Output of a mode operation plus the trace of its first block."""
    mode: DesMode
    data: bytes                     # ciphertext-with-IV or recovered plaintext
    first_block: CipherResult
    iv: Optional[bytes] = None

    @property
    def block_count(self) -> int:
        return len(self.data) // BLOCK_SIZE


# ---------------------------------------------------------------------------
# Block helpers
# ---------------------------------------------------------------------------

def pad_block_bytes(data: bytes) -> bytes:
    pad = BLOCK_SIZE - (len(data) % BLOCK_SIZE)
    return data + bytes([pad]) * pad


def unpad_block_bytes(data: bytes, *, strict: bool = False) -> bytes:
    """Strip trailing padding.

    Inconsistent padding returns the payload unchanged, or raises
    PaddingError when ``strict`` is set.
    """
    if not data:
        if strict:
            raise PaddingError("Cannot unpad an empty payload.")
        return data
    pad = data[-1]
    valid = 1 <= pad <= BLOCK_SIZE and pad <= len(data) and all(b == pad for b in data[-pad:])
    if not valid:
        if strict:
            raise PaddingError(f"Inconsistent padding (last byte {pad:#04x}).")
        logger.warning("Inconsistent padding (last byte %#04x); returning payload unpadded.", pad)
        return data
    return data[:-pad]


def xor_blocks(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError("xor_blocks length mismatch")
    return bytes(x ^ y for x, y in zip(a, b))


def increment_counter(counter: bytes) -> bytes:
    """Big-endian +1 with per-byte carry; ff..ff wraps to 00..00."""
    out = bytearray(counter)
    for i in range(len(out) - 1, -1, -1):
        out[i] = (out[i] + 1) & 0xFF
        if out[i] != 0:
            break
    return bytes(out)


def generate_iv() -> bytes:
    return os.urandom(BLOCK_SIZE)


def _blocks(data: bytes) -> List[bytes]:
    return [data[i:i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]


def _check_mode(mode: str) -> DesMode:
    m = mode.upper()
    if m not in MODES:
        raise InputFormatError(f"Unsupported mode: {mode}")
    return m


# ---------------------------------------------------------------------------
# Encryption
# ---------------------------------------------------------------------------

def encrypt_bytes(
    plaintext: bytes,
    key_hex: str,
    mode: DesMode,
    iv: Optional[bytes] = None,
    *,
    pad: bool = True,
) -> ModeResult:
    """Encrypt an arbitrary-length payload.

    Args:
        plaintext: Raw bytes (any length when ``pad`` is set).
        key_hex: 16 hex characters.
        mode: ECB, CBC, CFB, OFB or CTR (case-insensitive).
        iv: 8-byte IV / initial counter; random when omitted. Ignored by ECB.
        pad: Pad to whole blocks first. Without it the payload must already
            be block-aligned.

    Returns:
        ModeResult whose ``data`` is IV || ciphertext (ciphertext only for ECB).
    """
    mode = _check_mode(mode)
    if pad:
        plaintext = pad_block_bytes(plaintext)
    elif not plaintext or len(plaintext) % BLOCK_SIZE != 0:
        raise LengthError("Unpadded plaintext must be a non-empty multiple of 8 bytes.")

    blocks: List[bytes] = []
    first: Optional[CipherResult] = None

    if mode == "ECB":
        for block in _blocks(plaintext):
            out, result = encrypt_block(block, key_hex)
            first = first or result
            blocks.append(out)
        logger.debug("ECB encrypted %d block(s)", len(blocks))
        return ModeResult(mode=mode, data=b"".join(blocks), first_block=first)

    if iv is None:
        iv = generate_iv()
    elif len(iv) != BLOCK_SIZE:
        raise InputFormatError("IV must be 8 bytes.")

    state = iv
    for block in _blocks(plaintext):
        if mode == "CBC":
            out, result = encrypt_block(xor_blocks(block, state), key_hex)
            state = out
        else:
            keystream, result = encrypt_block(state, key_hex)
            out = xor_blocks(block, keystream)
            if mode == "CFB":
                state = out
            elif mode == "OFB":
                state = keystream
            else:  # CTR
                state = increment_counter(state)
        first = first or result
        blocks.append(out)

    logger.debug("%s encrypted %d block(s)", mode, len(blocks))
    return ModeResult(mode=mode, data=iv + b"".join(blocks), first_block=first, iv=iv)


# ---------------------------------------------------------------------------
# Decryption
# ---------------------------------------------------------------------------

def decrypt_bytes(
    ciphertext: bytes,
    key_hex: str,
    mode: DesMode,
    *,
    unpad: bool = True,
    strict_padding: bool = False,
) -> ModeResult:
    """Invert `encrypt_bytes`.

    Non-ECB input must start with the 8-byte IV / nonce. Raises
    MissingIvError when there is no room for IV plus one block and
    LengthError when the body is not block-aligned.
    """
    mode = _check_mode(mode)

    if mode == "ECB":
        iv = None
        body = ciphertext
        if not body:
            raise LengthError("Ciphertext must contain at least one 8-byte block.")
    else:
        if len(ciphertext) < 2 * BLOCK_SIZE:
            raise MissingIvError("Ciphertext must include an 8-byte IV/nonce.")
        iv, body = ciphertext[:BLOCK_SIZE], ciphertext[BLOCK_SIZE:]

    if len(body) % BLOCK_SIZE != 0:
        raise LengthError(f"Ciphertext length {len(body)} is not a multiple of 8 bytes.")

    blocks: List[bytes] = []
    first: Optional[CipherResult] = None
    state = iv

    for block in _blocks(body):
        if mode == "ECB":
            out, result = decrypt_block(block, key_hex)
        elif mode == "CBC":
            decrypted, result = decrypt_block(block, key_hex)
            out = xor_blocks(decrypted, state)
            state = block
        else:
            keystream, result = encrypt_block(state, key_hex)
            out = xor_blocks(block, keystream)
            if mode == "CFB":
                state = block
            elif mode == "OFB":
                state = keystream
            else:  # CTR
                state = increment_counter(state)
        first = first or result
        blocks.append(out)

    plaintext = b"".join(blocks)
    if unpad:
        plaintext = unpad_block_bytes(plaintext, strict=strict_padding)

    logger.debug("%s decrypted %d block(s)", mode, len(blocks))
    return ModeResult(mode=mode, data=plaintext, first_block=first, iv=iv)
