"""Conversions at the byte / text boundary of the lab.

Hex, Base64, UTF-8, binary strings, text keys and the small file envelope
used when a whole file is encrypted. Malformed input raises DecodeError;
it is never silently repaired except by the explicit `sanitize_*` helpers.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import base64
import binascii
import re
from typing import Tuple

from deslab.errors import DecodeError, InputFormatError

_NON_HEX_RE = re.compile(r"[^0-9a-fA-F]")
_NON_BINARY_RE = re.compile(r"[^01]")


# ---------------------------------------------------------------------------
# Sanitising (caller-side normalisation)
# ---------------------------------------------------------------------------

def sanitize_hex(value: str) -> str:
    """Strip every non-hex character and lower-case the rest."""
    return _NON_HEX_RE.sub("", value).lower()


def sanitize_binary(value: str) -> str:
    return _NON_BINARY_RE.sub("", value)


def normalize_block_hex(value: str) -> str:
    """Force free-form input into a 16-char block: strip, right-pad with 0, truncate."""
    return sanitize_hex(value).ljust(16, "0")[:16]


# ---------------------------------------------------------------------------
# Hex / bytes / Base64
# ---------------------------------------------------------------------------

def bytes_to_hex(data: bytes) -> str:
    return data.hex()


def hex_to_bytes(value: str) -> bytes:
    s = value.strip()
    if _NON_HEX_RE.search(s):
        raise DecodeError("Invalid hex input.")
    if len(s) % 2 != 0:
        raise DecodeError("Hex input must have an even length.")
    try:
        return bytes.fromhex(s)
    except ValueError as exc:
        raise DecodeError("Invalid hex input.") from exc


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_to_bytes(value: str) -> bytes:
    try:
        return base64.b64decode(value.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Invalid Base64 input.") from exc


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def text_to_bytes(value: str) -> bytes:
    return value.encode("utf-8")


def bytes_to_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError("Payload is not valid UTF-8 text.") from exc


def ascii_to_hex(value: str) -> str:
    """Space-pad / truncate to 8 characters and hex-encode one block."""
    block = value.ljust(8, " ")[:8]
    if any(ord(ch) > 0xFF for ch in block):
        raise InputFormatError("Block text must be single-byte characters.")
    return "".join(f"{ord(ch):02x}" for ch in block)


def hex_to_ascii(value: str) -> str:
    """Inverse of ascii_to_hex; trailing padding spaces are dropped."""
    data = hex_to_bytes(value)
    return "".join(chr(b) for b in data).rstrip()


def text_key_to_key_hex(value: str) -> str:
    """UTF-8 encode a free-form key and fit it to 8 bytes (truncate / zero-pad)."""
    raw = text_to_bytes(value)[:8]
    return raw.ljust(8, b"\x00").hex()


# ---------------------------------------------------------------------------
# Binary strings
# ---------------------------------------------------------------------------

def binary_string_to_hex(binary: str) -> str:
    """'0101...' -> hex; a trailing partial nibble is right-padded with 0."""
    if not binary:
        return ""
    if _NON_BINARY_RE.search(binary):
        raise InputFormatError("Binary input may only contain 0 and 1.")
    width = -(-len(binary) // 4) * 4
    padded = binary.ljust(width, "0")
    return "".join(f"{int(padded[i:i + 4], 2):x}" for i in range(0, width, 4))


def hex_to_binary_string(value: str) -> str:
    if _NON_HEX_RE.search(value):
        raise InputFormatError(f"Not a hex string: {value!r}")
    return "".join(f"{int(ch, 16):04b}" for ch in value)


# ---------------------------------------------------------------------------
# File envelope: 2-byte big-endian name length + UTF-8 name + data
# ---------------------------------------------------------------------------

DEFAULT_FILENAME = "decrypted.bin"


def wrap_file_envelope(name: str, data: bytes) -> bytes:
    name_bytes = text_to_bytes(name or "file")
    if len(name_bytes) > 0xFFFF:
        raise InputFormatError("File name is too long for the envelope header.")
    return len(name_bytes).to_bytes(2, "big") + name_bytes + data


def unwrap_file_envelope(payload: bytes) -> Tuple[str, bytes]:
    if len(payload) < 2:
        return DEFAULT_FILENAME, payload
    name_len = int.from_bytes(payload[:2], "big")
    name_end = min(len(payload), 2 + name_len)
    name = payload[2:name_end].decode("utf-8", errors="replace") or DEFAULT_FILENAME
    return name, payload[name_end:]
