"""Typed failures raised at the cipher, mode and encoding boundaries.

All errors derive from ValueError so callers that only care about
"bad input" can catch them broadly.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations


class DESLabError(ValueError):
    """Base class for every deslab failure."""


class InputFormatError(DESLabError):
    """Raw input reached the cipher boundary with bad characters or width."""


class LengthError(DESLabError):
    """A mode payload is not a whole number of 8-byte blocks."""


class MissingIvError(DESLabError):
    """A non-ECB ciphertext is too short to carry an IV and one block."""


class DecodeError(DESLabError):
    """Malformed hex / Base64 / UTF-8 at the encoding boundary."""


class PaddingError(DecodeError):
    """Trailing padding bytes are inconsistent (strict unpadding only)."""
