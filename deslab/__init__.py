"""deslab: a bit-exact DES teaching core.

Single-block DES with full execution traces, classical modes of operation,
and a diagnostic engine that recognises common implementation mistakes in
student answers.

Research / education only. Do NOT use in production.
"""

from .errors import (
    DecodeError,
    DESLabError,
    InputFormatError,
    LengthError,
    MissingIvError,
    PaddingError,
)
from .cipher import (
    CipherResult,
    KeySchedule,
    ModeResult,
    VariantParameters,
    decrypt_bytes,
    derive_key_schedule,
    des_decrypt,
    des_encrypt,
    encrypt_bytes,
    run_des,
)
from .evaluation import DiagnosisResult, compare_round_traces, diagnose

__version__ = "0.1.0"

__all__ = [
    "DESLabError",
    "InputFormatError",
    "LengthError",
    "MissingIvError",
    "DecodeError",
    "PaddingError",
    "CipherResult",
    "KeySchedule",
    "ModeResult",
    "VariantParameters",
    "des_encrypt",
    "des_decrypt",
    "run_des",
    "derive_key_schedule",
    "encrypt_bytes",
    "decrypt_bytes",
    "diagnose",
    "DiagnosisResult",
    "compare_round_traces",
]
