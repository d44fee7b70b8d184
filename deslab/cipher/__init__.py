"""DES core: tables, key schedule, round function, block cipher and modes.

Research / education only. Do NOT use in production.
"""

from .des import CipherResult, RoundTrace, des_decrypt, des_encrypt, run_des
from .key_schedule import KeySchedule, KeyScheduleRound, derive_key_schedule
from .modes import ModeResult, decrypt_bytes, encrypt_bytes
from .spec import MODES, CipherDirection, DesMode, VariantParameters

__all__ = [
    "CipherResult",
    "RoundTrace",
    "des_encrypt",
    "des_decrypt",
    "run_des",
    "KeySchedule",
    "KeyScheduleRound",
    "derive_key_schedule",
    "ModeResult",
    "encrypt_bytes",
    "decrypt_bytes",
    "MODES",
    "CipherDirection",
    "DesMode",
    "VariantParameters",
]
