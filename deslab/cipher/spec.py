from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


CipherDirection = Literal["encrypt", "decrypt"]
DesMode = Literal["ECB", "CBC", "CFB", "OFB", "CTR"]

MODES: Tuple[str, ...] = ("ECB", "CBC", "CFB", "OFB", "CTR")


class VariantParameters(BaseModel):
    """Structural mutations applied to one run of the single-block cipher.

    The default instance is plain DES. Each field models one plausible
    implementation mistake; the diagnostic catalog combines them.
    """

    model_config = ConfigDict(frozen=True)

    skip_ip: bool = Field(default=False, description="Feed the raw block into round 1")
    skip_fp: bool = Field(default=False, description="Emit the pre-output block without FP")
    skip_final_swap: bool = Field(default=False, description="Emit L||R instead of R||L before FP")
    swap_after_rounds: Tuple[int, ...] = Field(
        default=(),
        description="1-based round indices after which the halves are swapped again",
    )
    round_limit: Optional[int] = Field(default=None, ge=0, le=16)
    reverse_subkeys: bool = Field(default=False, description="Apply K16..K1 instead of K1..K16")
    shift_schedule: Optional[Tuple[int, ...]] = Field(
        default=None,
        description="Alternate 16-entry key-rotation schedule",
    )

    @field_validator("swap_after_rounds")
    @classmethod
    def _round_indices(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        for r in v:
            if not 1 <= r <= 16:
                raise ValueError(f"swap_after_rounds entries must be in 1..16, got {r}")
        return v

    @field_validator("shift_schedule")
    @classmethod
    def _schedule_shape(cls, v: Optional[Tuple[int, ...]]) -> Optional[Tuple[int, ...]]:
        if v is None:
            return v
        if len(v) != 16:
            raise ValueError("shift_schedule must have 16 entries")
        if any(s < 0 for s in v):
            raise ValueError("shift_schedule entries must be non-negative")
        return v

    @property
    def is_standard(self) -> bool:
        return self == VariantParameters()
