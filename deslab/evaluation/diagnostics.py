"""Mistake-pattern diagnosis for student DES submissions.

Replays a fixed catalog of buggy DES variants on the same plaintext/key and
reports the first variant whose output equals the wrong answer, awarding
that pattern's partial credit.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from deslab.cipher.des import des_encrypt, run_des
from deslab.cipher.encoding import normalize_block_hex
from deslab.cipher.spec import VariantParameters

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MistakePattern:
    code: str
    label: str
    variant: VariantParameters
    description: str
    credit: float


# Order matters: the first matching pattern wins.
MISTAKE_PATTERNS: Tuple[MistakePattern, ...] = (
    MistakePattern(
        code="skip-ip-fp",
        label="Skipped IP/FP",
        variant=VariantParameters(skip_ip=True, skip_fp=True),
        description="Student output matches a run with no initial/final permutation.",
        credit=0.6,
    ),
    MistakePattern(
        code="skip-ip",
        label="Skipped IP",
        variant=VariantParameters(skip_ip=True),
        description="Initial Permutation (IP) was skipped but FP was still applied.",
        credit=0.5,
    ),
    MistakePattern(
        code="no-final-swap",
        label="Forgot final swap",
        variant=VariantParameters(skip_final_swap=True),
        description="Halves were not swapped before the final permutation.",
        credit=0.6,
    ),
    MistakePattern(
        code="swap-after-round-1",
        label="Swapped halves after R1",
        variant=VariantParameters(swap_after_rounds=(1,)),
        description="Left/right halves inverted after round 1.",
        credit=0.5,
    ),
    MistakePattern(
        code="reversed-subkeys",
        label="K16→K1 order",
        variant=VariantParameters(reverse_subkeys=True),
        description="Round keys applied in reverse order.",
        credit=0.4,
    ),
    MistakePattern(
        code="two-rounds-only",
        label="Stopped after 2 rounds",
        variant=VariantParameters(round_limit=2),
        description="Execution ended after round 2.",
        credit=0.2,
    ),
    MistakePattern(
        code="four-rounds-only",
        label="Stopped after 4 rounds",
        variant=VariantParameters(round_limit=4),
        description="Execution ended after round 4.",
        credit=0.3,
    ),
    MistakePattern(
        code="all-one-bit-shifts",
        label="Wrong shift schedule",
        variant=VariantParameters(shift_schedule=(1,) * 16),
        description="Used 1-bit shifts for all key-schedule rounds.",
        credit=0.3,
    ),
)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DiagnosisResult:
    matched_pattern: Optional[str]      # "correct", a catalog code, or None
    message: str
    expected_output: str
    student_output: str
    score: float
    tags: Tuple[str, ...] = field(default_factory=tuple)
    variant_matched: Optional[str] = None

    @property
    def is_correct(self) -> bool:
        return self.matched_pattern == "correct"

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["tags"] = list(self.tags)
        return d

    def summary(self) -> str:
        label = self.variant_matched or self.matched_pattern or "unclassified"
        return f"[{self.score:.2f}] {label}: {self.message}"


# ---------------------------------------------------------------------------
# Diagnosis
# ---------------------------------------------------------------------------

def variant_output(plaintext_hex: str, key_hex: str, variant: VariantParameters) -> str:
    """Encrypt one block under a mutated cipher and return the output hex."""
    return run_des(plaintext_hex, key_hex, "encrypt", variant).output_hex


def diagnose(
    plaintext_hex: str,
    key_hex: str,
    submitted_hex: str,
    patterns: Iterable[MistakePattern] = MISTAKE_PATTERNS,
) -> DiagnosisResult:
    """Classify a submitted ciphertext against the known mistake patterns.

    Inputs are normalised the way a grader would read them: non-hex
    characters stripped, right-padded with '0' and cut to 16 characters.
    """
    plaintext_hex = normalize_block_hex(plaintext_hex)
    key_hex = normalize_block_hex(key_hex)
    student = normalize_block_hex(submitted_hex)

    expected = des_encrypt(plaintext_hex, key_hex).output_hex

    if student == expected:
        logger.info("Submission %s is correct", student)
        return DiagnosisResult(
            matched_pattern="correct",
            message="Answer matches expected ciphertext.",
            expected_output=expected,
            student_output=student,
            score=1.0,
            tags=("correct",),
        )

    for pattern in patterns:
        if variant_output(plaintext_hex, key_hex, pattern.variant) == student:
            credit = min(1.0, max(0.0, pattern.credit))
            logger.info("Submission %s matched pattern %s (credit %.2f)", student, pattern.code, credit)
            return DiagnosisResult(
                matched_pattern=pattern.code,
                message=pattern.description,
                expected_output=expected,
                student_output=student,
                score=credit,
                tags=("incorrect", pattern.code),
                variant_matched=pattern.label,
            )

    logger.info("Submission %s matched no known pattern", student)
    return DiagnosisResult(
        matched_pattern=None,
        message="No known mistake pattern matched. Likely multiple or different errors.",
        expected_output=expected,
        student_output=student,
        score=0.0,
        tags=("incorrect", "unclassified"),
    )


def diagnose_many(submissions: Iterable[Tuple[str, str, str]]) -> List[DiagnosisResult]:
    """Diagnose (plaintext_hex, key_hex, submitted_hex) triples in order."""
    return [diagnose(p, k, s) for p, k, s in submissions]
