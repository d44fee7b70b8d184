"""Diagnosis and evaluation on top of the DES core.

Mistake-pattern diagnosis of student answers, avalanche analysis,
roundtrip verification and presentation helpers.

Research / education only. Do NOT use in production.
"""

from .diagnostics import (
    MISTAKE_PATTERNS,
    DiagnosisResult,
    MistakePattern,
    diagnose,
    diagnose_many,
    variant_output,
)
from .avalanche import (
    AvalancheDemo,
    AvalancheRoundDiff,
    AvalancheStats,
    compare_round_traces,
    flip_bit,
    hamming_distance_hex,
    measure_avalanche,
    run_avalanche_demo,
)
from .roundtrip import (
    RoundtripFailure,
    RoundtripResult,
    run_all_modes,
    run_mode_roundtrip_tests,
    run_roundtrip_tests,
)
from .narrative import KeyStrength, evaluate_key_strength, execution_narrative
from .report import EvaluationReport

__all__ = [
    "MISTAKE_PATTERNS",
    "DiagnosisResult",
    "MistakePattern",
    "diagnose",
    "diagnose_many",
    "variant_output",
    "AvalancheDemo",
    "AvalancheRoundDiff",
    "AvalancheStats",
    "compare_round_traces",
    "flip_bit",
    "hamming_distance_hex",
    "measure_avalanche",
    "run_avalanche_demo",
    "RoundtripFailure",
    "RoundtripResult",
    "run_all_modes",
    "run_mode_roundtrip_tests",
    "run_roundtrip_tests",
    "KeyStrength",
    "evaluate_key_strength",
    "execution_narrative",
    "EvaluationReport",
]
