"""Structured self-test report.

Aggregates roundtrip and avalanche results into a single serializable
report for export and CLI display.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from deslab.utils.repro import utc_timestamp
from .avalanche import AvalancheStats
from .roundtrip import RoundtripResult


@dataclass
class EvaluationReport:
    """Complete self-test report aggregating all analysis results."""
    timestamp: str = ""
    roundtrip_results: List[RoundtripResult] = field(default_factory=list)
    avalanche_results: List[AvalancheStats] = field(default_factory=list)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = utc_timestamp()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize full report for JSON export."""
        return {
            "timestamp": self.timestamp,
            "roundtrip": [r.to_dict() for r in self.roundtrip_results],
            "avalanche": [a.to_dict() for a in self.avalanche_results],
            "summary": {
                "roundtrip_all_pass": all(r.is_perfect for r in self.roundtrip_results),
                "failing_targets": self.failing_targets(),
            },
        }

    def to_summary(self) -> str:
        lines = [f"Self-test Report: {self.timestamp}", "=" * 50]

        if self.roundtrip_results:
            rt_pass = sum(1 for r in self.roundtrip_results if r.is_perfect)
            lines.append(f"\nRoundtrip Tests: {rt_pass}/{len(self.roundtrip_results)} targets pass")
            for r in self.roundtrip_results:
                lines.append(f"  {r.summary()}")

        if self.avalanche_results:
            lines.append("\nAvalanche:")
            for a in self.avalanche_results:
                lines.append(f"  key={a.key_hex} {a.summary()}")

        return "\n".join(lines)

    def failing_targets(self) -> List[str]:
        return [r.target for r in self.roundtrip_results if not r.is_perfect]
