"""Algebraic unit testing: roundtrip verification P = D(E(P, K), K).

Generates randomized test vectors and verifies that decryption perfectly
inverts encryption, for single blocks and for every mode of operation.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from deslab.cipher.des import des_decrypt, des_encrypt
from deslab.cipher.modes import decrypt_bytes, encrypt_bytes
from deslab.cipher.spec import MODES, DesMode
from deslab.errors import DESLabError

logger = logging.getLogger(__name__)


@dataclass
class RoundtripFailure:
    """Details of a single failed roundtrip test vector."""
    vector_index: int
    plaintext_hex: str
    key_hex: str
    ciphertext_hex: str
    decrypted_hex: str       # What decrypt returned (should equal plaintext)
    error: Optional[str]     # Exception message if decrypt/encrypt threw


@dataclass
class RoundtripResult:
    """Aggregate result of roundtrip testing for one target (block or mode)."""
    target: str
    total_vectors: int
    passed: int
    failed: int
    failures: List[RoundtripFailure] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    seed: int = 1337

    @property
    def success_rate(self) -> float:
        return self.passed / self.total_vectors if self.total_vectors > 0 else 0.0

    @property
    def is_perfect(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        status = "PASS" if self.is_perfect else "FAIL"
        return (
            f"[{status}] {self.target}: "
            f"{self.passed}/{self.total_vectors} vectors passed "
            f"({self.elapsed_seconds:.2f}s)"
        )


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def run_roundtrip_tests(
    *,
    num_vectors: int = 1000,
    seed: int = 1337,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Single-block roundtrip over random (plaintext, key) pairs."""
    rng = random.Random(seed)
    passed = 0
    failures: List[RoundtripFailure] = []
    start = time.perf_counter()

    for i in range(num_vectors):
        pt = _rand_bytes(rng, 8).hex()
        key = _rand_bytes(rng, 8).hex()
        ct = des_encrypt(pt, key).output_hex
        rt = des_decrypt(ct, key).output_hex
        if rt == pt:
            passed += 1
        elif len(failures) < max_failures_recorded:
            failures.append(RoundtripFailure(i, pt, key, ct, rt, None))

    elapsed = time.perf_counter() - start
    result = RoundtripResult(
        target="DES-block",
        total_vectors=num_vectors,
        passed=passed,
        failed=num_vectors - passed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
    logger.info(result.summary())
    return result


def run_mode_roundtrip_tests(
    mode: DesMode,
    *,
    num_vectors: int = 100,
    seed: int = 1337,
    max_len: int = 40,
    max_failures_recorded: int = 10,
) -> RoundtripResult:
    """Roundtrip random payloads of 0..max_len bytes through one mode.

    The same IV is used on both sides (it travels as the ciphertext prefix).
    """
    rng = random.Random(seed)
    passed = 0
    failed = 0
    failures: List[RoundtripFailure] = []
    start = time.perf_counter()

    for i in range(num_vectors):
        pt = _rand_bytes(rng, rng.randrange(0, max_len + 1))
        key = _rand_bytes(rng, 8).hex()
        iv = _rand_bytes(rng, 8)
        try:
            ct = encrypt_bytes(pt, key, mode, iv).data
            rt = decrypt_bytes(ct, key, mode).data
            if rt == pt:
                passed += 1
                continue
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(i, pt.hex(), key, ct.hex(), rt.hex(), None))
        except DESLabError as exc:
            failed += 1
            if len(failures) < max_failures_recorded:
                failures.append(RoundtripFailure(i, pt.hex(), key, "<error>", "<error>", str(exc)))

    elapsed = time.perf_counter() - start
    result = RoundtripResult(
        target=f"DES-{mode.upper()}",
        total_vectors=num_vectors,
        passed=passed,
        failed=failed,
        failures=failures,
        elapsed_seconds=round(elapsed, 4),
        seed=seed,
    )
    logger.info(result.summary())
    return result


def run_all_modes(
    *,
    num_vectors: int = 100,
    seed: int = 1337,
) -> List[RoundtripResult]:
    """Run mode roundtrip tests for every supported mode, in MODES order."""
    return [run_mode_roundtrip_tests(m, num_vectors=num_vectors, seed=seed) for m in MODES]
