"""Command-line front end for the DES lab core.

Usage:
    python scripts/des_tool.py encrypt-block 0123456789abcdef 133457799bbcdff1
    python scripts/des_tool.py decrypt-block 85e813540f0ab405 133457799bbcdff1
    python scripts/des_tool.py encrypt --mode CBC --key 133457799bbcdff1 --text "HELLO DES!"
    python scripts/des_tool.py decrypt --mode CBC --key 133457799bbcdff1 --hex <iv||ciphertext>
    python scripts/des_tool.py diagnose 0123456789abcdef 133457799bbcdff1 <student answer>
    python scripts/des_tool.py avalanche 0123456789abcdef 133457799bbcdff1 --bit 63
    python scripts/des_tool.py vectors
    python scripts/des_tool.py selftest --vectors 200

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Any, List, Optional

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from deslab.config import load_settings
from deslab.errors import DESLabError
from deslab.cipher.des import des_decrypt, des_encrypt
from deslab.cipher.encoding import (
    base64_to_bytes,
    bytes_to_base64,
    bytes_to_text,
    hex_to_bytes,
    text_key_to_key_hex,
    text_to_bytes,
)
from deslab.cipher.modes import decrypt_bytes, encrypt_bytes
from deslab.cipher.presets import build_reference_vectors
from deslab.cipher.spec import MODES
from deslab.evaluation.avalanche import measure_avalanche, run_avalanche_demo
from deslab.evaluation.diagnostics import diagnose
from deslab.evaluation.narrative import execution_narrative
from deslab.evaluation.report import EvaluationReport
from deslab.evaluation.roundtrip import run_all_modes, run_roundtrip_tests
from deslab.utils.repro import set_global_seed, write_json

logger = logging.getLogger("des_tool")


def _emit(obj: Any, as_json: bool, text: str) -> None:
    print(json.dumps(obj, indent=2, sort_keys=True) if as_json else text)


def _resolve_key(args: argparse.Namespace) -> str:
    if args.key_text is not None:
        return text_key_to_key_hex(args.key_text)
    return args.key


def _cmd_block(args: argparse.Namespace) -> int:
    fn = des_encrypt if args.command == "encrypt-block" else des_decrypt
    result = fn(args.block, args.key)
    text = result.output_hex
    if args.trace:
        text = "\n".join(execution_narrative(result) + [result.output_hex])
    _emit(result.to_dict(), args.json, text)
    return 0


def _cmd_encrypt(args: argparse.Namespace) -> int:
    if args.text is not None:
        payload = text_to_bytes(args.text)
    else:
        payload = hex_to_bytes(args.hex)
    iv = hex_to_bytes(args.iv) if args.iv else None
    result = encrypt_bytes(payload, _resolve_key(args), args.mode, iv)
    out = {
        "mode": result.mode,
        "hex": result.data.hex(),
        "base64": bytes_to_base64(result.data),
        "iv": result.iv.hex() if result.iv else None,
    }
    _emit(out, args.json, f"{out['hex']}\n{out['base64']}")
    return 0


def _cmd_decrypt(args: argparse.Namespace) -> int:
    settings = load_settings()
    if args.base64 is not None:
        payload = base64_to_bytes(args.base64)
    else:
        payload = hex_to_bytes(args.hex)
    result = decrypt_bytes(
        payload,
        _resolve_key(args),
        args.mode,
        strict_padding=args.strict_padding or settings.strict_padding,
    )
    try:
        text: Optional[str] = bytes_to_text(result.data)
    except DESLabError:
        text = None
    out = {"mode": result.mode, "hex": result.data.hex(), "text": text}
    _emit(out, args.json, text if text is not None else result.data.hex())
    return 0


def _cmd_diagnose(args: argparse.Namespace) -> int:
    result = diagnose(args.plaintext, args.key, args.submitted)
    _emit(result.to_dict(), args.json, result.summary())
    return 0 if result.is_correct else 1


def _cmd_avalanche(args: argparse.Namespace) -> int:
    settings = load_settings()
    demo = run_avalanche_demo(
        args.plaintext, args.key,
        bit_index=args.bit,
        rng=random.Random(settings.global_seed),
    )
    lines = [f"Flipped bit {demo.bit_index}: {demo.base.input_hex} -> {demo.mutated_input}"]
    for d in demo.round_diffs:
        lines.append(f"  Round {d.round:2d}: {d.differing_bits:2d} bits ({d.percentage:.2f}%)")
    lines.append(f"Ciphertext difference: {demo.ciphertext_diff}/64 bits")
    _emit(demo.to_dict(), args.json, "\n".join(lines))
    return 0


def _cmd_vectors(args: argparse.Namespace) -> int:
    rows = build_reference_vectors()
    text = "\n".join(f"{r['label']:<55} {r['expected_hex']}" for r in rows)
    _emit(rows, args.json, text)
    return 0


def _cmd_selftest(args: argparse.Namespace) -> int:
    settings = load_settings()
    report = EvaluationReport()
    report.roundtrip_results.append(run_roundtrip_tests(num_vectors=args.vectors, seed=settings.global_seed))
    report.roundtrip_results.extend(run_all_modes(num_vectors=args.vectors, seed=settings.global_seed))
    report.avalanche_results.append(
        measure_avalanche(args.key, trials=settings.avalanche_trials, seed=settings.global_seed)
    )
    if args.output:
        write_json(args.output, report.to_dict())
        logger.info("Report written to %s", args.output)
    _emit(report.to_dict(), args.json, report.to_summary())
    return 0 if not report.failing_targets() else 1


def _add_key_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--key", help="Key as 16 hex characters")
    g.add_argument("--key-text", help="Free-form text key (UTF-8, truncated/zero-padded to 8 bytes)")


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="DES lab: single-block DES, modes of operation, and answer diagnosis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("encrypt-block", "decrypt-block"):
        p = sub.add_parser(name, help=f"{name.split('-')[0].title()} one 64-bit block")
        p.add_argument("block", help="16 hex characters")
        p.add_argument("key", help="16 hex characters")
        p.add_argument("--trace", action="store_true", help="Print the execution narrative")
        p.set_defaults(func=_cmd_block)

    p = sub.add_parser("encrypt", help="Encrypt a payload with a mode of operation")
    p.add_argument("--mode", type=str.upper, choices=MODES, default=settings.default_mode)
    _add_key_args(p)
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", help="UTF-8 plaintext")
    src.add_argument("--hex", help="Plaintext as hex")
    p.add_argument("--iv", help="8-byte IV / nonce as hex (random if omitted)")
    p.set_defaults(func=_cmd_encrypt)

    p = sub.add_parser("decrypt", help="Decrypt IV||ciphertext with a mode of operation")
    p.add_argument("--mode", type=str.upper, choices=MODES, default=settings.default_mode)
    _add_key_args(p)
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--hex", help="Ciphertext (with IV prefix) as hex")
    src.add_argument("--base64", help="Ciphertext (with IV prefix) as Base64")
    p.add_argument("--strict-padding", action="store_true", help="Fail on inconsistent padding")
    p.set_defaults(func=_cmd_decrypt)

    p = sub.add_parser("diagnose", help="Classify a student's DES answer")
    p.add_argument("plaintext")
    p.add_argument("key")
    p.add_argument("submitted")
    p.set_defaults(func=_cmd_diagnose)

    p = sub.add_parser("avalanche", help="Flip one plaintext bit and compare round outputs")
    p.add_argument("plaintext")
    p.add_argument("key")
    p.add_argument("--bit", type=int, default=None, help="Bit index 0..63 (random if omitted)")
    p.set_defaults(func=_cmd_avalanche)

    p = sub.add_parser("vectors", help="Print the mode reference vectors")
    p.set_defaults(func=_cmd_vectors)

    p = sub.add_parser("selftest", help="Roundtrip every mode and measure avalanche")
    p.add_argument("--vectors", type=int, default=100, help="Vectors per target (default: 100)")
    p.add_argument("--key", default="133457799bbcdff1", help="Key for the avalanche measurement")
    p.add_argument("--output", default=None, help="Write the JSON report here")
    p.set_defaults(func=_cmd_selftest)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    set_global_seed(settings.global_seed)

    try:
        return args.func(args)
    except DESLabError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
