"""Classroom presets and mode reference vectors.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .encoding import bytes_to_base64, hex_to_bytes, text_key_to_key_hex, text_to_bytes
from .modes import encrypt_bytes, pad_block_bytes
from .spec import DesMode


DES_PRESETS: Dict[str, Dict[str, str]] = {
    "basic": {
        "label": "Basic Example",
        "plaintext": "02468aceeca86420",
        "key": "0f1571c947d9e859",
        "description": "Classic DES example provided in many lecture slides.",
    },
    "weak": {
        "label": "Test Weak Keys",
        "plaintext": "ffffffffffffffff",
        "key": "0101010101010101",
        "description": "Demonstrates weak key behavior with repeating patterns.",
    },
    "avalanche": {
        "label": "Avalanche Test",
        "plaintext": "0123456789abcdef",
        "key": "133457799bbcdff1",
        "description": "Designed to showcase the avalanche effect when flipping bits.",
    },
}


@dataclass(frozen=True)
class ReferenceVector:
    """A mode test case. Hex input is used as-is; text input is padded."""
    label: str
    mode: DesMode
    key_hex: Optional[str] = None
    key_text: Optional[str] = None
    input_hex: Optional[str] = None
    input_text: Optional[str] = None
    iv: Optional[str] = None


REFERENCE_VECTORS: List[ReferenceVector] = [
    ReferenceVector("ECB-1: Basic test", "ECB", key_hex="133457799bbcdff1", input_hex="0123456789abcdef"),
    ReferenceVector("ECB-2: All zeros", "ECB", key_hex="0101010101010101", input_hex="0000000000000000"),
    ReferenceVector("ECB-3: All ones", "ECB", key_hex="fefefefefefefefe", input_hex="ffffffffffffffff"),
    ReferenceVector("ECB-4: Alternating", "ECB", key_hex="aaaaaaaaaaaaaa55", input_hex="aaaaaaaaaaaaaaaa"),
    ReferenceVector("ECB-5: NIST vector", "ECB", key_hex="0e329232ea6d0d73", input_hex="fedcba9876543210"),
    ReferenceVector("ECB-6: Reverse", "ECB", key_hex="133457799bbcdff1", input_hex="fedcba9876543210"),
    ReferenceVector('ECB-Text: key "password", input "HELLO DES!"', "ECB", key_text="password", input_text="HELLO DES!"),
    ReferenceVector("CBC-1: Simple", "CBC", key_hex="0f1571c947d9e859", input_hex="02468aceeca86420", iv="0001020304050607"),
    ReferenceVector("CBC-2: Zero IV", "CBC", key_hex="133457799bbcdff1", input_hex="0123456789abcdef", iv="0000000000000000"),
    ReferenceVector('CBC-3: Text "HELLO123"', "CBC", key_hex="0e329232ea6d0d73", input_text="HELLO123", iv="1122334455667788"),
    ReferenceVector("CFB-1: Basic", "CFB", key_hex="0f1571c947d9e859", input_hex="fedcba9876543210", iv="0123456789abcdef"),
    ReferenceVector("CFB-2: Simple", "CFB", key_hex="133457799bbcdff1", input_hex="0123456789abcdef", iv="1111111111111111"),
    ReferenceVector('OFB-1: Text "DES-LAB!"', "OFB", key_hex="133457799bbcdff1", input_text="DES-LAB!", iv="a1a2a3a4a5a6a7a8"),
    ReferenceVector("OFB-2: Hex", "OFB", key_hex="0e329232ea6d0d73", input_hex="aaaaaaaaaaaaaaaa", iv="0f0f0f0f0f0f0f0f"),
    ReferenceVector('CTR-1: Text "CTR demo"', "CTR", key_hex="1b1a191817161514", input_text="CTR demo", iv="0000000000000001"),
    ReferenceVector("CTR-2: Ctr=0", "CTR", key_hex="133457799bbcdff1", input_hex="0123456789abcdef", iv="0000000000000000"),
    ReferenceVector('CTR-Text: key "des-key!", input "stream mode"', "CTR", key_text="des-key!", input_text="stream mode", iv="0000000000000002"),
]


def build_reference_vectors(vectors: Optional[List[ReferenceVector]] = None) -> List[Dict[str, Any]]:
    """Compute the expected output (hex and Base64) for each reference vector."""
    out: List[Dict[str, Any]] = []
    for v in vectors if vectors is not None else REFERENCE_VECTORS:
        key_hex = v.key_hex or text_key_to_key_hex(v.key_text or "")
        if v.input_hex is not None:
            payload = hex_to_bytes(v.input_hex)
        else:
            payload = pad_block_bytes(text_to_bytes(v.input_text or ""))
        iv = hex_to_bytes(v.iv) if v.iv else None
        result = encrypt_bytes(payload, key_hex, v.mode, iv, pad=False)

        row = asdict(v)
        row["key_hex"] = key_hex
        row["expected_hex"] = result.data.hex()
        row["expected_base64"] = bytes_to_base64(result.data)
        out.append(row)
    return out
