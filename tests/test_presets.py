from deslab.cipher.des import des_encrypt
from deslab.cipher.presets import DES_PRESETS, REFERENCE_VECTORS, build_reference_vectors
from deslab.evaluation.narrative import evaluate_key_strength, execution_narrative


def test_presets_are_valid_blocks():
    assert set(DES_PRESETS) == {"basic", "weak", "avalanche"}
    for preset in DES_PRESETS.values():
        assert len(preset["plaintext"]) == 16
        assert len(preset["key"]) == 16


def test_reference_vectors():
    rows = build_reference_vectors()
    assert len(rows) == len(REFERENCE_VECTORS) == 17
    by_label = {r["label"].split(":")[0]: r for r in rows}

    assert by_label["ECB-1"]["expected_hex"] == "85e813540f0ab405"
    assert by_label["ECB-2"]["expected_hex"] == "8ca64de9c1b123a7"
    assert by_label["ECB-3"]["expected_hex"] == "7359b2163e4edc58"
    assert by_label["CBC-2"]["expected_hex"] == "0000000000000000" + "85e813540f0ab405"
    # 10-byte text pads to two blocks
    assert len(by_label["ECB-Text"]["expected_hex"]) == 32
    assert by_label["ECB-Text"]["key_hex"] == "70617373776f7264"
    # 8-byte text gains a full padding block behind the IV
    assert len(by_label["OFB-1"]["expected_hex"]) == 48
    assert by_label["CTR-1"]["expected_hex"].startswith("0000000000000001")


def test_reference_vectors_subset():
    rows = build_reference_vectors(REFERENCE_VECTORS[:1])
    assert len(rows) == 1
    assert rows[0]["expected_base64"]


def test_key_strength():
    assert evaluate_key_strength("0101010101010101").label == "Weak"
    moderate = evaluate_key_strength("133457799bbcdff1")
    assert (moderate.label, moderate.score) == ("Moderate", 8)
    assert evaluate_key_strength("0123456789abcdef").label == "Strong"


def test_execution_narrative():
    lines = execution_narrative(des_encrypt("0123456789abcdef", "133457799bbcdff1"))
    assert len(lines) == 19
    assert lines[2].startswith("Round 1: Expanded R0, XORed with K1")
    assert lines[-1].startswith("Swapped halves")
