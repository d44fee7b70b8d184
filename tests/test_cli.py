import json
import sys
from pathlib import Path

import pytest

_scripts = Path(__file__).parent.parent / "scripts"
if str(_scripts) not in sys.path:
    sys.path.insert(0, str(_scripts))

import des_tool  # noqa: E402

from deslab.config import load_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("DESLAB_DEFAULT_MODE", "DESLAB_STRICT_PADDING", "DESLAB_AVALANCHE_TRIALS"):
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


def test_encrypt_block(capsys):
    assert des_tool.main(["encrypt-block", "0123456789abcdef", "133457799bbcdff1"]) == 0
    assert capsys.readouterr().out.strip() == "85e813540f0ab405"


def test_decrypt_block_with_trace(capsys):
    assert des_tool.main(["decrypt-block", "85e813540f0ab405", "133457799bbcdff1", "--trace"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out[-1] == "0123456789abcdef"
    assert any(line.startswith("Round 16:") for line in out)


def test_bad_block_exits_with_2():
    assert des_tool.main(["encrypt-block", "xyz", "133457799bbcdff1"]) == 2


def test_mode_roundtrip_through_cli(capsys):
    args = ["--json", "encrypt", "--mode", "cbc", "--key-text", "password",
            "--text", "HELLO DES!", "--iv", "0001020304050607"]
    assert des_tool.main(args) == 0
    enc = json.loads(capsys.readouterr().out)
    assert enc["mode"] == "CBC"
    assert enc["iv"] == "0001020304050607"
    assert enc["hex"].startswith("0001020304050607")

    assert des_tool.main(["--json", "decrypt", "--mode", "CBC", "--key-text", "password",
                          "--base64", enc["base64"]]) == 0
    dec = json.loads(capsys.readouterr().out)
    assert dec["text"] == "HELLO DES!"


def test_decrypt_missing_iv_exits_with_2():
    assert des_tool.main(["decrypt", "--mode", "OFB", "--key", "133457799bbcdff1", "--hex", "00"]) == 2


def test_diagnose_exit_codes(capsys):
    assert des_tool.main(["diagnose", "0123456789abcdef", "133457799bbcdff1", "85e813540f0ab405"]) == 0
    assert "[1.00]" in capsys.readouterr().out
    assert des_tool.main(["diagnose", "0123456789abcdef", "133457799bbcdff1", "ffffffffffffffff"]) == 1


def test_avalanche_json(capsys):
    assert des_tool.main(["--json", "avalanche", "0123456789abcdef", "133457799bbcdff1", "--bit", "63"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["bit_index"] == 63
    assert len(out["round_diffs"]) == 16


def test_vectors(capsys):
    assert des_tool.main(["vectors"]) == 0
    assert "85e813540f0ab405" in capsys.readouterr().out


def test_selftest_writes_report(tmp_path, monkeypatch):
    monkeypatch.setenv("DESLAB_AVALANCHE_TRIALS", "5")
    out = tmp_path / "report.json"
    assert des_tool.main(["selftest", "--vectors", "3", "--output", str(out)]) == 0
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["summary"]["roundtrip_all_pass"] is True
    assert len(report["roundtrip"]) == 6
