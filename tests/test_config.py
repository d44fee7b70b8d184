import pytest
from pydantic import ValidationError

from deslab.config import Settings, load_settings


_VARS = (
    "DESLAB_DEFAULT_MODE",
    "DESLAB_STRICT_PADDING",
    "DESLAB_AVALANCHE_TRIALS",
    "GLOBAL_SEED",
    "DESLAB_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


def test_defaults():
    s = load_settings()
    assert s.default_mode == "CBC"
    assert s.strict_padding is False
    assert s.avalanche_trials == 200
    assert s.global_seed == 1337
    assert s.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DESLAB_DEFAULT_MODE", "ofb")
    monkeypatch.setenv("DESLAB_STRICT_PADDING", "yes")
    monkeypatch.setenv("DESLAB_AVALANCHE_TRIALS", "50")
    monkeypatch.setenv("GLOBAL_SEED", "7")
    monkeypatch.setenv("DESLAB_LOG_LEVEL", "debug")
    s = load_settings()
    assert s.default_mode == "OFB"
    assert s.strict_padding is True
    assert s.avalanche_trials == 50
    assert s.global_seed == 7
    assert s.log_level == "DEBUG"


def test_settings_are_cached():
    assert load_settings() is load_settings()


def test_validation():
    with pytest.raises(ValidationError):
        Settings(default_mode="XTS")
    with pytest.raises(ValidationError):
        Settings(avalanche_trials=0)
