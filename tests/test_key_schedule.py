import pytest

from deslab.cipher.key_schedule import derive_key_schedule
from deslab.cipher.tables import SHIFT_SCHEDULE
from deslab.errors import InputFormatError


KEY = "133457799bbcdff1"


def test_parity_dropped_key():
    ks = derive_key_schedule(KEY)
    assert ks.parity_dropped_key == "f0ccaaf556678f"
    assert len(ks.parity_dropped_key) == 14


def test_first_round_halves_and_subkey():
    r1 = derive_key_schedule(KEY).rounds[0]
    assert r1.round == 1
    assert r1.shifts == 1
    assert r1.c == "e19955f"
    assert r1.d == "aaccf1e"
    assert r1.sub_key == "1b02effc7072"


def test_last_subkey():
    assert derive_key_schedule(KEY).sub_keys[-1] == "cb3d8b0e17f5"


def test_sixteen_48_bit_subkeys():
    ks = derive_key_schedule(KEY)
    assert len(ks.rounds) == 16
    assert [r.shifts for r in ks.rounds] == list(SHIFT_SCHEDULE)
    assert all(len(k) == 12 for k in ks.sub_keys)


def test_halves_return_to_start_after_full_rotation():
    # shifts total 28, so C16/D16 equal C0/D0
    ks = derive_key_schedule(KEY)
    assert ks.rounds[-1].c + ks.rounds[-1].d == ks.parity_dropped_key


def test_sub_keys_returns_a_copy():
    ks = derive_key_schedule(KEY)
    keys = ks.sub_keys
    keys.reverse()
    assert ks.sub_keys[0] == "1b02effc7072"


@pytest.mark.parametrize("key", ["0101010101010101", "fefefefefefefefe", "1f1f1f1f0e0e0e0e", "e0e0e0e0f1f1f1f1"])
def test_weak_keys_have_identical_subkeys(key):
    assert len(set(derive_key_schedule(key).sub_keys)) == 1


def test_custom_schedule_length_sets_round_count():
    ks = derive_key_schedule(KEY, [1, 1, 2])
    assert len(ks.rounds) == 3
    assert ks.sub_keys[:2] == derive_key_schedule(KEY).sub_keys[:2]


@pytest.mark.parametrize("bad", ["1334", "133457799bbcdff1ff", "133457799bbcdffz", "", " 133457799bbcdff1"])
def test_malformed_key_is_rejected(bad):
    with pytest.raises(InputFormatError):
        derive_key_schedule(bad)


def test_uppercase_key_is_accepted():
    assert derive_key_schedule(KEY.upper()).sub_keys == derive_key_schedule(KEY).sub_keys
