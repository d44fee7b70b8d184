import random

import pytest

from deslab.cipher.des import des_encrypt, run_des
from deslab.cipher.spec import VariantParameters
from deslab.evaluation.avalanche import (
    compare_round_traces,
    flip_bit,
    hamming_distance_hex,
    measure_avalanche,
    run_avalanche_demo,
)


PT = "0123456789abcdef"
KEY = "133457799bbcdff1"


def test_flip_bit_indexing():
    assert flip_bit(PT, 63) == "0123456789abcdee"
    assert flip_bit(PT, 0) == "8123456789abcdef"
    with pytest.raises(IndexError):
        flip_bit(PT, 64)


def test_hamming_distance():
    assert hamming_distance_hex("0000000000000000", "ffffffffffffffff") == 64
    assert hamming_distance_hex(PT, PT) == 0
    assert hamming_distance_hex("0f", "00", width=8) == 4


def test_identical_traces_have_no_difference():
    a = des_encrypt(PT, KEY)
    diffs = compare_round_traces(a.rounds, a.rounds)
    assert len(diffs) == 16
    assert all(d.differing_bits == 0 and d.percentage == 0.0 for d in diffs)


def test_compare_stops_at_shorter_trace():
    full = des_encrypt(PT, KEY)
    short = run_des(PT, KEY, variant=VariantParameters(round_limit=2))
    assert len(compare_round_traces(full.rounds, short.rounds)) == 2


def test_demo_with_fixed_bit():
    demo = run_avalanche_demo(PT, KEY, bit_index=63)
    assert demo.mutated_input == "0123456789abcdee"
    assert len(demo.round_diffs) == 16
    assert [d.round for d in demo.round_diffs] == list(range(1, 17))
    assert demo.ciphertext_diff > 0
    assert demo.round_diffs[-1].percentage == round(demo.round_diffs[-1].differing_bits / 64 * 100, 2)
    assert demo.to_dict()["base_output"] == "85e813540f0ab405"


def test_demo_random_bit_is_reproducible():
    a = run_avalanche_demo(PT, KEY, rng=random.Random(7))
    b = run_avalanche_demo(PT, KEY, rng=random.Random(7))
    assert a.bit_index == b.bit_index
    assert a.ciphertext_diff == b.ciphertext_diff


def test_mean_is_close_to_half_the_block():
    stats = measure_avalanche(KEY, trials=200, seed=1337)
    assert stats.num_trials == 200
    assert len(stats.per_trial_bits) == 200
    assert 28.0 <= stats.mean_bits <= 36.0
    assert stats.min_bits <= stats.mean_bits <= stats.max_bits
    assert 0.4 < stats.mean_fraction < 0.6
    assert "Avalanche over 200 flips" in stats.summary()
