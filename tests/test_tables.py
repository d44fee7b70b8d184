import pytest

from deslab.cipher.tables import (
    E_TABLE,
    FP_TABLE,
    IP_TABLE,
    P_TABLE,
    PC1_TABLE,
    PC2_TABLE,
    SHIFT_SCHEDULE,
    S_BOXES,
    bits_to_hex,
    chunk_bits,
    hex_to_bits,
    left_shift,
    permute,
    xor_bits,
)
from deslab.errors import InputFormatError


def test_table_shapes():
    assert len(IP_TABLE) == 64
    assert len(FP_TABLE) == 64
    assert len(E_TABLE) == 48
    assert len(P_TABLE) == 32
    assert len(PC1_TABLE) == 56
    assert len(PC2_TABLE) == 48
    assert SHIFT_SCHEDULE == (1, 1, 2, 2, 2, 2, 2, 2, 1, 2, 2, 2, 2, 2, 2, 1)
    assert sum(SHIFT_SCHEDULE) == 28


def test_fp_inverts_ip():
    positions = list(range(64))
    assert permute(permute(positions, IP_TABLE), FP_TABLE) == positions
    assert permute(permute(positions, FP_TABLE), IP_TABLE) == positions


def test_pc1_drops_parity_bits():
    assert not {8, 16, 24, 32, 40, 48, 56, 64} & set(PC1_TABLE)


@pytest.mark.parametrize("idx", range(8))
def test_sbox_rows_are_permutations(idx):
    assert len(S_BOXES[idx]) == 4
    for row in S_BOXES[idx]:
        assert sorted(row) == list(range(16))


def test_permute_allows_duplicates_and_omissions():
    bits = [1, 0, 1, 1]
    assert permute(bits, (4, 4, 1)) == [1, 1, 1]
    assert len(permute(list(range(32)), E_TABLE)) == 48


def test_left_shift_rotates_modulo_length():
    bits = [1, 0, 0, 0, 1]
    assert left_shift(bits, 1) == [0, 0, 0, 1, 1]
    assert left_shift(bits, 6) == left_shift(bits, 1)
    assert left_shift(bits, 0) == bits


def test_xor_bits_requires_equal_length():
    assert xor_bits([1, 0, 1], [1, 1, 0]) == [0, 1, 1]
    with pytest.raises(ValueError):
        xor_bits([1, 0], [1])


def test_chunk_bits():
    assert chunk_bits([1, 0, 1, 1, 0, 0], 4) == [[1, 0, 1, 1], [0, 0]]


@pytest.mark.parametrize(
    "hex_str,width",
    [
        ("0123456789abcdef", 64),
        ("f0ccaaf556678f", 56),
        ("1b02effc7072", 48),
        ("cc00ccff", 32),
    ],
)
def test_hex_bits_roundtrip(hex_str, width):
    bits = hex_to_bits(hex_str, width)
    assert len(bits) == width
    assert bits_to_hex(bits) == hex_str


def test_hex_to_bits_is_msb_first_and_left_pads():
    assert hex_to_bits("8") == [1, 0, 0, 0]
    assert hex_to_bits("1", 8) == [0, 0, 0, 0, 0, 0, 0, 1]
    assert hex_to_bits("A") == hex_to_bits("a")


def test_hex_to_bits_rejects_non_hex():
    with pytest.raises(InputFormatError):
        hex_to_bits("0123zz")
