import random

import pytest

from nilsimsa_lsh import (
    DigestDecodeError,
    DigestLengthError,
    Nilsimsa,
    compare,
    hamming_distance,
    is_similar,
)

TEST_STRING = "42c82c184080082040001004000000084e1043b0c0925829003e84c860410010"
BEST_STRONG = "00480cba20810802408000000400000a481091b088b21e21003e840a20011016"
DEAR_BILL = "51613b08c286b8054e09847c51928935289e623b63308db6b1606b0883804264"
DEAR_MARK = "1db4dd17fb93907f2dbb52a5d7dddc268f15545be7da0f75efcb0f9df7cc65b3"


def _random_digest(rng: random.Random) -> bytes:
    return bytes(rng.randrange(256) for _ in range(32))


def test_known_scores():
    assert compare(TEST_STRING, BEST_STRONG) == 90
    assert compare(DEAR_BILL, DEAR_MARK) == 1
    assert hamming_distance(TEST_STRING, BEST_STRONG) == 38
    assert hamming_distance(DEAR_BILL, DEAR_MARK) == 127


def test_identity_and_symmetry():
    rng = random.Random(7)
    for _ in range(20):
        a = _random_digest(rng)
        b = _random_digest(rng)
        assert compare(a, a) == 128
        assert compare(a.hex(), a.hex()) == 128
        assert compare(a, b) == compare(b, a)


def test_hex_and_bytes_agree():
    a = bytes.fromhex(TEST_STRING)
    b = bytes.fromhex(BEST_STRONG)
    assert compare(a, b) == 90
    assert compare(TEST_STRING, b) == 90
    assert compare(TEST_STRING.upper(), BEST_STRONG) == 90


def test_digest_output_feeds_compare():
    d = Nilsimsa(b"test string").digest()
    assert compare(d, TEST_STRING) == 128


def test_length_mismatch():
    with pytest.raises(DigestLengthError) as ei:
        compare(TEST_STRING, BEST_STRONG[:-2])
    assert isinstance(ei.value, ValueError)
    assert (ei.value.len_a, ei.value.len_b) == (64, 62)

    with pytest.raises(DigestLengthError):
        compare(bytes(32), bytes(31))


def test_decode_error_names_input():
    with pytest.raises(DigestDecodeError) as ei:
        compare(TEST_STRING, "zz" * 32)
    assert ei.value.which == "b"

    with pytest.raises(DigestDecodeError) as ei:
        compare("g" + TEST_STRING[1:], BEST_STRONG)
    assert ei.value.which == "a"


def test_odd_length_hex_is_decode_error():
    with pytest.raises(DigestDecodeError):
        compare("abc", "abd")


def test_rejects_other_types():
    with pytest.raises(TypeError):
        compare(TEST_STRING, 12345)


def test_bounds():
    assert compare("ff" * 32, "00" * 32) == 0
    rng = random.Random(11)
    for _ in range(50):
        s = compare(_random_digest(rng), _random_digest(rng))
        assert 0 <= s <= 128


def test_empty_digests():
    assert compare("", "") == 128
    assert hamming_distance(b"", b"") == 0


def test_cutoff_exact_within_range():
    assert compare(TEST_STRING, BEST_STRONG, cutoff=38) == 90
    assert compare(TEST_STRING, BEST_STRONG, cutoff=128) == 90


def test_cutoff_partial_past_range():
    # 0x42 ^ 0x00 has two bits set; accumulation stops after the first byte.
    assert compare(TEST_STRING, BEST_STRONG, cutoff=0) == 126


def test_cutoff_properties():
    rng = random.Random(5)
    for _ in range(50):
        a = _random_digest(rng)
        b = _random_digest(rng)
        exact = compare(a, b)
        dist = hamming_distance(a, b)
        cutoff = rng.randrange(0, 128)
        cut = compare(a, b, cutoff=cutoff)
        if dist <= cutoff:
            assert cut == exact
        else:
            assert cut >= exact
            assert cut < 128 - cutoff


def test_negative_cutoff_rejected():
    with pytest.raises(ValueError):
        compare(TEST_STRING, BEST_STRONG, cutoff=-1)


def test_is_similar():
    assert is_similar(TEST_STRING, BEST_STRONG, 90)
    assert not is_similar(TEST_STRING, BEST_STRONG, 91)
    assert is_similar(DEAR_BILL, DEAR_MARK, 0)
    assert not is_similar(TEST_STRING, TEST_STRING, 129)
