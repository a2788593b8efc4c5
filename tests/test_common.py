import hashlib

import pytest

from ambench.microbench.common import (
    REF_SCORE,
    SETTINGS,
    BenchRandom,
    checksum,
    format_time,
    pack_u32,
    score,
)


def test_rand_first_value_and_range():
    rng = BenchRandom()
    rng.srand(1)
    assert rng.rand() == 41
    assert all(0 <= rng.rand() <= 0x7FFF for _ in range(1000))


def test_srand_reproduces_sequence_and_masks_seed():
    a = BenchRandom()
    b = BenchRandom()
    a.srand(7)
    b.srand(7 | 0x8000)
    assert [a.rand() for _ in range(20)] == [b.rand() for _ in range(20)]


def test_checksum_ignores_last_word():
    assert checksum(b"abcdefgh") == checksum(b"abcdWXYZ")
    assert checksum(b"abcd") == checksum(b"")
    assert checksum(b"abcde") == checksum(b"abcdz")


def test_checksum_depends_on_counted_bytes():
    first = checksum(b"abcd1")
    second = checksum(b"abce1")
    assert 0 <= first < 2**32
    assert first != second


def test_pack_u32_round_trip_and_wrap():
    packed = pack_u32([1, -1, 0x12345678])
    assert packed[:4] == b"\x01\x00\x00\x00"
    assert packed[4:8] == b"\xff\xff\xff\xff"
    assert int.from_bytes(packed[8:], "little") == 0x12345678


@pytest.mark.parametrize("index", [0, 1])
def test_sorted_random_data_matches_qsort_checksum(index):
    setting = SETTINGS["qsort"][index]
    rng = BenchRandom()
    rng.srand(1)
    data = []
    for _ in range(setting.size):
        a = rng.rand()
        b = rng.rand()
        data.append((a << 16) | b)
    assert checksum(pack_u32(sorted(data))) == setting.checksum


def test_md5_digest_matches_source_checksum():
    setting = SETTINGS["md5"][0]
    rng = BenchRandom()
    rng.srand(1)
    message = bytes(rng.rand() & 0xFF for _ in range(setting.size))
    assert checksum(hashlib.md5(message).digest()) == setting.checksum


def test_format_time():
    assert format_time(1234567) == "1234.567"
    assert format_time(5) == "0.005"
    assert format_time(3000) == "3.000"


def test_score():
    assert score(1000, 0) == 0
    assert score(4404, 4404) == REF_SCORE
    assert score(1000, 2000) * 2 == score(1000, 1000)