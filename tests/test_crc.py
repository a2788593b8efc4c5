import pytest

from ambench.coremark.crc import crc16, crcu8, crcu16, crcu32, parse_value


def _chain(values):
    crc = 0
    for value in values:
        crc = crc16(value, crc)
    return crc


@pytest.mark.parametrize(
    "seeds, expected",
    [
        ((0, 0, 0x66, 2000), 0x8A02),
        ((0x3415, 0x3415, 0x66, 2000), 0x7B05),
        ((0x8, 0x8, 0x8, 400), 0x4EAF),
        ((0, 0, 0x66, 666), 0xE9F5),
        ((0x3415, 0x3415, 0x66, 666), 0x18F2),
    ],
)
def test_known_seed_crcs(seeds, expected):
    assert _chain(seeds) == expected


def test_crcu8_zero_stays_zero():
    assert crcu8(0, 0) == 0


@pytest.mark.parametrize("value", [0, 1, 0x1234, 0xABCD, 0xFFFF])
@pytest.mark.parametrize("crc", [0, 0x55AA, 0xFFFF])
def test_crcu16_is_two_bytes_low_first(value, crc):
    assert crcu16(value, crc) == crcu8(value >> 8, crcu8(value & 0xFF, crc))


@pytest.mark.parametrize("value", [-1, -32768, 5, 32767])
def test_crc16_matches_unsigned_view(value):
    assert crc16(value, 0x1234) == crcu16(value & 0xFFFF, 0x1234)


@pytest.mark.parametrize("value", [0, 0x12345678, 0xFFFFFFFF, 7])
def test_crcu32_is_two_halves(value):
    crc = 0x0F0F
    assert crcu32(value, crc) == crcu16(value >> 16, crcu16(value & 0xFFFF, crc))


def test_crc_results_stay_16_bit():
    for byte in range(256):
        assert 0 <= crcu8(byte, 0xFFFF) <= 0xFFFF


def test_parse_decimal():
    assert parse_value("123") == 123


def test_parse_negative():
    assert parse_value("-42") == -42


@pytest.mark.parametrize("number", [0, 1, 0x66, 0x3415, 0xDEAD])
def test_parse_hex_round_trip(number):
    assert parse_value(hex(number)) == number


def test_parse_suffixes():
    assert parse_value("2K") == 2 * 1024
    assert parse_value("3M") == 3 * 1024 * 1024


def test_parse_stops_at_non_digit():
    assert parse_value("12z7") == 12
    assert parse_value("0xA") == 0