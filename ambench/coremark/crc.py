"""16-bit CRC helpers and seed-value parsing used throughout CoreMark."""

_U16 = 0xFFFF


def _to_s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def crcu8(data: int, crc: int) -> int:
    """Feed one byte into the 16-bit CRC and return the new CRC."""
    data &= 0xFF
    crc &= _U16
    for _ in range(8):
        x16 = (data & 1) ^ (crc & 1)
        data >>= 1
        if x16:
            crc ^= 0x4002
        crc >>= 1
        if x16:
            crc |= 0x8000
        else:
            crc &= 0x7FFF
    return crc


def crcu16(newval: int, crc: int) -> int:
    """Feed a 16-bit value into the CRC, low byte first."""
    newval &= _U16
    crc = crcu8(newval & 0xFF, crc)
    return crcu8(newval >> 8, crc)


def crc16(newval: int, crc: int) -> int:
    """Feed a signed 16-bit value into the CRC."""
    return crcu16(newval & _U16, crc)


def crcu32(newval: int, crc: int) -> int:
    """Feed a 32-bit value into the CRC, low half first."""
    newval &= 0xFFFFFFFF
    crc = crc16(newval & _U16, crc)
    return crc16(newval >> 16, crc)


def parse_value(text: str) -> int:
    """Parse a seed argument: decimal or ``0x`` hex, optional sign and K/M suffix.

    Parsing stops at the first character that is not a digit; the result is
    a signed 32-bit integer.
    """
    pos = 0
    sign = 1
    if text.startswith("-"):
        sign = -1
        pos = 1
    hexmode = text[pos:pos + 2] == "0x"
    if hexmode:
        pos += 2

    value = 0
    while pos < len(text):
        ch = text[pos]
        if "0" <= ch <= "9":
            digit = ord(ch) - ord("0")
        elif hexmode and "a" <= ch <= "f":
            digit = 10 + ord(ch) - ord("a")
        else:
            break
        value = value * (16 if hexmode else 10) + digit
        pos += 1

    suffix = text[pos] if pos < len(text) else ""
    if suffix == "K":
        value *= 1024
    elif suffix == "M":
        value *= 1024 * 1024
    return _to_s32(value * sign)