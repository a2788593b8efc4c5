"""Number-recognising state machine kernel of CoreMark."""

from enum import IntEnum

from ambench.coremark.crc import crcu32


class CoreState(IntEnum):
    """States of the token-classifying machine."""

    START = 0
    INVALID = 1
    S1 = 2
    S2 = 3
    INT = 4
    FLOAT = 5
    EXPONENT = 6
    SCIENTIFIC = 7


_NUM_STATES = len(CoreState)
_COMMA = ord(",")

_INT_PATTERNS = (b"5012", b"1234", b"-874", b"+122")
_FLOAT_PATTERNS = (b"35.54400", b".1234500", b"-110.700", b"+0.64400")
_SCI_PATTERNS = (b"5.500e+3", b"-.123e-2", b"-87e+832", b"+0.6e-12")
_ERR_PATTERNS = (b"T0.3e-1F", b"-T.T++Tq", b"1T3.4e4z", b"34.0e-T^")


def _s16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _pattern_for(seed: int) -> bytes:
    kind = seed & 0x7
    index = (seed >> 3) & 0x3
    if kind <= 2:
        return _INT_PATTERNS[index]
    if kind <= 4:
        return _FLOAT_PATTERNS[index]
    if kind <= 6:
        return _SCI_PATTERNS[index]
    return _ERR_PATTERNS[index]


def init_state(size: int, seed: int) -> bytearray:
    """Fill a buffer of ``size`` bytes with comma-separated tokens chosen by ``seed``."""
    if size < 1:
        raise ValueError("state buffer size must be at least 1")
    buf = bytearray(size)
    limit = size - 1
    total = 0
    pattern = b""
    while total + len(pattern) + 1 < limit:
        if pattern:
            buf[total:total + len(pattern)] = pattern
            buf[total + len(pattern)] = _COMMA
            total += len(pattern) + 1
        seed = _s16(seed + 1)
        pattern = _pattern_for(seed)
    return buf


def _isdigit(ch: int) -> bool:
    return 0x30 <= ch <= 0x39


def state_transition(buf: bytes, pos: int, counts: list[int]) -> tuple[CoreState, int]:
    """Classify the token starting at ``pos``.

    Transition counts are accumulated into ``counts``. Returns the final
    state and the position where scanning stopped.
    """
    state = CoreState.START
    while pos < len(buf) and buf[pos] and state is not CoreState.INVALID:
        ch = buf[pos]
        if ch == _COMMA:
            pos += 1
            break
        if state is CoreState.START:
            if _isdigit(ch):
                state = CoreState.INT
            elif ch in b"+-":
                state = CoreState.S1
            elif ch == ord("."):
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
                counts[CoreState.INVALID] += 1
            counts[CoreState.START] += 1
        elif state is CoreState.S1:
            if _isdigit(ch):
                state = CoreState.INT
            elif ch == ord("."):
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
            counts[CoreState.S1] += 1
        elif state is CoreState.INT:
            if ch == ord("."):
                state = CoreState.FLOAT
                counts[CoreState.INT] += 1
            elif not _isdigit(ch):
                state = CoreState.INVALID
                counts[CoreState.INT] += 1
        elif state is CoreState.FLOAT:
            if ch in b"Ee":
                state = CoreState.S2
                counts[CoreState.FLOAT] += 1
            elif not _isdigit(ch):
                state = CoreState.INVALID
                counts[CoreState.FLOAT] += 1
        elif state is CoreState.S2:
            state = CoreState.EXPONENT if ch in b"+-" else CoreState.INVALID
            counts[CoreState.S2] += 1
        elif state is CoreState.EXPONENT:
            state = CoreState.SCIENTIFIC if _isdigit(ch) else CoreState.INVALID
            counts[CoreState.EXPONENT] += 1
        elif state is CoreState.SCIENTIFIC:
            if not _isdigit(ch):
                state = CoreState.INVALID
                counts[CoreState.INVALID] += 1
        pos += 1
    return state, pos


def _scan(buf: bytes, final_counts: list[int], track_counts: list[int]) -> None:
    pos = 0
    while pos < len(buf) and buf[pos]:
        state, pos = state_transition(buf, pos, track_counts)
        final_counts[state] += 1


def _corrupt(buf: bytearray, blksize: int, step: int, key: int) -> None:
    key &= 0xFF
    for pos in range(0, min(blksize, len(buf)), step):
        if buf[pos] != _COMMA:
            buf[pos] ^= key


def bench_state(blksize: int, buf: bytearray, seed1: int, seed2: int, step: int, crc: int) -> int:
    """Scan the input, corrupt it, scan again, undo the corruption and CRC the counts.

    The buffer is restored only when ``seed1`` equals ``seed2``.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    final_counts = [0] * _NUM_STATES
    track_counts = [0] * _NUM_STATES

    _scan(buf, final_counts, track_counts)
    _corrupt(buf, blksize, step, seed1)
    _scan(buf, final_counts, track_counts)
    _corrupt(buf, blksize, step, seed2)

    for final, track in zip(final_counts, track_counts):
        crc = crcu32(final, crc)
        crc = crcu32(track, crc)
    return crc