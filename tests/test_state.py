import pytest

from ambench.coremark.state import CoreState, bench_state, init_state, state_transition

PATTERNS = {
    b"5012", b"1234", b"-874", b"+122",
    b"35.54400", b".1234500", b"-110.700", b"+0.64400",
    b"5.500e+3", b"-.123e-2", b"-87e+832", b"+0.6e-12",
    b"T0.3e-1F", b"-T.T++Tq", b"1T3.4e4z", b"34.0e-T^",
}


def _counts():
    return [0] * len(CoreState)


@pytest.mark.parametrize(
    "token, expected",
    [
        (b"5012", CoreState.INT),
        (b"-874", CoreState.INT),
        (b"35.54400", CoreState.FLOAT),
        (b".1234500", CoreState.FLOAT),
        (b"5.500e+3", CoreState.SCIENTIFIC),
        (b"+0.6e-12", CoreState.SCIENTIFIC),
        (b"T0.3e-1F", CoreState.INVALID),
        (b"34.0e-T^", CoreState.INVALID),
    ],
)
def test_classifies_source_patterns(token, expected):
    state, _ = state_transition(token + b",", 0, _counts())
    assert state is expected


def test_comma_is_consumed():
    buf = b"1234,5012,"
    counts = _counts()
    state, pos = state_transition(buf, 0, counts)
    assert state is CoreState.INT
    assert pos == len(b"1234,")
    assert counts[CoreState.START] == 1


def test_signed_int_counts():
    counts = _counts()
    state_transition(b"-874,", 0, counts)
    assert counts[CoreState.START] == 1
    assert counts[CoreState.S1] == 1
    assert sum(counts) == 2


def test_invalid_stops_early():
    counts = _counts()
    state, pos = state_transition(b"T0.3e-1F,", 0, counts)
    assert state is CoreState.INVALID
    assert pos == 1
    assert counts[CoreState.INVALID] == 1


def test_init_state_layout():
    buf = init_state(666, 0x3415)
    assert len(buf) == 666
    assert buf[-1] == 0
    tokens = [t for t in bytes(buf).rstrip(b"\0").split(b",") if t]
    assert tokens
    assert all(t in PATTERNS for t in tokens)


def test_init_state_rejects_empty():
    with pytest.raises(ValueError):
        init_state(0, 1)


def test_bench_state_restores_with_equal_seeds():
    buf = init_state(666, 0x3415)
    original = bytes(buf)
    crc = bench_state(666, buf, 0x3415, 0x3415, 0x22, 0)
    assert bytes(buf) == original
    assert 0 <= crc <= 0xFFFF


def test_bench_state_deterministic():
    first = bench_state(666, init_state(666, 8), 8, 8, 0x44, 0x1234)
    second = bench_state(666, init_state(666, 8), 8, 8, 0x44, 0x1234)
    assert first == second


def test_bench_state_different_seeds_leave_changes():
    buf = init_state(666, 0)
    original = bytes(buf)
    bench_state(666, buf, 0x15, 0x00, 0x22, 0)
    assert bytes(buf) != original


def test_bench_state_rejects_bad_step():
    with pytest.raises(ValueError):
        bench_state(10, init_state(10, 1), 1, 1, 0, 0)