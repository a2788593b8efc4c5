import random

import pytest

from ambench.microbench.common import SETTINGS
from ambench.microbench.simple import (
    FibBench,
    QsortBench,
    QueenBench,
    SieveBench,
    count_primes,
    count_queens,
    fib_matrix_power,
    quicksort,
)


def test_quicksort_matches_sorted():
    rng = random.Random(7)
    values = [rng.randint(-1000, 1000) for _ in range(500)]
    assert quicksort(values) == sorted(values)


def test_quicksort_does_not_modify_input():
    values = [3, 1, 2, 1]
    quicksort(values)
    assert values == [3, 1, 2, 1]


def test_quicksort_empty():
    assert quicksort([]) == []


def test_count_queens_small_setting():
    setting = SETTINGS["queen"][0]
    assert count_queens(setting.size) == setting.checksum


def test_count_queens_single():
    assert count_queens(1) == 1


def test_count_queens_negative_raises():
    with pytest.raises(ValueError):
        count_queens(-1)


def test_count_primes_small_setting():
    setting = SETTINGS["sieve"][0]
    assert count_primes(setting.size) == setting.checksum


def test_count_primes_below_two():
    assert count_primes(1) == 0


def test_count_primes_two():
    assert count_primes(2) == 1


def test_count_primes_monotonic():
    counts = [count_primes(n) for n in range(50)]
    assert counts == sorted(counts)


def test_fib_power_zero_is_identity():
    result = fib_matrix_power(3, 0)
    assert result == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]


def test_fib_power_is_additive():
    a = fib_matrix_power(3, 5)
    b = fib_matrix_power(3, 7)
    combined = fib_matrix_power(3, 12)
    product = [[sum(a[i][k] * b[k][j] for k in range(3)) % 2**32 for j in range(3)]
               for i in range(3)]
    assert combined == product


def test_fib_power_negative_raises():
    with pytest.raises(ValueError):
        fib_matrix_power(2, -1)


def test_fib_order_zero_raises():
    with pytest.raises(ValueError):
        fib_matrix_power(0, 3)


@pytest.mark.parametrize("bench_cls, name", [
    (QsortBench, "qsort"),
    (QueenBench, "queen"),
    (SieveBench, "sieve"),
    (FibBench, "fib"),
])
def test_bench_validates_on_test_setting(bench_cls, name):
    bench = bench_cls(SETTINGS[name][0])
    bench.prepare()
    bench.run()
    assert bench.validate() is True


def test_qsort_bench_result_is_sorted():
    bench = QsortBench(SETTINGS["qsort"][0])
    bench.prepare()
    before = list(bench.data)
    bench.run()
    assert bench.data == sorted(before)


def test_fib_bench_fails_before_run():
    bench = FibBench(SETTINGS["fib"][0])
    bench.prepare()
    assert bench.validate() is False