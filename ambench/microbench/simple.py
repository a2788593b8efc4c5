"""Small MicroBench kernels: quick sort, N-queens, prime sieve and linear recurrences."""

from typing import Optional

from ambench.microbench.common import BenchRandom, Setting, checksum, pack_u32

_M32 = 0xFFFFFFFF

# Index of the term computed by the Fibonacci-like recurrence benchmark.
FIB_POWER = 2147483603


def _s32(value: int) -> int:
    return ((value + 0x80000000) & _M32) - 0x80000000


def quicksort(values) -> list[int]:
    """Return a sorted copy of ``values`` using a first-element-pivot quick sort."""
    items = list(values)
    pending = [(0, len(items))]
    while pending:
        left, right = pending.pop()
        if left >= right:
            continue
        pivot_value = items[left]
        pivot = left
        for j in range(left + 1, right):
            if items[j] < pivot_value:
                pivot += 1
                items[pivot], items[j] = items[j], items[pivot]
        items[pivot], items[left] = items[left], items[pivot]
        pending.append((pivot + 1, right))
        pending.append((left, pivot))
    return items


def count_queens(n: int) -> int:
    """Count the placements of ``n`` non-attacking queens on an n x n board."""
    if n < 0:
        raise ValueError("board size must not be negative")
    full = (1 << n) - 1

    def place(row: int, ld: int, rd: int) -> int:
        if row == full:
            return 1
        free = full & ~(row | ld | rd)
        total = 0
        while free:
            bit = free & -free
            free -= bit
            total += place(row | bit, ((ld | bit) << 1) & full, (rd | bit) >> 1)
        return total

    return place(0, 0, 0)


def count_primes(n: int) -> int:
    """Count the primes in ``2..n`` with the sieve of Eratosthenes."""
    if n < 2:
        return 0
    flags = bytearray([1]) * (n + 1)
    i = 2
    while i * i <= n:
        if flags[i]:
            start = i + i
            flags[start::i] = bytes(len(range(start, n + 1, i)))
        i += 1
    return sum(flags[2:])


def _mat_mul(a: list[list[int]], b: list[list[int]]) -> list[list[int]]:
    columns = list(zip(*b))
    return [[sum(x * y for x, y in zip(row, col)) & _M32 for col in columns] for row in a]


def fib_matrix_power(m: int, n: int) -> list[list[int]]:
    """Raise the m x m companion matrix of ``f(k) = f(k-1) + ... + f(k-m)`` to ``n`` mod 2**32."""
    if m < 1:
        raise ValueError("matrix order must be at least 1")
    if n < 0:
        raise ValueError("exponent must not be negative")
    step = [[1 if (i == m - 1 or j == i + 1) else 0 for j in range(m)] for i in range(m)]
    result = [[1 if i == j else 0 for j in range(m)] for i in range(m)]
    while n > 0:
        if n & 1:
            result = _mat_mul(result, step)
        step = _mat_mul(step, step)
        n >>= 1
    return result


class QsortBench:
    """Sort pseudo-random 32-bit integers."""

    name = "qsort"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.data: list[int] = []

    def prepare(self) -> None:
        rng = BenchRandom()
        rng.srand(1)
        self.data = []
        for _ in range(self.setting.size):
            high = rng.rand()
            low = rng.rand()
            self.data.append(_s32((high << 16) | low))

    def run(self) -> None:
        self.data = quicksort(self.data)

    def validate(self) -> bool:
        return checksum(pack_u32(self.data)) == self.setting.checksum


class QueenBench:
    """Count N-queens placements."""

    name = "queen"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.answer = 0

    def prepare(self) -> None:
        self.answer = 0

    def run(self) -> None:
        self.answer = count_queens(self.setting.size)

    def validate(self) -> bool:
        return (self.answer & _M32) == self.setting.checksum


class SieveBench:
    """Count primes up to the input size."""

    name = "sieve"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.answer: Optional[int] = None

    def prepare(self) -> None:
        self.answer = None

    def run(self) -> None:
        self.answer = count_primes(self.setting.size)

    def validate(self) -> bool:
        return self.answer == self.setting.checksum


class FibBench:
    """Compute a far term of an m-term linear recurrence by matrix powering."""

    name = "fib"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.result: Optional[list[list[int]]] = None

    def prepare(self) -> None:
        self.result = None

    def run(self) -> None:
        self.result = fib_matrix_power(self.setting.size, FIB_POWER)

    def validate(self) -> bool:
        if self.result is None:
            return False
        return self.result[-1][-1] == self.setting.checksum