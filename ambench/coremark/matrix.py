"""Matrix manipulation kernel of CoreMark with 16-bit inputs and 32-bit results."""

from dataclasses import dataclass, field

from ambench.coremark.crc import crc16


def _s16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _s32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _c_mod(value: int, modulus: int) -> int:
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


@dataclass
class MatrixParams:
    """Dimension and storage of the three N x N matrices (row-major)."""

    n: int
    a: list[int] = field(default_factory=list)
    b: list[int] = field(default_factory=list)
    c: list[int] = field(default_factory=list)


def init_matrix(blksize: int, seed: int) -> MatrixParams:
    """Build matrices A and B from the seed, sized to fit ``blksize`` bytes."""
    if seed == 0:
        seed = 1
    i = 0
    j = 0
    while j < blksize:
        i += 1
        j = i * i * 2 * 4
    n = i - 1

    a: list[int] = []
    b: list[int] = []
    order = 1
    for _ in range(n * n):
        seed = _c_mod(_s32(order * seed), 65536)
        val = _s16(seed + order)
        b.append(val)
        val = _s16(val + order) & 0xFF
        a.append(val)
        order += 1
    return MatrixParams(n=n, a=a, b=b, c=[0] * (n * n))


def matrix_add_const(a: list[int], val: int) -> None:
    """Add ``val`` to every element of ``a`` in place."""
    a[:] = [_s16(x + val) for x in a]


def matrix_mul_const(c: list[int], a: list[int], val: int) -> None:
    """Store ``a * val`` element-wise into ``c``."""
    c[:len(a)] = [_s32(x * val) for x in a]


def matrix_mul_vect(n: int, c: list[int], a: list[int], b: list[int]) -> None:
    """Store the product of ``a`` and the first column-vector of ``b`` into ``c[:n]``."""
    for i in range(n):
        row = a[i * n:(i + 1) * n]
        c[i] = _s32(sum(x * y for x, y in zip(row, b[:n])))


def matrix_mul_matrix(n: int, c: list[int], a: list[int], b: list[int]) -> None:
    """Store the matrix product ``a @ b`` into ``c``."""
    for i in range(n):
        row = a[i * n:(i + 1) * n]
        for j in range(n):
            column = b[j::n]
            c[i * n + j] = _s32(sum(x * y for x, y in zip(row, column)))


def _bit_extract(value: int, start: int, width: int) -> int:
    return (value >> start) & ((1 << width) - 1)


def matrix_mul_matrix_bitextract(n: int, c: list[int], a: list[int], b: list[int]) -> None:
    """Multiply ``a`` by ``b`` and accumulate products of bit fields of each term."""
    for i in range(n):
        row = a[i * n:(i + 1) * n]
        for j in range(n):
            total = 0
            for x, y in zip(row, b[j::n]):
                tmp = _s32(x * y)
                total = _s32(total + _bit_extract(tmp, 2, 4) * _bit_extract(tmp, 5, 7))
            c[i * n + j] = total


def matrix_sum(c: list[int], clipval: int) -> int:
    """Score the elements of ``c``: +1 per increase, +10 each time the running sum passes ``clipval``."""
    tmp = 0
    prev = 0
    ret = 0
    for cur in c:
        tmp = _s32(tmp + cur)
        if tmp > clipval:
            ret += 10
            tmp = 0
        elif cur > prev:
            ret += 1
        prev = cur
    return _s16(ret)


def matrix_test(params: MatrixParams, val: int) -> int:
    """Run the matrix operations and return a signed 16-bit CRC of their sums.

    Matrix A is returned to its original contents.
    """
    n, a, b, c = params.n, params.a, params.b, params.c
    val = _s16(val)
    clipval = _s16(0xF000 | val)
    crc = 0

    matrix_add_const(a, val)
    matrix_mul_const(c, a, val)
    crc = crc16(matrix_sum(c, clipval), crc)
    matrix_mul_vect(n, c, a, b)
    crc = crc16(matrix_sum(c, clipval), crc)
    matrix_mul_matrix(n, c, a, b)
    crc = crc16(matrix_sum(c, clipval), crc)
    matrix_mul_matrix_bitextract(n, c, a, b)
    crc = crc16(matrix_sum(c, clipval), crc)
    matrix_add_const(a, _s16(-val))
    return _s16(crc)


def bench_matrix(params: MatrixParams, seed: int, crc: int) -> int:
    """Run one matrix benchmark step and fold its result into ``crc``."""
    return crc16(matrix_test(params, _s16(seed)), crc)