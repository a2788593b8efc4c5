"""Shared settings, random numbers, checksums and score helpers for MicroBench."""

import struct
from dataclasses import dataclass

KB = 1024
MB = 1024 * 1024

REF_CPU = "i9-9900K @ 3.60GHz"
REF_SCORE = 100000
REPEAT = 1

SETTING_NAMES = ("test", "train", "ref", "huge")

_M32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Setting:
    """Input size, memory limit, reference time (ms) and expected checksum."""

    size: int
    mlim: int
    ref: int
    checksum: int


def _settings(*rows: tuple[int, int, int, int]) -> tuple[Setting, ...]:
    return tuple(Setting(*row) for row in rows)


SETTINGS: dict[str, tuple[Setting, ...]] = {
    "qsort": _settings((100, 1 * KB, 0, 0x08467105), (30000, 128 * KB, 0, 0xA3E99FE4),
                       (100000, 640 * KB, 4404, 0xED8CFF89), (4000000, 16 * MB, 227620, 0xE6178735)),
    "queen": _settings((8, 0, 0, 0x0000005C), (11, 0, 0, 0x00000A78),
                       (12, 0, 4069, 0x00003778), (15, 0, 819996, 0x0022C710)),
    "bf": _settings((2, 32 * KB, 0, 0xA6F0079E), (25, 32 * KB, 0, 0xA88F8A65),
                    (180, 32 * KB, 16815, 0x9221E2B3), (1360, 32 * KB, 771535, 0xDB49FBDE)),
    "fib": _settings((2, 1 * KB, 0, 0x7CFEDDF0), (23, 16 * KB, 0, 0x94AD8800),
                     (91, 256 * KB, 20168, 0xEBDC5F80), (300, 2 * MB, 775012, 0xE30A6F00)),
    "sieve": _settings((100, 1 * KB, 0, 0x00000019), (200000, 32 * KB, 0, 0x00004640),
                       (10000000, 2 * MB, 34823, 0x000A2403), (80000000, 10 * MB, 301058, 0x00473FC6)),
    "15pz": _settings((0, 1 * KB, 0, 0x00000006), (1, 256 * KB, 0, 0x0000B0DF),
                      (2, 2 * MB, 5360, 0x00068B8C), (3, 64 * MB, 300634, 0x01027B4A)),
    "dinic": _settings((10, 8 * KB, 0, 0x0000019C), (80, 512 * KB, 0, 0x00004F99),
                       (128, 680 * KB, 8182, 0x0000C248), (190, 2 * MB, 671978, 0x00014695)),
    "lzip": _settings((128, 128 * KB, 0, 0xE05FC832), (50000, 1 * MB, 0, 0xDC93E90C),
                      (1048576, 4 * MB, 6795, 0x8D62C81F), (31457280, 64 * MB, 199541, 0x1B859D76)),
    "ssort": _settings((100, 4 * KB, 0, 0x4C555E09), (10000, 512 * KB, 0, 0x0DB7909B),
                       (100000, 4 * MB, 4002, 0x4F0AB431), (3000000, 64 * MB, 322232, 0xEDDBD9B6)),
    "md5": _settings((100, 1 * KB, 0, 0xF902F28F), (200000, 256 * KB, 0, 0xD4F9BC6D),
                     (10000000, 10 * MB, 15199, 0x27286A42), (64000000, 64 * MB, 97148, 0x41AB4D60)),
}

DESCRIPTIONS: dict[str, str] = {
    "qsort": "Quick sort",
    "queen": "Queen placement",
    "bf": "Brainf**k interpreter",
    "fib": "Fibonacci number",
    "sieve": "Eratosthenes sieve",
    "15pz": "A* 15-puzzle search",
    "dinic": "Dinic's maxflow algorithm",
    "lzip": "Lzip compression",
    "ssort": "Suffix sort",
    "md5": "MD5 digest",
}


class BenchRandom:
    """Linear congruential generator returning values in 0..32767."""

    def __init__(self, seed: int = 1) -> None:
        self._seed = seed & _M32

    def srand(self, seed: int) -> None:
        """Reseed the generator with the low 15 bits of ``seed``."""
        self._seed = seed & 0x7FFF

    def rand(self) -> int:
        """Return the next pseudo-random number between 0 and 32767."""
        self._seed = (self._seed * 214013 + 2531011) & _M32
        return (self._seed >> 16) & 0x7FFF


def _s32(value: int) -> int:
    return ((value + 0x80000000) & _M32) - 0x80000000


def checksum(data: bytes) -> int:
    """FNV-based 32-bit checksum over whole 4-byte words, excluding the last word."""
    view = bytes(data)
    h = 2166136261
    for start in range(0, len(view) - 4, 4):
        for byte in view[start:start + 4]:
            h = ((h ^ byte) * 16777619) & _M32
    x = _s32(h)
    x = _s32(x + (x << 13))
    x = _s32(x ^ (x >> 7))
    x = _s32(x + (x << 3))
    x = _s32(x ^ (x >> 17))
    x = _s32(x + (x << 5))
    return x & _M32


def pack_u32(values) -> bytes:
    """Pack integers as little-endian 32-bit words, wrapping each to 32 bits."""
    words = [v & _M32 for v in values]
    return struct.pack(f"<{len(words)}I", *words)


def format_time(us: int) -> str:
    """Render microseconds as milliseconds with three decimals."""
    ms, rest = divmod(us, 1000)
    return f"{ms}.{rest:03d}"


def score(ref: int, usec: int) -> int:
    """Marks for a run of ``usec`` microseconds against a reference time ``ref``."""
    if usec == 0:
        return 0
    return (REF_SCORE * ref // usec) & _M32