"""MD5 digest kernel of MicroBench."""

import math
import struct
from typing import Optional

from ambench.microbench.common import BenchRandom, Setting, checksum

_M32 = 0xFFFFFFFF

_K = tuple(int(abs(math.sin(i + 1)) * 2**32) & _M32 for i in range(64))
_R = (7, 12, 17, 22) * 4 + (5, 9, 14, 20) * 4 + (4, 11, 16, 23) * 4 + (6, 10, 15, 21) * 4


def _rotl(value: int, count: int) -> int:
    return ((value << count) | (value >> (32 - count))) & _M32


def md5_digest(data: bytes) -> bytes:
    """Return the 16-byte MD5 digest of ``data``."""
    message = bytearray(data)
    length = len(message)
    message.append(0x80)
    while len(message) % 64 != 56:
        message.append(0)
    message += struct.pack("<II", (length * 8) & _M32, (length >> 29) & _M32)

    h0, h1, h2, h3 = 0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476
    for offset in range(0, len(message), 64):
        w = struct.unpack_from("<16I", message, offset)
        a, b, c, d = h0, h1, h2, h3
        for i in range(64):
            if i < 16:
                f = (b & c) | (~b & d)
                g = i
            elif i < 32:
                f = (d & b) | (~d & c)
                g = (5 * i + 1) % 16
            elif i < 48:
                f = b ^ c ^ d
                g = (3 * i + 5) % 16
            else:
                f = (c ^ (b | ~d)) & _M32
                g = (7 * i) % 16
            a, b, c, d = d, (b + _rotl((a + f + _K[i] + w[g]) & _M32, _R[i])) & _M32, b, c
        h0 = (h0 + a) & _M32
        h1 = (h1 + b) & _M32
        h2 = (h2 + c) & _M32
        h3 = (h3 + d) & _M32
    return struct.pack("<4I", h0, h1, h2, h3)


class Md5Bench:
    """Digest a pseudo-random byte string."""

    name = "md5"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.message = b""
        self.digest: Optional[bytes] = None

    def prepare(self) -> None:
        rng = BenchRandom()
        rng.srand(1)
        self.message = bytes(rng.rand() & 0xFF for _ in range(self.setting.size))
        self.digest = None

    def run(self) -> None:
        self.digest = md5_digest(self.message)

    def validate(self) -> bool:
        if self.digest is None:
            return False
        return checksum(self.digest) == self.setting.checksum