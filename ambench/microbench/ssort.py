"""Suffix array construction with the skew (DC3) algorithm."""

from itertools import accumulate
from typing import Optional

from ambench.microbench.common import BenchRandom, Setting, checksum, pack_u32

_ALPHABET = 26


def _radix_pass(a: list[int], s: list[int], shift: int, n: int, k: int) -> list[int]:
    """Stably sort ``a[:n]`` by the keys ``s[x + shift]`` in ``0..k``."""
    keys = [s[x + shift] for x in a[:n]]
    counts = [0] * (k + 1)
    for key in keys:
        counts[key] += 1
    starts = list(accumulate(counts, initial=0))
    out = [0] * n
    for x, key in zip(a[:n], keys):
        out[starts[key]] = x
        starts[key] += 1
    return out


def _skew(s: list[int], n: int, k: int) -> list[int]:
    n0, n1, n2 = (n + 2) // 3, (n + 1) // 3, n // 3
    n02 = n0 + n2
    s12 = [0] * (n02 + 3)
    sa12 = [0] * (n02 + 3)
    s0 = [0] * n0

    positions = [i for i in range(n + (n0 - n1)) if i % 3 != 0]
    s12[:len(positions)] = positions

    sa12[:n02] = _radix_pass(s12, s, 2, n02, k)
    s12[:n02] = _radix_pass(sa12, s, 1, n02, k)
    sa12[:n02] = _radix_pass(s12, s, 0, n02, k)

    name = 0
    last = (-1, -1, -1)
    for p in sa12[:n02]:
        triple = (s[p], s[p + 1], s[p + 2])
        if triple != last:
            name += 1
            last = triple
        if p % 3 == 1:
            s12[p // 3] = name
        else:
            s12[p // 3 + n0] = name

    if name < n02:
        sa12[:n02] = _skew(s12, n02, name)
        for rank, p in enumerate(sa12[:n02], start=1):
            s12[p] = rank
    else:
        for i, value in enumerate(s12[:n02]):
            sa12[value - 1] = i

    mod0 = [3 * p for p in sa12[:n02] if p < n0]
    s0[:len(mod0)] = mod0
    sa0 = _radix_pass(s0, s, 0, n0, k)

    def position12(t: int) -> int:
        return sa12[t] * 3 + 1 if sa12[t] < n0 else (sa12[t] - n0) * 3 + 2

    sa = [0] * n
    p = 0
    t = n0 - n1
    k_out = 0
    while k_out < n:
        i = position12(t)
        j = sa0[p]
        if sa12[t] < n0:
            smaller = (s[i], s12[sa12[t] + n0]) <= (s[j], s12[j // 3])
        else:
            smaller = ((s[i], s[i + 1], s12[sa12[t] - n0 + 1])
                       <= (s[j], s[j + 1], s12[j // 3 + n0]))
        if smaller:
            sa[k_out] = i
            t += 1
            if t == n02:
                k_out += 1
                while p < n0:
                    sa[k_out] = sa0[p]
                    p += 1
                    k_out += 1
        else:
            sa[k_out] = j
            p += 1
            if p == n0:
                k_out += 1
                while t < n02:
                    sa[k_out] = position12(t)
                    t += 1
                    k_out += 1
        k_out += 1
    return sa


def suffix_array(s, n: int, k: int) -> list[int]:
    """Return the suffix array of ``s[:n]`` whose symbols lie in ``0..k``.

    The text is padded with three zero symbols; ``n`` must be at least 2.
    """
    if n < 2:
        raise ValueError("text must have at least two symbols")
    text = list(s[:n])
    if len(text) < n:
        raise ValueError("text is shorter than n")
    if any(not 0 <= symbol <= k for symbol in text):
        raise ValueError("symbol outside the alphabet")
    return _skew(text + [0, 0, 0], n, k)


class SsortBench:
    """Build the suffix array of a pseudo-random text."""

    name = "ssort"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.text: list[int] = []
        self.result: Optional[list[int]] = None

    def prepare(self) -> None:
        rng = BenchRandom()
        rng.srand(1)
        self.text = [rng.rand() % _ALPHABET for _ in range(self.setting.size)]
        self.result = None

    def run(self) -> None:
        self.result = suffix_array(self.text, self.setting.size, _ALPHABET)

    def validate(self) -> bool:
        if self.result is None:
            return False
        return checksum(pack_u32(self.result)) == self.setting.checksum