"""CoreMark driver: seed handling, data set-up, timing, validation and report."""

import argparse
import platform
import time
from dataclasses import dataclass, field
from typing import Optional

from ambench.coremark.crc import crc16, crcu16, parse_value
from ambench.coremark.listbench import CoreResults, bench_list, list_init
from ambench.coremark.matrix import init_matrix
from ambench.coremark.state import init_state

ID_LIST = 1 << 0
ID_MATRIX = 1 << 1
ID_STATE = 1 << 2
ALL_ALGORITHMS_MASK = ID_LIST | ID_MATRIX | ID_STATE
NUM_ALGORITHMS = 3

TOTAL_DATA_SIZE = 2 * 1000
ITERATIONS = 1000

# Seeds used when none are given: the performance-run parameters.
DEFAULT_SEEDS = (0x0, 0x0, 0x66)

LIST_KNOWN_CRC = (0xD4B0, 0x3340, 0x6A79, 0xE714, 0xE3C1)
MATRIX_KNOWN_CRC = (0xBE52, 0x1199, 0x5608, 0x1FD7, 0x0747)
STATE_KNOWN_CRC = (0x5E47, 0x39BF, 0xE5A4, 0x8E3A, 0x8D84)

_KNOWN_RUNS = {
    0x8A02: (0, "6k performance run parameters for coremark."),
    0x7B05: (1, "6k validation run parameters for coremark."),
    0x4EAF: (2, "Profile generation run parameters for coremark."),
    0xE9F5: (3, "2K performance run parameters for coremark."),
    0x18F2: (4, "2K validation run parameters for coremark."),
}

_M32 = 0xFFFFFFFF


def _s16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _s32(value: int) -> int:
    return ((value + 0x80000000) & _M32) - 0x80000000


@dataclass
class CoreMarkReport:
    """Outcome of one CoreMark run."""

    seed1: int
    seed2: int
    seed3: int
    size: int
    iterations: int
    execs: int
    total_time_ms: int
    seedcrc: int
    crclist: int
    crcmatrix: int
    crcstate: int
    crc: int
    known_id: Optional[int]
    errors: int
    marks: Optional[int] = None
    messages: list[str] = field(default_factory=list)


def iterate(results: CoreResults) -> None:
    """Run the list benchmark ``results.iterations`` times, accumulating CRCs."""
    results.crc = 0
    results.crclist = 0
    results.crcmatrix = 0
    results.crcstate = 0
    for i in range(results.iterations):
        crc = bench_list(results, 1)
        results.crc = crcu16(crc, results.crc)
        crc = bench_list(results, -1)
        results.crc = crcu16(crc, results.crc)
        if i == 0:
            results.crclist = results.crc


def _uptime_ms() -> int:
    return time.monotonic_ns() // 1_000_000


def _timed_iterate(results: CoreResults) -> int:
    start = _uptime_ms()
    iterate(results)
    return (_uptime_ms() - start) & _M32


def run_coremark(seed1: int = DEFAULT_SEEDS[0], seed2: int = DEFAULT_SEEDS[1],
                 seed3: int = DEFAULT_SEEDS[2], iterations: int = ITERATIONS,
                 execs: int = 0, total_size: int = TOTAL_DATA_SIZE) -> CoreMarkReport:
    """Set up the data, run and time the benchmark, and validate known seeds.

    ``iterations`` of 0 picks a count automatically; ``execs`` of 0 selects
    every algorithm.
    """
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    seed1, seed2, seed3 = _s16(seed1), _s16(seed2), _s16(seed3)
    execs &= _M32
    if execs == 0:
        execs = ALL_ALGORITHMS_MASK
    if (seed1, seed2, seed3) == (0, 0, 0):
        seed3 = 0x66
    if (seed1, seed2, seed3) == (1, 0, 0):
        seed1, seed2, seed3 = 0x3415, 0x3415, 0x66

    num_algorithms = bin(execs & ALL_ALGORITHMS_MASK).count("1")
    if num_algorithms == 0:
        raise ValueError("no known algorithm selected")
    if not execs & ID_LIST:
        raise ValueError("the list algorithm drives the benchmark and must be selected")

    size = total_size // num_algorithms
    results = CoreResults(seed1=seed1, seed2=seed2, seed3=seed3, size=size,
                          iterations=iterations, execs=execs)
    results.list = list_init(size, seed1)
    # The list kernel calls into the matrix and state kernels, so both are
    # always given well-defined data.
    results.mat = init_matrix(size, _s32(seed1 | (seed2 << 16)))
    results.state = init_state(size, seed1)

    if results.iterations == 0:
        secs_passed = 0
        results.iterations = 1
        while secs_passed < 1:
            results.iterations *= 10
            secs_passed = _timed_iterate(results)
        divisor = secs_passed or 1
        results.iterations *= 1 + 10 // divisor

    total_time = _timed_iterate(results)

    seedcrc = 0
    for value in (seed1, seed2, seed3, size):
        seedcrc = crc16(value, seedcrc)

    messages: list[str] = []
    known_id: Optional[int] = None
    total_errors = -1
    if seedcrc in _KNOWN_RUNS:
        known_id, label = _KNOWN_RUNS[seedcrc]
        messages.append(label)
        total_errors = 0
        checks = (
            (ID_LIST, "list", results.crclist, LIST_KNOWN_CRC[known_id]),
            (ID_MATRIX, "matrix", results.crcmatrix, MATRIX_KNOWN_CRC[known_id]),
            (ID_STATE, "state", results.crcstate, STATE_KNOWN_CRC[known_id]),
        )
        for bit, name, got, expected in checks:
            if execs & bit and got != expected:
                messages.append(f"[0]ERROR! {name} crc 0x{got:04x} - should be 0x{expected:04x}")
                results.err += 1
        total_errors += results.err

    marks = None
    if total_errors == 0 and total_time > 0:
        marks = 2921400 // total_time * results.iterations // 1000

    return CoreMarkReport(
        seed1=seed1, seed2=seed2, seed3=seed3, size=size,
        iterations=results.iterations, execs=execs, total_time_ms=total_time,
        seedcrc=seedcrc, crclist=results.crclist, crcmatrix=results.crcmatrix,
        crcstate=results.crcstate, crc=results.crc, known_id=known_id,
        errors=total_errors, marks=marks, messages=messages,
    )


def _format_report(report: CoreMarkReport) -> list[str]:
    lines = list(report.messages)
    lines.append(f"CoreMark Size    : {report.size}")
    lines.append(f"Total time (ms)  : {report.total_time_ms}")
    lines.append(f"Iterations       : {report.iterations}")
    lines.append(f"Compiler version : Python {platform.python_version()}")
    lines.append(f"seedcrc          : 0x{report.seedcrc:04x}")
    if report.execs & ID_LIST:
        lines.append(f"[0]crclist       : 0x{report.crclist:04x}")
    if report.execs & ID_MATRIX:
        lines.append(f"[0]crcmatrix     : 0x{report.crcmatrix:04x}")
    if report.execs & ID_STATE:
        lines.append(f"[0]crcstate      : 0x{report.crcstate:04x}")
    lines.append(f"[0]crcfinal      : 0x{report.crc:04x}")
    lines.append(f"Finished in {report.total_time_ms} ms.")
    if report.errors == 0:
        marks = "-" if report.marks is None else str(report.marks)
        lines.append("=" * 50)
        lines.append(f"CoreMark PASS       {marks} Marks")
        lines.append("                vs. 100000 Marks (i7-7700K @ 4.20GHz)")
    elif report.errors > 0:
        lines.append("Errors detected")
    else:
        lines.append("Cannot validate operation for these seed values, "
                     "please compare with results on a known platform.")
    return lines


def main(argv=None) -> int:
    """Run CoreMark from the command line; return the error count."""
    parser = argparse.ArgumentParser(prog="coremark", description="Run the CoreMark benchmark.")
    parser.add_argument("seed1", nargs="?", default=str(DEFAULT_SEEDS[0]))
    parser.add_argument("seed2", nargs="?", default=str(DEFAULT_SEEDS[1]))
    parser.add_argument("seed3", nargs="?", default=str(DEFAULT_SEEDS[2]))
    parser.add_argument("iterations", nargs="?", default=str(ITERATIONS))
    parser.add_argument("execs", nargs="?", default="0")
    args = parser.parse_args(argv)

    iterations = parse_value(args.iterations)
    print(f"Running CoreMark for {iterations} iterations")
    try:
        report = run_coremark(parse_value(args.seed1), parse_value(args.seed2),
                              parse_value(args.seed3), iterations,
                              parse_value(args.execs))
    except ValueError as exc:
        print(f"coremark: {exc}")
        return 1
    for line in _format_report(report):
        print(line)
    return report.errors


if __name__ == "__main__":
    raise SystemExit(main())