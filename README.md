# ambench

CPU benchmark workloads in pure Python. Each workload checks its own results.

- **CoreMark** runs list processing, matrix arithmetic and a number-recognising state
  machine. It folds each workload's output into a 16-bit CRC and compares the CRCs with
  known values.
- **MicroBench workloads** cover quick sort, N-queens, a Brainf**k interpreter, a linear
  recurrence computed by matrix power, the Eratosthenes sieve, an A* 15-puzzle search,
  Dinic's max flow, suffix sorting and MD5. Each workload has four input sizes
  (`test`, `train`, `ref`, `huge`) and a fixed expected checksum for each.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Command line

```
ambench-coremark
ambench-coremark 0x3415 0x3415 0x66 10
```

`ambench-coremark` takes up to five optional positional arguments: `seed1`, `seed2`,
`seed3`, `iterations` and `execs`. Each may be decimal or `0x` hex, and may end in
`K` or `M`. With no arguments it uses the performance-run seeds `0 0 0x66` and 1000
iterations. An `iterations` of 0 picks a count automatically. An `execs` of 0 selects
every algorithm.

The command prints the CRC of each workload, the final CRC and the total time. When the
seeds are a known set it also checks the CRCs against their expected values. The exit
status is the number of CRC mismatches. It is 0 when every CRC matches and -1 when the
seeds cannot be validated.

## Library use

```python
from ambench.coremark.runner import run_coremark
from ambench.coremark.crc import crc16
from ambench.microbench.common import SETTINGS, SETTING_NAMES
from ambench.microbench.simple import QueenBench, count_queens
from ambench.microbench.md5 import md5_digest

report = run_coremark(0x3415, 0x3415, 0x66, 10, 0, 2000)
print(hex(report.seedcrc), report.errors)

print(count_queens(8))          # 92
print(md5_digest(b"").hex())

bench = QueenBench(SETTINGS["queen"][SETTING_NAMES.index("test")])
bench.prepare()
bench.run()
print(bench.validate())         # True
```

Every MicroBench workload class takes a `Setting` and has `prepare()`, `run()` and
`validate()`. The classes are:

- `QsortBench`, `QueenBench`, `SieveBench` and `FibBench` in `ambench.microbench.simple`
- `Md5Bench` in `ambench.microbench.md5`
- `SsortBench` in `ambench.microbench.ssort`
- `DinicBench` in `ambench.microbench.dinic`
- `BfBench` in `ambench.microbench.bf`
- `PuzzleBench` in `ambench.microbench.puzzle`

`ambench.microbench.common` holds the settings table `SETTINGS`, the `BenchRandom`
generator, `checksum`, `pack_u32`, `format_time` and `score`.

The CoreMark kernels can also be used on their own, from `ambench.coremark.matrix`,
`ambench.coremark.state`, `ambench.coremark.listbench` and `ambench.coremark.crc`.

## What is not included

- There is no command or driver that runs the whole MicroBench suite and totals a score.
  To run the workloads, call their classes directly, as shown above, and use `score` and
  `format_time` to report on them.
- There is no compression workload.