"""MicroBench workloads: small algorithmic benchmarks, each with fixed checksums."""