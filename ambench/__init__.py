"""CoreMark and MicroBench CPU benchmark workloads."""

__version__ = "0.1.0"