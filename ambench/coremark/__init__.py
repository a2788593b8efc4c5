"""CoreMark: list, matrix and state-machine workloads with CRC validation and a runner."""