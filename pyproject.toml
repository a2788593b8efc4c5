[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ambench"
version = "0.1.0"
description = "CoreMark and MicroBench CPU benchmark workloads with self-validating checksums"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "coremark", "microbench", "cpu", "performance"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ambench-coremark = "ambench.coremark.runner:main"

[tool.hatch.build.targets.wheel]
packages = ["ambench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
