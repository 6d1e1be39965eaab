[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iocstats"
version = "0.1.0"
description = "Process and host statistics for long-running services: CPU load, memory, file descriptors, host, system and boot info"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitoring", "statistics", "cpu", "memory", "file-descriptors", "ioc"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["iocstats"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
