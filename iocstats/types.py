"""Value records, categories and errors shared by the statistics readers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

NOT_IMPLEMENTED = "<not implemented>"
NOT_AVAILABLE = "<not available>"

# Environment variables that describe how the process was started.
STARTUP = "STARTUP"
ST_CMD = "ST_CMD"
ENGINEER = "ENGINEER"
LOCATION = "LOCATION"

# Number of buffer cluster size classes reported per pool.
CLUSTER_SIZES = 2


def version_int(version: int, revision: int, modification: int, patch: int) -> int:
    """Pack a four-part version into one comparable integer."""
    return (version << 24) | (revision << 16) | (modification << 8) | patch


class StatType(IntEnum):
    """Categories of values, each refreshed at its own rate."""

    MEMORY = 0
    LOAD = 1
    FD = 2
    CA = 3
    QUEUE = 4
    STATIC = 5


TOTAL_TYPES = len(StatType)


class Pool(IntEnum):
    """Network buffer pools."""

    DATA = 0
    SYS = 1


class StatsUnavailable(Exception):
    """Raised when a statistic cannot be obtained on this system.

    ``fallback`` holds the placeholder value a display may show instead.
    """

    def __init__(self, message: str = NOT_AVAILABLE, fallback: object = None) -> None:
        super().__init__(message)
        self.fallback = fallback


@dataclass
class MemInfo:
    """Memory usage figures, in bytes and blocks."""

    num_bytes_total: float = 0.0
    num_bytes_free: float = 0.0
    num_bytes_alloc: float = 0.0
    num_blocks_free: float = 0.0
    num_blocks_alloc: float = 0.0
    max_block_size_free: float = 0.0


@dataclass
class FdInfo:
    """File descriptors in use and the most that may be open."""

    used: int = 0
    max: int = 0


@dataclass
class IfErrInfo:
    """Accumulated network interface input and output errors."""

    ierrors: int = 0
    oerrors: int = 0


@dataclass
class LoadInfo:
    """CPU count, whole-machine load and this process's load, in percent."""

    no_of_cpus: int = 0
    cpu_load: float = 0.0
    ioc_load: float = 0.0