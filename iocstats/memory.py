"""Memory usage of the machine and of the current process."""

from __future__ import annotations

import os
from collections.abc import Iterable

from .types import MemInfo, StatsUnavailable

DEFAULT_STATM = "/proc/self/statm"
DEFAULT_MEMINFO = "/proc/meminfo"

_KIB = 1024
_TOTAL_KEY = "MemTotal:"
_FREE_KEYS = frozenset({"MemFree:", "Buffers:", "Cached:"})
_KEYS_WANTED = 1 + len(_FREE_KEYS)


def parse_statm(text: str) -> tuple[int, int]:
    """Return the total program size and resident size, in pages, from a statm file."""
    fields = text.split()
    if len(fields) < 2:
        raise ValueError("statm data needs a size and a resident page count")
    return int(fields[0]), int(fields[1])


def parse_meminfo(text: str) -> tuple[int, int]:
    """Return total and free bytes from a meminfo listing.

    Free memory counts free, buffer and cache memory. Reading stops once
    all four figures have been seen.
    """
    total = 0
    free = 0
    found = 0
    for line in text.splitlines():
        if found >= _KEYS_WANTED:
            break
        fields = line.split()
        if len(fields) < 2:
            continue
        title, value = fields[0], fields[1]
        try:
            amount = int(value) * _KIB
        except ValueError:
            continue
        if title == _TOTAL_KEY:
            total = amount
            found += 1
        elif title in _FREE_KEYS:
            free += amount
            found += 1
    return total, free


def _read_text(path: str | os.PathLike) -> str | None:
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            return handle.read()
    except OSError:
        return None


def proc_memory_usage(statm_path: str | os.PathLike | None = None,
                      meminfo_path: str | os.PathLike | None = None,
                      page_size: int | None = None) -> MemInfo:
    """Resident bytes of this process and total and free bytes of the machine.

    Figures whose file cannot be read are reported as zero.
    """
    size = os.sysconf("SC_PAGESIZE") if page_size is None else page_size

    resident = 0
    statm = _read_text(DEFAULT_STATM if statm_path is None else statm_path)
    if statm is not None:
        try:
            _size, resident = parse_statm(statm)
        except ValueError:
            resident = 0

    total = free = 0
    meminfo = _read_text(DEFAULT_MEMINFO if meminfo_path is None else meminfo_path)
    if meminfo is not None:
        total, free = parse_meminfo(meminfo)

    return MemInfo(
        num_bytes_total=float(total),
        num_bytes_free=float(free),
        num_bytes_alloc=float(resident) * float(size),
    )


def windows_memory_usage(total_phys: int, avail_phys: int, private_usage: int) -> MemInfo:
    """Physical memory figures and the private bytes committed by this process."""
    return MemInfo(
        num_bytes_total=float(total_phys),
        num_bytes_free=float(avail_phys),
        num_bytes_alloc=float(private_usage),
    )


def partition_stats_usage(bytes_free: int, bytes_alloc: int, blocks_free: int,
                          blocks_alloc: int, max_block_free: int) -> MemInfo:
    """Memory figures from the statistics of a memory partition.

    The total is the sum of free and allocated bytes.
    """
    return MemInfo(
        num_bytes_total=float(bytes_free) + float(bytes_alloc),
        num_bytes_free=float(bytes_free),
        num_bytes_alloc=float(bytes_alloc),
        num_blocks_free=float(blocks_free),
        num_blocks_alloc=float(blocks_alloc),
        max_block_size_free=float(max_block_free),
    )


def free_list_usage(free_block_words: Iterable[int], words_allocated: int,
                    blocks_allocated: int, phys_mem_top: int) -> MemInfo:
    """Memory figures from a partition's free list of two-byte-word blocks."""
    info = MemInfo()
    for words in free_block_words:
        block_bytes = 2.0 * float(words)
        info.num_blocks_free += 1
        info.num_bytes_free += block_bytes
        info.max_block_size_free = max(info.max_block_size_free, block_bytes)
    info.num_bytes_alloc = 2.0 * float(words_allocated)
    info.num_blocks_alloc = float(blocks_allocated)
    info.num_bytes_total = float(phys_mem_top)
    return info


def workspace_usage() -> MemInfo:
    """Usage of a separate RAM workspace; not available on this system."""
    raise StatsUnavailable("workspace usage not supported", fallback=MemInfo())