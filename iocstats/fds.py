"""File descriptor usage of the current process."""

from __future__ import annotations

import os
from collections.abc import Iterable
from itertools import islice

from .types import FdInfo, StatsUnavailable

DEFAULT_FD_DIR = "/proc/self/fd"
# The first three descriptors are always stdin, stdout and stderr.
_STANDARD_FDS = 3
HANDLE_LIMIT = 16384


def _open_file_limit() -> int:
    try:
        import resource
    except ImportError as exc:
        raise StatsUnavailable("open file limit not available") from exc
    try:
        soft, _hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (OSError, ValueError) as exc:
        raise StatsUnavailable("open file limit not available") from exc
    return soft


def fd_usage(fd_dir: str | os.PathLike | None = None, limit: int | None = None) -> FdInfo:
    """Count the entries of a per-process descriptor directory.

    One entry is taken to be the descriptor used to read the directory
    itself and is not counted. ``limit`` defaults to the soft limit on
    open files.
    """
    directory = DEFAULT_FD_DIR if fd_dir is None else fd_dir
    try:
        entries = os.listdir(directory)
    except OSError as exc:
        raise StatsUnavailable(f"cannot read {os.fspath(directory)}") from exc
    used = len(entries) - 1
    maximum = _open_file_limit() if limit is None else limit
    return FdInfo(used=used, max=maximum)


def table_fd_usage(in_use: Iterable[bool], max_files: int) -> FdInfo:
    """Count used slots of a descriptor table of ``max_files`` entries.

    The three standard descriptors are always counted as used; the
    table is examined from slot 3 onwards.
    """
    used = _STANDARD_FDS + sum(1 for slot in islice(in_use, _STANDARD_FDS, max(max_files, _STANDARD_FDS)) if slot)
    return FdInfo(used=used, max=max_files)


def handle_fd_usage(handle_count: int) -> FdInfo:
    """Report an open handle count against the fixed handle limit."""
    return FdInfo(used=int(handle_count), max=HANDLE_LIMIT)


def unsupported_fd_usage() -> FdInfo:
    """Descriptor usage on a system without support for it."""
    raise StatsUnavailable("file descriptor usage not supported")