"""Working directory, host name and process identifiers."""

from __future__ import annotations

import os
import socket
from collections.abc import Mapping

from .types import NOT_AVAILABLE, StatsUnavailable

# Longest working directory reported, including the terminating byte.
MAX_CWD_SIZE = 1024


def working_directory() -> str:
    """Current working directory of the process."""
    try:
        path = os.getcwd()
    except OSError as exc:
        raise StatsUnavailable(NOT_AVAILABLE, fallback=NOT_AVAILABLE) from exc
    if len(os.fsencode(path)) >= MAX_CWD_SIZE:
        raise StatsUnavailable("working directory too long", fallback=NOT_AVAILABLE)
    return path


def hostname() -> str:
    """Name of the host the process runs on."""
    try:
        return socket.gethostname()
    except OSError as exc:
        raise StatsUnavailable(NOT_AVAILABLE, fallback=NOT_AVAILABLE) from exc


def windows_hostname(environ: Mapping[str, str] | None = None) -> str:
    """Host name from the COMPUTERNAME variable.

    The name is never reported as valid: this always raises, with the
    variable's value (or None) as the fallback.
    """
    env = os.environ if environ is None else environ
    raise StatsUnavailable("host name not reported", fallback=env.get("COMPUTERNAME"))


def process_id() -> float:
    """Identifier of this process."""
    return float(os.getpid())


def parent_process_id() -> float:
    """Identifier of this process's parent."""
    return float(os.getppid())