"""Whole-machine CPU load and CPU utilization of the current process."""

from __future__ import annotations

import os
import time
from collections.abc import Callable
from dataclasses import dataclass

from .types import LoadInfo, StatsUnavailable

DEFAULT_SYSTEM_STAT = "/proc/stat"
DEFAULT_PROCESS_STAT = "/proc/self/stat"

# Fields after the closing parenthesis of the command name in a
# per-process stat file: utime and stime come 12th and 13th.
_UTIME_FIELD = 11
_STIME_FIELD = 12

Reader = Callable[[], float]
Clock = Callable[[], float]


def parse_cpu_ticks(text: str) -> int:
    """Return user + nice + system ticks from the aggregate ``cpu`` line of a stat file."""
    tokens = text.split()
    if not tokens or tokens[0] != "cpu":
        raise ValueError("no aggregate cpu line")
    values = []
    for token in tokens[1:4]:
        try:
            values.append(int(token))
        except ValueError:
            break
    if not values:
        raise ValueError("aggregate cpu line has no tick counts")
    return sum(values)


def parse_process_ticks(text: str) -> int:
    """Return user + system ticks from a per-process stat line."""
    end = text.rfind(")")
    if end < 0:
        raise ValueError("no command name in process stat line")
    fields = text[end + 1:].split()
    if len(fields) <= _STIME_FIELD:
        raise ValueError("process stat line is too short")
    return int(fields[_UTIME_FIELD]) + int(fields[_STIME_FIELD])


def _read_seconds(path: str | os.PathLike, parse: Callable[[str], int],
                  ticks_per_sec: int | None) -> float:
    ticks = ticks_per_second() if ticks_per_sec is None else ticks_per_sec
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            count = parse(handle.read())
    except (OSError, ValueError):
        count = 0
    return count / float(ticks)


def proc_system_cpu_seconds(path: str | os.PathLike | None = None,
                            ticks_per_sec: int | None = None) -> float:
    """Busy CPU seconds of the whole machine; 0.0 if the file cannot be read."""
    return _read_seconds(DEFAULT_SYSTEM_STAT if path is None else path,
                         parse_cpu_ticks, ticks_per_sec)


def proc_process_cpu_seconds(path: str | os.PathLike | None = None,
                             ticks_per_sec: int | None = None) -> float:
    """CPU seconds used by a process; 0.0 if the file cannot be read."""
    return _read_seconds(DEFAULT_PROCESS_STAT if path is None else path,
                         parse_process_ticks, ticks_per_sec)


def rusage_cpu_seconds() -> float:
    """User plus system CPU seconds used by this process."""
    try:
        import resource
    except ImportError as exc:
        raise StatsUnavailable("resource usage not available") from exc
    stats = resource.getrusage(resource.RUSAGE_SELF)
    return stats.ru_utime + stats.ru_stime


def _sysconf(name: str) -> int | None:
    try:
        value = os.sysconf(name)
    except (AttributeError, ValueError, OSError):
        return None
    return value if value > 0 else None


def cpu_count() -> int:
    """Number of CPUs currently online."""
    return _sysconf("SC_NPROCESSORS_ONLN") or os.cpu_count() or 1


def ticks_per_second() -> int:
    """Clock ticks per second used by the kernel's CPU accounting."""
    return _sysconf("SC_CLK_TCK") or 1


class CpuUsage:
    """Whole-machine CPU load in percent, measured between successive samples."""

    def __init__(self, reader: Reader | None = None, clock: Clock | None = None,
                 cpus: int | None = None) -> None:
        self._reader = reader if reader is not None else proc_system_cpu_seconds
        self._clock = clock if clock is not None else time.monotonic
        self.no_of_cpus = cpu_count() if cpus is None else cpus
        self._old_time = self._clock()
        self._old_usage = self._reader()

    def sample(self) -> float:
        """Return the load since the previous sample, in percent."""
        now = self._clock()
        usage = self._reader()
        elapsed = now - self._old_time
        load = (100.0 * (usage - self._old_usage) / (elapsed * self.no_of_cpus)
                if elapsed > 0 else 0.0)
        self._old_time = now
        self._old_usage = usage
        return load


class CpuUtilization:
    """CPU utilization of this process in percent of all CPUs."""

    def __init__(self, reader: Reader | None = None, clock: Clock | None = None,
                 cpus: int | None = None) -> None:
        self._reader = reader if reader is not None else rusage_cpu_seconds
        self._clock = clock if clock is not None else time.monotonic
        self.no_of_cpus = cpu_count() if cpus is None else cpus
        self._scale = 100.0 / self.no_of_cpus
        self._old_time = self._clock()
        self._old_usage = self._reader()

    def sample(self) -> float:
        """Return the utilization since the previous sample, in percent."""
        now = self._clock()
        usage = self._reader()
        elapsed = now - self._old_time
        load = (usage - self._old_usage) * self._scale / elapsed if elapsed > 0 else 0.0
        self._old_time = now
        self._old_usage = usage
        return load


@dataclass(frozen=True)
class SystemTimes:
    """Cumulative system and process times, in any common unit.

    ``sys_kernel`` includes idle time, as the system reports it.
    """

    sys_idle: int
    sys_kernel: int
    sys_user: int
    proc_kernel: int
    proc_user: int


def _windows_cpu_count() -> int:
    value = os.environ.get("NUMBER_OF_PROCESSORS")
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return cpu_count()


class WindowsLoad:
    """Machine and process load derived from kernel, user and idle times."""

    def __init__(self, reader: Callable[[], SystemTimes], cpus: int | None = None) -> None:
        self._reader = reader
        self._load = LoadInfo(no_of_cpus=_windows_cpu_count() if cpus is None else cpus)
        self._previous = reader()

    def sample(self) -> LoadInfo:
        """Return the loads since the previous sample.

        When no system time has passed the previous figures are kept.
        """
        current = self._reader()
        prev = self._previous
        kernel = current.sys_kernel - prev.sys_kernel
        user = current.sys_user - prev.sys_user
        idle = current.sys_idle - prev.sys_idle
        total_sys = kernel + user
        total_proc = (current.proc_user - prev.proc_user) + (current.proc_kernel - prev.proc_kernel)
        if total_sys > 0:
            self._load.ioc_load = 100.0 * total_proc / total_sys
            self._load.cpu_load = 100.0 * (total_sys - idle) / total_sys
        self._previous = current
        return LoadInfo(self._load.no_of_cpus, self._load.cpu_load, self._load.ioc_load)


def mirrored_utilization(load: LoadInfo) -> LoadInfo:
    """Report the machine load as this process's load as well."""
    load.ioc_load = load.cpu_load
    return load


def unsupported_cpu_usage() -> LoadInfo:
    """CPU load on a system without support for it."""
    raise StatsUnavailable("CPU usage not supported")