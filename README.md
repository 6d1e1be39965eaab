# iocstats

This package reports statistics about the running process and the host it
runs on. It covers CPU load of the machine and of the process, memory use,
file-descriptor use, suspended tasks, network buffer pools, interface
errors, and host, system and boot information.

Each statistic comes from a small function or sampler. When a source cannot
be read on a system, the function raises `iocstats.types.StatsUnavailable`.
It does not return a made-up value. Some readers put a placeholder on the
exception's `fallback` attribute, such as `"<not available>"` or an empty
record, for a display to show instead.

## Installing

```
pip install .
```

The package uses only the standard library.

## Data types

`iocstats.types` holds the records the readers return:

- `MemInfo`: `num_bytes_total`, `num_bytes_free`, `num_bytes_alloc`, `num_blocks_free`, `num_blocks_alloc`, `max_block_size_free`
- `FdInfo`: `used` and `max`
- `IfErrInfo`: `ierrors` and `oerrors`
- `LoadInfo`: `no_of_cpus`, `cpu_load` and `ioc_load`. The two loads are in percent.

The module also defines:

- the `StatType` and `Pool` enumerations
- the `StatsUnavailable` exception
- `version_int()`, which packs a four-part version into one comparable integer

## CPU load

```python
import time
from iocstats.cpu import CpuUtilization, rusage_cpu_seconds, cpu_count

util = CpuUtilization(rusage_cpu_seconds, time.monotonic, cpu_count())
time.sleep(1.0)
print(util.sample())  # percent of all CPUs used by this process since the last sample
```

Both samplers take a reader and a clock:

- `CpuUtilization` uses `rusage_cpu_seconds` by default.
- `CpuUsage` reports whole-machine load. By default it reads busy seconds from `/proc/stat` through `proc_system_cpu_seconds`.

`proc_process_cpu_seconds` reads the same kind of figure for one process from
a per-process stat file. `parse_cpu_ticks` and `parse_process_ticks` take the
text of those files directly.

`WindowsLoad` works from `SystemTimes` snapshots that you supply. Each call to
`sample()` returns a `LoadInfo` that holds both loads. `mirrored_utilization()`
copies the machine load into the process load.

On systems without a usable kernel counter, `iocstats.cpuburn.CpuBurner`
estimates machine load another way. It first times a busy counter while the
CPU is idle. It then runs the same counter in a background thread and
compares the counts:

```python
from iocstats.cpuburn import CpuBurner

with CpuBurner(burn_seconds=1.0, sleep_seconds=1.0, calibrate_seconds=0.2) as burner:
    ...
    print(burner.usage())
```

`calibrate_test()` reports how much repeated burns vary. `burn_load_50()` adds
about 50 % load for a given time, which is useful for checking the
measurement.

## Memory and file descriptors

```python
import os
import resource
from iocstats.memory import proc_memory_usage
from iocstats.fds import fd_usage

mem = proc_memory_usage("/proc/self/statm", "/proc/meminfo", os.sysconf("SC_PAGESIZE"))
fds = fd_usage("/proc/self/fd", resource.getrlimit(resource.RLIMIT_NOFILE)[0])
print(mem.num_bytes_alloc, fds.used, fds.max)
```

`parse_statm` and `parse_meminfo` take the text of those files directly.
Other systems report their counters differently. These functions turn them
into a `MemInfo`:

- `windows_memory_usage`
- `partition_stats_usage`
- `free_list_usage`

These functions turn other descriptor counts into an `FdInfo`:

- `table_fd_usage` counts the used slots of a descriptor table.
- `handle_fd_usage` reports a handle count against a fixed limit.

## Host, system and boot information

```python
import platform
import sys
from iocstats import hostinfo, sysinfo

print(hostinfo.hostname(), hostinfo.working_directory())
print(hostinfo.process_id(), hostinfo.parent_process_id())
print(sysinfo.kernel_version(platform.uname()))
print(sysinfo.command_line(sys.argv))
```

- `sysinfo.startup_script()` builds the script path from the `ST_CMD` and `STARTUP` environment variables. It raises `StatsUnavailable` when `ST_CMD` is not set.
- `sysinfo.windows_version_string()` names a Windows release from its major, minor and build numbers.
- `sysinfo.decode_windows_version()` unpacks a packed version integer into those three numbers.
- `sysinfo.boot_line()` returns a placeholder, because no boot parameter line is kept.
- `sysinfo.bsp_version()` always raises `StatsUnavailable`.
- `hostinfo.windows_hostname()` always raises `StatsUnavailable`, with the `COMPUTERNAME` value as the fallback.

## Other sources

- `iocstats.tasks`: `SuspendedTaskCounter` counts task faults reported to it. `count_suspended()` counts suspended tasks among the first entries of a task list.
- `iocstats.network`: `cluster_info()` and `cluster_usage()` summarise network buffer pools described by `NetPool` and `ClusterTable`. `interface_errors()` adds up the errors of a list of `Interface` records.

## What this package does not do

This is a library of readers only. It does not:

- provide a command-line tool
- poll the readers on a schedule
- publish values to a monitoring system
- keep the values anywhere

The `StatType` categories include `CA` and `QUEUE`, but no readers for
those figures are provided.

## Running the tests

```
pip install .[test]
pytest
```