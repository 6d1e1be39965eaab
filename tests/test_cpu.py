import pytest

from iocstats.cpu import (
    CpuUsage,
    CpuUtilization,
    SystemTimes,
    WindowsLoad,
    cpu_count,
    mirrored_utilization,
    parse_cpu_ticks,
    parse_process_ticks,
    proc_process_cpu_seconds,
    proc_system_cpu_seconds,
    rusage_cpu_seconds,
    ticks_per_second,
    unsupported_cpu_usage,
)
from iocstats.types import LoadInfo, StatsUnavailable

PROC_STAT_LINE = "1234 (my prog) S 1 1234 1234 0 -1 4194304 100 0 0 0 70 30 0 0 20 0 1 0"


def sequence(*values):
    return iter(values).__next__


def test_parse_cpu_ticks_sums_first_three():
    text = "cpu  5 7 11 1000 3 0 0\ncpu0 5 7 11 1000 3 0 0\n"
    assert parse_cpu_ticks(text) == 5 + 7 + 11


def test_parse_cpu_ticks_rejects_other_lines():
    with pytest.raises(ValueError):
        parse_cpu_ticks("intr 1 2 3")


def test_parse_process_ticks_handles_spaces_in_name():
    assert parse_process_ticks(PROC_STAT_LINE) == 70 + 30


def test_parse_process_ticks_rejects_short_line():
    with pytest.raises(ValueError):
        parse_process_ticks("1 (x) S 1 2")


def test_proc_system_seconds_from_file(tmp_path):
    path = tmp_path / "stat"
    path.write_text("cpu 100 50 50 900\n")
    assert proc_system_cpu_seconds(path, 100) == pytest.approx(200 / 100)


def test_proc_process_seconds_from_file(tmp_path):
    path = tmp_path / "stat"
    path.write_text(PROC_STAT_LINE)
    assert proc_process_cpu_seconds(path, 10) == pytest.approx(100 / 10)


def test_missing_files_give_zero(tmp_path):
    assert proc_system_cpu_seconds(tmp_path / "none", 100) == 0.0
    assert proc_process_cpu_seconds(tmp_path / "none", 100) == 0.0


def test_rusage_is_non_decreasing():
    first = rusage_cpu_seconds()
    sum(range(100000))
    assert rusage_cpu_seconds() >= first >= 0.0


def test_counts_are_positive():
    assert cpu_count() >= 1
    assert ticks_per_second() >= 1


def test_cpu_usage_fully_busy_single_cpu():
    usage = CpuUsage(reader=sequence(10.0, 13.0), clock=sequence(0.0, 3.0), cpus=1)
    assert usage.sample() == pytest.approx(100.0)


def test_cpu_usage_scales_with_cpus():
    one = CpuUsage(reader=sequence(0.0, 4.0), clock=sequence(0.0, 8.0), cpus=1).sample()
    two = CpuUsage(reader=sequence(0.0, 4.0), clock=sequence(0.0, 8.0), cpus=2).sample()
    assert two == pytest.approx(one / 2)


def test_cpu_usage_zero_elapsed_gives_zero():
    usage = CpuUsage(reader=sequence(1.0, 5.0), clock=sequence(2.0, 2.0), cpus=1)
    assert usage.sample() == 0.0


def test_cpu_usage_measures_from_previous_sample():
    usage = CpuUsage(reader=sequence(0.0, 2.0, 2.0), clock=sequence(0.0, 2.0, 4.0), cpus=1)
    assert usage.sample() == pytest.approx(100.0)
    assert usage.sample() == pytest.approx(0.0)


def test_cpu_utilization_fully_busy_all_cpus():
    util = CpuUtilization(reader=sequence(0.0, 8.0), clock=sequence(0.0, 2.0), cpus=4)
    assert util.no_of_cpus == 4
    assert util.sample() == pytest.approx(100.0)


def test_cpu_utilization_zero_elapsed_gives_zero():
    util = CpuUtilization(reader=sequence(0.0, 1.0), clock=sequence(5.0, 5.0), cpus=1)
    assert util.sample() == 0.0


def test_windows_load_full_process_usage():
    times = sequence(
        SystemTimes(0, 0, 0, 0, 0),
        SystemTimes(sys_idle=0, sys_kernel=40, sys_user=60, proc_kernel=40, proc_user=60),
    )
    load = WindowsLoad(times, cpus=2).sample()
    assert load.no_of_cpus == 2
    assert load.ioc_load == pytest.approx(100.0)
    assert load.cpu_load == pytest.approx(100.0)


def test_windows_load_idle_machine():
    times = sequence(
        SystemTimes(0, 0, 0, 0, 0),
        SystemTimes(sys_idle=50, sys_kernel=50, sys_user=0, proc_kernel=0, proc_user=0),
    )
    load = WindowsLoad(times, cpus=1).sample()
    assert load.cpu_load == pytest.approx(0.0)
    assert load.ioc_load == pytest.approx(0.0)


def test_windows_load_keeps_previous_when_no_time_passed():
    busy = SystemTimes(sys_idle=0, sys_kernel=10, sys_user=10, proc_kernel=10, proc_user=10)
    times = sequence(SystemTimes(0, 0, 0, 0, 0), busy, busy)
    meter = WindowsLoad(times, cpus=1)
    first = meter.sample()
    second = meter.sample()
    assert second.cpu_load == first.cpu_load
    assert second.ioc_load == first.ioc_load


def test_mirrored_utilization_copies_cpu_load():
    load = mirrored_utilization(LoadInfo(no_of_cpus=1, cpu_load=42.5, ioc_load=0.0))
    assert load.ioc_load == 42.5


def test_unsupported_cpu_usage_raises():
    with pytest.raises(StatsUnavailable):
        unsupported_cpu_usage()