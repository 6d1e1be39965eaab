import pytest

from iocstats.fds import (
    HANDLE_LIMIT,
    fd_usage,
    handle_fd_usage,
    table_fd_usage,
    unsupported_fd_usage,
)
from iocstats.types import FdInfo, StatsUnavailable


def _populate(directory, count):
    for n in range(count):
        (directory / f"{n}").write_text("")


@pytest.mark.parametrize("count", [1, 4, 10])
def test_fd_usage_discounts_reader_entry(tmp_path, count):
    _populate(tmp_path, count)
    info = fd_usage(tmp_path, limit=256)
    assert info.used == count - 1
    assert info.max == 256


def test_fd_usage_grows_with_entries(tmp_path):
    _populate(tmp_path, 3)
    before = fd_usage(tmp_path, limit=10).used
    (tmp_path / "extra").write_text("")
    assert fd_usage(tmp_path, limit=10).used == before + 1


def test_fd_usage_missing_directory(tmp_path):
    with pytest.raises(StatsUnavailable):
        fd_usage(tmp_path / "absent", limit=10)


def test_table_fd_usage_counts_standard_descriptors():
    table = [False] * 8
    assert table_fd_usage(table, 8) == FdInfo(used=3, max=8)


def test_table_fd_usage_counts_used_slots_beyond_standard():
    table = [False, False, False, True, False, True, True, False]
    info = table_fd_usage(table, len(table))
    assert info.used == 3 + 3
    assert info.max == len(table)


def test_table_fd_usage_ignores_first_three_slots():
    table = [True, True, True, False]
    assert table_fd_usage(table, 4).used == 3


def test_table_fd_usage_stops_at_max_files():
    table = [True] * 10
    info = table_fd_usage(table, 5)
    assert info.used == 5
    assert info.max == 5


def test_table_fd_usage_empty_table():
    info = table_fd_usage([], 0)
    assert info.used == 3
    assert info.max == 0


def test_handle_fd_usage_uses_fixed_limit():
    info = handle_fd_usage(42)
    assert info.used == 42
    assert info.max == HANDLE_LIMIT == 16384


def test_unsupported_fd_usage_raises():
    with pytest.raises(StatsUnavailable):
        unsupported_fd_usage()