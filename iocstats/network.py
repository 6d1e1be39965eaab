"""Network buffer cluster statistics and interface error counts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .types import IfErrInfo, Pool, StatsUnavailable

# Major system version assumed when none is given.
DEFAULT_MAJOR_VERSION = 5


@dataclass(frozen=True)
class ClusterTable:
    """One cluster size class of a buffer pool."""

    size: int
    number: int
    free: int
    usage: int


@dataclass
class NetPool:
    """A network buffer pool: its cluster tables and per-type block counts."""

    clusters: Sequence[ClusterTable | None] = field(default_factory=list)
    mblk_types: Sequence[int] = field(default_factory=list)


@dataclass(frozen=True)
class Interface:
    """Error counters of one network interface.

    ``mib_in_errors`` and ``mib_out_errors`` are set when the driver keeps
    MIB-II statistics; they are then used instead of the plain counters.
    """

    ierrors: int = 0
    oerrors: int = 0
    mib_in_errors: int | None = None
    mib_out_errors: int | None = None


def _select_pool(pools: Mapping[Pool, NetPool | None] | None, pool: int) -> NetPool:
    key = Pool.SYS if pool == Pool.SYS else Pool.DATA
    selected = pools.get(key) if pools else None
    if selected is None:
        raise StatsUnavailable(f"no {key.name.lower()} buffer pool", fallback=0)
    return selected


def cluster_info(pools: Mapping[Pool, NetPool | None] | None, pool: int,
                 major_version: int = DEFAULT_MAJOR_VERSION) -> list[ClusterTable]:
    """List the distinct cluster size classes of a pool.

    From major version 6 on, repeated sizes are skipped and a non-positive
    size ends the list; before that the sizes must double from one class
    to the next, and the list ends where they do not.
    """
    net_pool = _select_pool(pools, pool)
    tables = list(net_pool.clusters)
    if not tables or tables[0] is None:
        return []
    result: list[ClusterTable] = []
    last_size = tables[0].size
    for index, table in enumerate(tables):
        if table is None:
            break
        if major_version >= 6:
            if index > 0 and table.size == last_size:
                continue
            if table.size <= 0:
                break
        elif index > 0 and table.size != 2 * last_size:
            break
        last_size = table.size
        result.append(table)
    return result


def cluster_usage(pools: Mapping[Pool, NetPool | None] | None, pool: int) -> int:
    """Total number of blocks in use across all block types of a pool."""
    return sum(_select_pool(pools, pool).mblk_types)


def interface_errors(interfaces: Sequence[Interface],
                     major_version: int = DEFAULT_MAJOR_VERSION) -> IfErrInfo:
    """Sum input and output errors over all interfaces."""
    if major_version >= 6:
        raise StatsUnavailable("interface errors not supported", fallback=IfErrInfo())
    totals = IfErrInfo()
    for interface in interfaces:
        if interface.mib_in_errors is not None or interface.mib_out_errors is not None:
            totals.ierrors += interface.mib_in_errors or 0
            totals.oerrors += interface.mib_out_errors or 0
        else:
            totals.ierrors += interface.ierrors
            totals.oerrors += interface.oerrors
    return totals