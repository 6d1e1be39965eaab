"""CPU load measured by timing a busy counting loop against a calibrated rate.

A counter is incremented for a fixed period. Calibration runs the same
loop while the CPU is free and records the counts per second. Later
runs that reach fewer counts show that other work took CPU time. The
load is the share of counts that were lost.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

DEFAULT_PERIOD = 5.0
DEFAULT_CALIBRATE = 0.3


@dataclass(frozen=True)
class BurnStats:
    """Spread of the counts reached by repeated burns of the same length."""

    minimum: int
    maximum: int
    average: int
    rel_diff: float


def _positive(name: str, value: float) -> float:
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return float(value)


class CpuBurner:
    """Background CPU load meter that alternately burns and sleeps."""

    def __init__(self, burn_seconds: float = DEFAULT_PERIOD,
                 sleep_seconds: float = DEFAULT_PERIOD,
                 calibrate_seconds: float = DEFAULT_CALIBRATE) -> None:
        self.burn_seconds = _positive("burn_seconds", burn_seconds)
        if sleep_seconds < 0:
            raise ValueError("sleep_seconds must not be negative")
        self.sleep_seconds = float(sleep_seconds)
        self.calibrate_seconds = _positive("calibrate_seconds", calibrate_seconds)
        self.counts_per_second: float | None = None
        self._lock = threading.Lock()
        self._usage = 0.0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def burn(self, duration: float) -> int:
        """Increment a counter for ``duration`` seconds; return the count reached."""
        deadline = time.perf_counter() + duration
        count = 0
        while time.perf_counter() < deadline:
            count += 1
        return count

    def calibrate_test(self, duration: float, tests: int) -> BurnStats | None:
        """Burn ``tests`` times for ``duration`` seconds and report the spread.

        Returns None when no test is run.
        """
        if tests <= 0:
            return None
        counts = [self.burn(duration) for _ in range(tests)]
        low, high = min(counts), max(counts)
        if low:
            rel_diff = (high - low) / low
        else:
            rel_diff = float("inf") if high else 0.0
        return BurnStats(low, high, sum(counts) // tests, rel_diff)

    def calibrate(self) -> float:
        """Measure and store the counts per second reached without contention."""
        counts = self.burn(self.calibrate_seconds)
        self.counts_per_second = counts / self.calibrate_seconds
        return self.counts_per_second

    def load_from_counts(self, reference: float, measured: float) -> float:
        """Load in percent from the expected and the reached count.

        A count above the reference, which timing jitter can cause near
        zero load, is taken as zero load.
        """
        if reference <= 0:
            raise ValueError("reference count must be positive")
        measured = min(measured, reference)
        return 100.0 * (reference - measured) / reference

    def start(self) -> None:
        """Calibrate if needed and start measuring in a background thread."""
        if self.running:
            raise RuntimeError("CPU burner is already running")
        if self.counts_per_second is None:
            self.calibrate()
        with self._lock:
            self._usage = 0.0
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="cpuUsageTask", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the background measurement and wait for it to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    @property
    def running(self) -> bool:
        """Whether the background measurement is active."""
        return self._thread is not None and self._thread.is_alive()

    def usage(self) -> float:
        """Most recent CPU load in percent."""
        with self._lock:
            return self._usage

    def _run(self) -> None:
        while not self._stop.is_set():
            reference = (self.counts_per_second or 0.0) * self.burn_seconds
            measured = self.burn(self.burn_seconds)
            if reference > 0:
                load = self.load_from_counts(reference, measured)
                with self._lock:
                    self._usage = load
            self._stop.wait(self.sleep_seconds)

    def __enter__(self) -> CpuBurner:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


def burn_load_50(seconds: float, tick: float = 0.01) -> int:
    """Add an average load of 50% by alternately sleeping and burning one tick.

    Returns the number of ticks spent burning.
    """
    if seconds < 0:
        raise ValueError("seconds must not be negative")
    _positive("tick", tick)
    ticks = round(seconds / tick)
    burned = 0
    for index in range(ticks):
        if index % 2 == 0:
            time.sleep(tick)
        else:
            deadline = time.perf_counter() + tick
            while time.perf_counter() < deadline:
                pass
            burned += 1
    return burned