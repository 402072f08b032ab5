"""Shared state of the dining table: forks, philosophers, clock and log."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from typing import TextIO

from dining.args import Settings

DIED = "died"


def now_ms() -> int:
    """Wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass
class Philosopher:
    """One seat at the table; meal bookkeeping is guarded by its own lock."""

    index: int
    left_fork: int
    right_fork: int
    last_meal: int
    meals_eaten: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    @property
    def number(self) -> int:
        """The one-based number shown in the log."""
        return self.index + 1

    def mark_meal(self) -> None:
        """Record that a meal starts now."""
        with self._lock:
            self.last_meal = now_ms()

    def finish_meal(self) -> int:
        """Count one more finished meal and return the new total."""
        with self._lock:
            self.meals_eaten += 1
            return self.meals_eaten

    def snapshot(self) -> tuple[int, int]:
        """Return (last_meal, meals_eaten) read consistently."""
        with self._lock:
            return self.last_meal, self.meals_eaten


class Table:
    """Forks, philosophers and the stop flag shared by every thread."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self.out = out if out is not None else sys.stdout
        self.start_time = now_ms()
        count = settings.num_philos
        self.forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(
                index=i,
                left_fork=i,
                right_fork=(i + 1) % count,
                last_meal=self.start_time,
            )
            for i in range(count)
        ]
        self._print_lock = threading.Lock()
        self._stopped = threading.Event()

    def stop(self) -> None:
        """End the simulation; waiting sleeps wake up at once."""
        self._stopped.set()

    def is_stopped(self) -> bool:
        return self._stopped.is_set()

    def log(self, philosopher_id: int, status: str) -> bool:
        """Print a timestamped status line.

        After the simulation stops only deaths are printed. Returns whether
        the line was written.
        """
        with self._print_lock:
            if self.is_stopped() and status != DIED:
                return False
            timestamp = now_ms() - self.start_time
            self.out.write(f"{timestamp} {philosopher_id} {status}\n")
            self.out.flush()
            return True

    def sleep(self, duration_ms: int) -> None:
        """Sleep for duration_ms milliseconds, or until the simulation stops."""
        start = now_ms()
        while not self.is_stopped():
            remaining = duration_ms - (now_ms() - start)
            if remaining <= 0:
                break
            self._stopped.wait(remaining / 1000)