"""Shared state of the table: clock, output and stop flag."""

from __future__ import annotations

import sys
import threading
import time
from typing import Optional, TextIO

from philosim.args import Settings

_SLEEP_STEP = 0.0005


def now_ms() -> int:
    """Wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class Table:
    """State shared by all philosophers and the monitor."""

    def __init__(self, settings: Settings, out: Optional[TextIO] = None) -> None:
        self.settings = settings
        self.out = out if out is not None else sys.stdout
        self.dead = False
        self.print_lock = threading.Lock()
        self.death_lock = threading.Lock()
        self.eat_lock = threading.Lock()
        self.start_time = now_ms()

    def elapsed(self) -> int:
        """Milliseconds since the simulation started."""
        return now_ms() - self.start_time

    def should_stop(self) -> bool:
        """True once a philosopher has died."""
        with self.death_lock:
            return self.dead

    def _write(self, philo_id: int, action: str) -> None:
        self.out.write(f"{self.elapsed()} {philo_id + 1} {action}\n")
        self.out.flush()

    def print_action(self, philo_id: int, action: str) -> None:
        """Log an action of the zero-based philosopher unless the run is over."""
        with self.death_lock, self.print_lock:
            if not self.dead:
                self._write(philo_id, action)

    def smart_sleep(self, duration: int) -> None:
        """Sleep for duration milliseconds, waking early if the run stops."""
        start = now_ms()
        while now_ms() - start < duration:
            if self.should_stop():
                break
            time.sleep(_SLEEP_STEP)

    def announce_death(self, philo_id: int) -> None:
        """Mark the run as over and log the death of the given philosopher."""
        with self.death_lock:
            self.dead = True
            with self.print_lock:
                self._write(philo_id, "has died")