"""Philosopher threads, the death monitor and the simulation driver."""

from __future__ import annotations

import enum
import threading
import time
from typing import List, Optional, Sequence, TextIO

from philosim.args import Settings
from philosim.table import Table, now_ms

_ODD_START_DELAY = 0.0002
_THINK_PAUSE = 0.001
_MONITOR_STEP = 0.00001


class Outcome(enum.Enum):
    """State of the run as seen by the monitor."""

    CONTINUE = "continue"
    DEATH = "death"
    FED = "fed"


class Philosopher:
    """One diner, sitting between two forks."""

    def __init__(
        self,
        philo_id: int,
        table: Table,
        left_fork: threading.Lock,
        right_fork: threading.Lock,
    ) -> None:
        self.id = philo_id
        self.table = table
        self.left_fork = left_fork
        self.right_fork = right_fork
        self.last_meal = table.start_time
        self.meals_eaten = 0

    def take_forks(self) -> None:
        """Pick up both forks; even seats start left, odd seats start right."""
        if self.id % 2 == 0:
            first, second = self.left_fork, self.right_fork
        else:
            first, second = self.right_fork, self.left_fork
        first.acquire()
        self.table.print_action(self.id, "has taken a fork")
        second.acquire()
        self.table.print_action(self.id, "has taken a fork")

    def release_forks(self) -> None:
        """Put both forks back on the table."""
        self.right_fork.release()
        self.left_fork.release()

    def eat(self) -> None:
        """Record a meal and spend time_to_eat milliseconds eating."""
        table = self.table
        with table.eat_lock:
            self.last_meal = now_ms()
            table.print_action(self.id, "is eating")
            self.meals_eaten += 1
        table.smart_sleep(table.settings.time_to_eat)

    def _is_fed(self) -> bool:
        limit = self.table.settings.max_meals
        return limit is not None and self.meals_eaten >= limit

    def run(self) -> None:
        """Eat, sleep and think until someone dies or the meal limit is met."""
        table = self.table
        if self.id % 2 != 0:
            time.sleep(_ODD_START_DELAY)
        while not table.should_stop():
            self.take_forks()
            try:
                self.eat()
            finally:
                self.release_forks()
            if self._is_fed():
                break
            table.print_action(self.id, "is sleeping")
            table.smart_sleep(table.settings.time_to_sleep)
            table.print_action(self.id, "is thinking")
            time.sleep(_THINK_PAUSE)


def create_philosophers(table: Table) -> List[Philosopher]:
    """Seat the philosophers around the table, one fork between each pair."""
    count = table.settings.num_philosophers
    forks = [threading.Lock() for _ in range(count)]
    return [
        Philosopher(i, table, forks[i], forks[(i + 1) % count])
        for i in range(count)
    ]


def check_meals(table: Table, philosophers: Sequence[Philosopher]) -> Outcome:
    """Check every philosopher once for starvation and for the meal limit."""
    settings = table.settings
    done = True
    for philo in philosophers:
        with table.eat_lock:
            if not settings.has_meal_limit or philo.meals_eaten < settings.max_meals:
                done = False
            if now_ms() - philo.last_meal > settings.time_to_die:
                table.announce_death(philo.id)
                return Outcome.DEATH
    if settings.has_meal_limit and done:
        return Outcome.FED
    return Outcome.CONTINUE


def monitor(table: Table, philosophers: Sequence[Philosopher]) -> Outcome:
    """Watch the table until a philosopher dies or everyone has eaten enough."""
    while True:
        outcome = check_meals(table, philosophers)
        if outcome is not Outcome.CONTINUE:
            return outcome
        time.sleep(_MONITOR_STEP)


def handle_one_philosopher(table: Table) -> Outcome:
    """A lone philosopher has one fork and starves."""
    table.print_action(0, "is thinking")
    table.print_action(0, "has taken a fork")
    table.smart_sleep(table.settings.time_to_die)
    table.print_action(0, "has died")
    return Outcome.DEATH


def run_simulation(settings: Settings, out: Optional[TextIO] = None) -> Outcome:
    """Run the whole simulation and report how it ended."""
    table = Table(settings, out)
    philosophers = create_philosophers(table)
    if settings.num_philosophers == 1:
        return handle_one_philosopher(table)
    threads = [
        threading.Thread(target=philo.run, name=f"philosopher-{philo.id + 1}")
        for philo in philosophers
    ]
    for thread in threads:
        thread.start()
    watcher_result: List[Outcome] = []
    watcher = threading.Thread(
        target=lambda: watcher_result.append(monitor(table, philosophers)),
        name="monitor",
    )
    watcher.start()
    watcher.join()
    for thread in threads:
        thread.join()
    return watcher_result[0]