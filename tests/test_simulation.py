import io

from philosim.args import Settings
from philosim.simulation import (
    Outcome,
    Philosopher,
    check_meals,
    create_philosophers,
    handle_one_philosopher,
    monitor,
    run_simulation,
)
from philosim.table import Table


def _lines(out):
    return [line.split(" ", 2) for line in out.getvalue().splitlines()]


def _table(n=3, die=1000, eat=1, sleep=1, meals=None):
    out = io.StringIO()
    return Table(Settings(n, die, eat, sleep, meals), out), out


def test_create_philosophers_share_forks_in_a_ring():
    table, _ = _table(n=4)
    philos = create_philosophers(table)
    assert [p.id for p in philos] == [0, 1, 2, 3]
    for i, philo in enumerate(philos):
        assert philo.right_fork is philos[(i + 1) % 4].left_fork
        assert philo.last_meal == table.start_time
        assert philo.meals_eaten == 0


def test_take_and_release_forks():
    table, out = _table(n=2)
    philo = create_philosophers(table)[1]
    philo.take_forks()
    assert philo.left_fork.locked() and philo.right_fork.locked()
    philo.release_forks()
    assert not philo.left_fork.locked() and not philo.right_fork.locked()
    assert [line[1:] for line in _lines(out)] == [["2", "has taken a fork"]] * 2


def test_eat_counts_meal_and_logs():
    table, out = _table()
    philo = create_philosophers(table)[0]
    philo.eat()
    assert philo.meals_eaten == 1
    assert philo.last_meal >= table.start_time
    assert _lines(out)[0][1:] == ["1", "is eating"]


def test_check_meals_without_limit_continues():
    table, _ = _table()
    assert check_meals(table, create_philosophers(table)) is Outcome.CONTINUE


def test_check_meals_all_fed():
    table, _ = _table(meals=2)
    philos = create_philosophers(table)
    for philo in philos:
        philo.meals_eaten = 2
    assert check_meals(table, philos) is Outcome.FED
    assert not table.dead


def test_check_meals_detects_starvation():
    table, out = _table(die=10)
    philos = create_philosophers(table)
    philos[1].last_meal -= 100
    philos[0].meals_eaten = 5
    assert check_meals(table, philos) is Outcome.DEATH
    assert table.dead
    assert _lines(out)[-1][1:] == ["2", "has died"]


def test_monitor_returns_on_death():
    table, out = _table(die=10)
    philos = create_philosophers(table)
    philos[0].last_meal -= 100
    assert monitor(table, philos) is Outcome.DEATH
    assert "1 has died" in out.getvalue()


def test_one_philosopher_starves():
    table, out = _table(n=1, die=30)
    assert handle_one_philosopher(table) is Outcome.DEATH
    lines = _lines(out)
    assert [line[1:] for line in lines] == [
        ["1", "is thinking"],
        ["1", "has taken a fork"],
        ["1", "has died"],
    ]
    assert int(lines[-1][0]) >= 30


def test_run_until_everyone_is_fed():
    out = io.StringIO()
    outcome = run_simulation(Settings(3, 2000, 10, 10, 2), out)
    assert outcome is Outcome.FED
    lines = _lines(out)
    stamps = [int(line[0]) for line in lines]
    assert stamps == sorted(stamps)
    assert all(line[2] != "has died" for line in lines)
    for seat in ("1", "2", "3"):
        eats = [l for l in lines if l[1] == seat and l[2] == "is eating"]
        assert len(eats) == 2


def test_run_ends_with_single_death():
    out = io.StringIO()
    outcome = run_simulation(Settings(2, 30, 100, 100), out)
    assert outcome is Outcome.DEATH
    lines = _lines(out)
    deaths = [l for l in lines if l[2] == "has died"]
    assert len(deaths) == 1
    assert lines[-1][2] == "has died"


def test_philosopher_stops_when_table_is_dead():
    table, out = _table(n=2)
    philo = Philosopher(0, table, *create_philosophers(table)[0].__dict__["left_fork":"left_fork"] if False else (create_philosophers(table)[0].left_fork, create_philosophers(table)[1].left_fork))
    table.dead = True
    philo.run()
    assert philo.meals_eaten == 0
    assert out.getvalue() == ""