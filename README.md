# philosim

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread and shares forks with its neighbours. The philosophers eat,
sleep and think in turn. A monitor thread watches for starvation and for
the meal limit.

## Installation

```
pip install .
```

## Usage

```
philosim number_of_philosophers time_to_die time_to_eat time_to_sleep [max_meals]
```

The same command can be started as `python -m philosim.cli`.

All times are in milliseconds. Every argument must be a positive integer
no larger than 2147483647. Leading whitespace and a single leading `+` are
accepted. Zero, negative numbers and any other characters are rejected.

- `number_of_philosophers`: how many philosophers sit at the table. There
  are as many forks as philosophers, one between each pair of neighbours.
- `time_to_die`: a philosopher dies once more than this long has passed
  since the start of its last meal (or since the start of the run).
- `time_to_eat`: how long a meal takes. A philosopher holds both its forks
  for the whole meal.
- `time_to_sleep`: how long a philosopher sleeps after eating.
- `max_meals` (optional): a philosopher stops once it has eaten this many
  times, and the run ends once every philosopher has.

Each event is printed as one line holding the milliseconds since the
start, the philosopher's number (counting from 1) and the action. For
example:

```
$ philosim 4 410 200 200 3
0 1 has taken a fork
0 1 has taken a fork
0 1 is eating
...
```

The actions are `has taken a fork`, `is eating`, `is sleeping`,
`is thinking` and `has died`. Once a philosopher dies, no further lines
are printed and the other philosophers stop.

Philosophers in even seats (counting from 0) pick up their left fork
first, those in odd seats their right fork first, and odd seats start
slightly later.

A single philosopher only has one fork. It thinks, takes that fork, waits
`time_to_die` milliseconds and dies.

With the wrong number of arguments the command prints a usage line. With
an invalid argument it prints an error. In both cases it exits with
status 1; otherwise it exits with status 0.

## Library use

- `philosim.args.parse_args(argv)` turns the arguments after the program
  name into a `Settings` value. It raises `UsageError` for the wrong
  number of arguments and `ArgumentError` for an invalid value.
  `parse_positive_int(text)` parses one value by the same rules.
- `philosim.simulation.run_simulation(settings, out)` runs a simulation,
  writes its log to the text stream `out` (standard output by default) and
  returns an `Outcome`: `Outcome.DEATH` if a philosopher died,
  `Outcome.FED` if everyone reached the meal limit.
- `philosim.table.Table` holds the shared clock, locks, output and stop
  flag; `philosim.simulation.Philosopher` is one diner.

```python
import io
from philosim.args import parse_args
from philosim.simulation import run_simulation

log = io.StringIO()
outcome = run_simulation(parse_args(["5", "800", "200", "200", "2"]), log)
print(outcome, log.getvalue().count("is eating"))
```

## Tests

```
pip install .[test]
pytest
```