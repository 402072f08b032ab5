# dining

A console simulation of the dining philosophers problem. Philosophers sit at a
round table with one fork between each pair of neighbours. Each one runs in its
own thread and repeats the same cycle: take two forks, eat, sleep, think. A
monitor thread watches them. If a philosopher who still needs meals goes longer
than the time to die since the start of their last meal, the monitor reports
the death and the simulation stops.

## Installation

```
pip install .
```

## Usage

```
dining NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
```

The same entry point can also be started with `python -m dining.cli`.

- `NUMBER_OF_PHILOSOPHERS`: how many philosophers, and so how many forks (at least 1).
- `TIME_TO_DIE`: milliseconds a philosopher can go without starting a meal.
- `TIME_TO_EAT`: milliseconds a meal takes. A philosopher holds both forks for this long.
- `TIME_TO_SLEEP`: milliseconds spent sleeping after a meal.
- `MEALS` (optional): once every philosopher has eaten this many meals, the
  simulation ends. It must be positive.

All times must be positive. Numbers are read leniently: leading whitespace and
one sign are allowed, reading stops at the first character that is not a
digit, and text with no digits reads as 0.

Every event prints one line in the form `<ms since start> <philosopher> <status>`,
where philosophers are numbered from 1. The statuses are `has taken a fork`,
`is eating`, `is sleeping`, `is thinking` and `died`. After the simulation
stops, the only line that can still appear is a `died` line.

A lone philosopher takes the single fork and waits with it until the monitor
reports the death.

If the arguments are invalid, the program prints `Invalid arguments` and exits
with status 1. Otherwise it exits with status 0 once every thread has finished.

## Using it from Python

```python
import sys

from dining.args import parse_args
from dining.cli import run

settings = parse_args(["5", "800", "200", "200", "7"])
table = run(settings, sys.stdout)
```

- `dining.args.parse_args(argv)` takes the arguments without the program name
  and returns a `Settings` (`num_philos`, `time_to_die`, `time_to_eat`,
  `time_to_sleep`, `meals`, where `meals` is `None` when no count was given).
  It raises `dining.args.InvalidArguments`, a `ValueError`, when it rejects the
  input. `dining.args.parse_int` is the lenient number reader it uses.
- `dining.cli.run(settings, out=None)` runs one simulation to the end, writing
  to `out` (standard output by default), and returns the finished `Table`.
- `dining.table.Table` holds the shared state: the forks, the philosophers,
  the stop flag and the output lock. `stop()` and `is_stopped()` control the
  flag, `log(philosopher_id, status)` prints one status line, and
  `sleep(duration_ms)` waits that long or until the simulation stops.
- `dining.table.Philosopher` records `last_meal` and `meals_eaten`;
  `snapshot()` reads both together.