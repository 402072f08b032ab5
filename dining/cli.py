"""Command-line entry point: run the dining simulation with a monitor."""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Sequence
from typing import TextIO

from dining.args import InvalidArguments, Settings, parse_args
from dining.routine import philosopher_routine
from dining.table import DIED, Table, now_ms

_MONITOR_PAUSE = 0.00001


def check_philosophers(table: Table) -> bool:
    """Look at every philosopher once.

    Announces a death and stops the table if someone starved. Returns True
    when everyone has eaten the required number of meals (always True when
    no number is required and nobody died), False otherwise.
    """
    settings = table.settings
    target = settings.meals
    all_done = True
    for philosopher in table.philosophers:
        last_meal, meals_eaten = philosopher.snapshot()
        still_hungry = target is None or meals_eaten < target
        if still_hungry and now_ms() - last_meal > settings.time_to_die:
            table.log(philosopher.number, DIED)
            table.stop()
            return False
        if target is not None and meals_eaten < target:
            all_done = False
    return all_done


def monitor(table: Table) -> None:
    """Watch the table until someone dies or everyone has eaten enough."""
    while not table.is_stopped():
        all_done = check_philosophers(table)
        if table.settings.meals is not None and all_done:
            table.stop()
            break
        time.sleep(_MONITOR_PAUSE)


def run(settings: Settings, out: TextIO | None = None) -> Table:
    """Run one simulation to the end and return the finished table."""
    table = Table(settings, out)
    threads = [
        threading.Thread(
            target=philosopher_routine,
            args=(table, philosopher),
            name=f"philosopher-{philosopher.number}",
        )
        for philosopher in table.philosophers
    ]
    threads.append(threading.Thread(target=monitor, args=(table,), name="monitor"))
    started: list[threading.Thread] = []
    try:
        for thread in threads:
            thread.start()
            started.append(thread)
    except RuntimeError:
        table.stop()
        for thread in started:
            thread.join()
        raise
    for thread in started:
        thread.join()
    return table


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the simulation and return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        settings = parse_args(argv)
    except InvalidArguments:
        print("Invalid arguments")
        return 1
    try:
        run(settings)
    except RuntimeError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())