"""What each philosopher thread does: take forks, eat, sleep, think."""

from __future__ import annotations

import time

from dining.table import Philosopher, Table

TOOK_FORK = "has taken a fork"
EATING = "is eating"
SLEEPING = "is sleeping"
THINKING = "is thinking"

_EVEN_START_DELAY = 0.002


def take_forks(table: Table, philosopher: Philosopher, first: int, second: int) -> bool:
    """Pick up fork ``first`` then fork ``second``.

    Returns True holding both forks, or False holding none if the
    simulation stopped meanwhile.
    """
    first_fork = table.forks[first]
    second_fork = table.forks[second]
    first_fork.acquire()
    table.log(philosopher.number, TOOK_FORK)
    if table.is_stopped():
        first_fork.release()
        return False
    second_fork.acquire()
    table.log(philosopher.number, TOOK_FORK)
    if table.is_stopped():
        first_fork.release()
        second_fork.release()
        return False
    return True


def eat(table: Table, philosopher: Philosopher, left: int, right: int) -> bool:
    """Eat with both forks held, then put them down.

    Returns whether the philosopher should keep going: False once the
    simulation stopped or the required number of meals has been eaten.
    """
    if table.is_stopped():
        table.forks[left].release()
        table.forks[right].release()
        return False
    philosopher.mark_meal()
    table.log(philosopher.number, EATING)
    table.sleep(table.settings.time_to_eat)
    meals_eaten = philosopher.finish_meal()
    target = table.settings.meals
    keep_going = target is None or meals_eaten < target
    table.forks[left].release()
    table.forks[right].release()
    return keep_going


def dine_alone(table: Table, philosopher: Philosopher) -> None:
    """A lone philosopher holds the single fork until the simulation ends."""
    fork = table.forks[philosopher.left_fork]
    with fork:
        table.log(philosopher.number, TOOK_FORK)
        while not table.is_stopped():
            table.sleep(1)


def lifecycle(table: Table, philosopher: Philosopher) -> None:
    """Loop through eating, sleeping and thinking until told to stop."""
    left = philosopher.left_fork
    right = philosopher.right_fork
    even = philosopher.index % 2 == 0
    if even:
        time.sleep(_EVEN_START_DELAY)
    while not table.is_stopped():
        if even:
            forks_taken = take_forks(table, philosopher, left, right)
        else:
            forks_taken = take_forks(table, philosopher, right, left)
        if forks_taken and not eat(table, philosopher, left, right):
            break
        if table.is_stopped():
            break
        table.log(philosopher.number, SLEEPING)
        table.sleep(table.settings.time_to_sleep)
        if table.is_stopped():
            break
        table.log(philosopher.number, THINKING)


def philosopher_routine(table: Table, philosopher: Philosopher) -> None:
    """Entry point of a philosopher thread."""
    if table.settings.num_philos == 1:
        dine_alone(table, philosopher)
    else:
        lifecycle(table, philosopher)