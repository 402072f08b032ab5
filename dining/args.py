"""Command-line argument parsing for the dining simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

_WHITESPACE = " \t\n\v\f\r"


class InvalidArguments(ValueError):
    """Raised when the simulation arguments are missing or out of range."""


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    num_philos: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals: int | None = None


def parse_int(text: str) -> int:
    """Read a leading integer the lenient way: skip blanks, one sign, then digits.

    Anything after the digits is ignored; text with no digits reads as 0.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = []
    for char in rest:
        if not ("0" <= char <= "9"):
            break
        digits.append(char)
    value = int("".join(digits)) if digits else 0
    return sign * value


def parse_args(argv: Sequence[str]) -> Settings:
    """Build settings from the arguments that follow the program name.

    Expects: number_of_philosophers time_to_die time_to_eat time_to_sleep
    and optionally number_of_times_each_philosopher_must_eat.
    """
    if len(argv) not in (4, 5):
        raise InvalidArguments("expected 4 or 5 arguments")
    meals: int | None = None
    if len(argv) == 5:
        meals = parse_int(argv[4])
        if meals <= 0:
            raise InvalidArguments("number of meals must be positive")
    num_philos, time_to_die, time_to_eat, time_to_sleep = (
        parse_int(arg) for arg in argv[:4]
    )
    if num_philos < 1:
        raise InvalidArguments("there must be at least one philosopher")
    if time_to_die <= 0 or time_to_eat <= 0 or time_to_sleep <= 0:
        raise InvalidArguments("times must be positive")
    return Settings(
        num_philos=num_philos,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        meals=meals,
    )