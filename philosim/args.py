"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

INT_MAX = 2_147_483_647

USAGE = (
    "Usage: ./philo num_philosophers time_to_die time_to_eat "
    "time_to_sleep [max_meals]"
)
POSITIVE_ERROR = (
    "Error: All arguments must be positive integers greater than zero."
)

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"


class ArgumentError(ValueError):
    """An argument is not a positive integer that fits in an int."""


class UsageError(ArgumentError):
    """The wrong number of arguments was given."""


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    num_philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    max_meals: Optional[int] = None

    @property
    def has_meal_limit(self) -> bool:
        return self.max_meals is not None


def parse_positive_int(text: str) -> int:
    """Parse a strictly positive decimal integer no larger than INT_MAX.

    Leading whitespace and a single leading '+' are accepted; anything
    else that is not a digit makes the value invalid.
    """
    body = text.lstrip(_WHITESPACE)
    if body.startswith("+"):
        body = body[1:]
    if not body or any(ch not in _DIGITS for ch in body):
        raise ArgumentError(POSITIVE_ERROR)
    value = 0
    for ch in body:
        value = value * 10 + _DIGITS.index(ch)
        if value > INT_MAX:
            raise ArgumentError(POSITIVE_ERROR)
    if value == 0:
        raise ArgumentError(POSITIVE_ERROR)
    return value


def parse_args(argv: Sequence[str]) -> Settings:
    """Build Settings from the arguments that follow the program name."""
    if len(argv) not in (4, 5):
        raise UsageError(USAGE)
    values = [parse_positive_int(arg) for arg in argv]
    return Settings(
        num_philosophers=values[0],
        time_to_die=values[1],
        time_to_eat=values[2],
        time_to_sleep=values[3],
        max_meals=values[4] if len(values) == 5 else None,
    )