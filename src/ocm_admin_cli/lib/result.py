"""Result type for monadic error handling.

Every control-plane call and workflow returns a Result instead of raising.
Use pattern matching to handle results:

    match client.get_label(scope):
        case Ok(label):
            # handle success
        case Err(error):
            # handle error
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success case containing a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error case containing an error."""

    error: E


type Result[T, E] = Ok[T] | Err[E]


def map_ok(result: Result[T, E], f: Callable[[T], U]) -> Result[U, E]:
    """Apply f to the value if Ok, otherwise return the Err unchanged."""
    match result:
        case Ok(value):
            return Ok(f(value))
        case Err() as e:
            return e
