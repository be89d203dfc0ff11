"""Error-reporting strategies for the evaluator.

The evaluator signals failures by raising ``EvalError``; the effect injected
into an ``Evaluator`` decides what a host sees at the entry points: the
exception itself, or a result value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, Protocol, TypeVar

from mlinterp.core.errors import EvalError

T = TypeVar("T")
R = TypeVar("R", covariant=True)


class ErrorEffect(Protocol[R]):
    """How an evaluation outcome is delivered to the caller."""

    def succeed(self, value: object) -> R: ...

    def fail(self, error: EvalError) -> R: ...


class RaiseEffect:
    """Return values as they are and propagate errors as exceptions."""

    def succeed(self, value: T) -> T:
        return value

    def fail(self, error: EvalError) -> NoReturn:
        raise error


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def __str__(self) -> str:
        return f"Ok {self.value}"


@dataclass(frozen=True)
class Err:
    error: EvalError

    @property
    def kind(self) -> str:
        return self.error.kind

    def __str__(self) -> str:
        return f"Error {self.error}"


Result = Ok | Err


class ResultEffect:
    """Wrap outcomes in Ok / Err values."""

    def succeed(self, value: T) -> Ok[T]:
        return Ok(value)

    def fail(self, error: EvalError) -> Err:
        return Err(error)
