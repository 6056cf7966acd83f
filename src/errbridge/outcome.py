"""
Outcome — the explicit value protect() returns instead of unwinding.

An Outcome is either Success(value) or Failure(signal). It also unpacks as
the two-part pair embedding code expects from protect:

    value, failed = protect(lambda: "test")      # → ("test", False)
    signal, failed = protect(lambda: fail("x"))  # → (FailureSignal, True)

The higher-level primitives compose over this value; the only way a
captured failure re-enters Python's propagation is the explicit unwrap().

    ┌──────────┐  protect   ┌───────────────┐  unwrap   ┌──────────────┐
    │   body   │───────────→│ Success(v)    │──────────→│ v            │
    │          │            │ Failure(sig)  │──────────→│ raise sig... │
    └──────────┘            └───────────────┘           └──────────────┘
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar

from errbridge.failure import FailureSignal

T = TypeVar("T")


class Outcome(Generic[T]):
    """
    Result of running one Computation under protect.

    Usage:
        >>> Outcome.success(42).value()
        42
        >>> tuple(Outcome.success("test"))
        ('test', False)
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Outcome is a Success."""
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        """Check if this Outcome is a Failure."""
        return isinstance(self, Failure)

    def value(self) -> T:
        """
        Extract the success value. Raises ValueError if called on a Failure.

        Use unwrap() to re-raise the captured failure instead.
        """
        match self:
            case Success(v):
                return v
            case Failure(sig):
                raise ValueError(f"Cannot get value from a Failure: {sig.kind.name}: {sig.message}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> FailureSignal:
        """Extract the failure signal. Raises ValueError if called on a Success."""
        match self:
            case Failure(sig):
                return sig
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v!r}")
        raise TypeError("unreachable")  # pragma: no cover

    def unwrap(self) -> T:
        """
        Return the success value, or re-raise the captured failure unchanged.

        This is the single translation step from Outcome back to native
        propagation.
        """
        match self:
            case Success(v):
                return v
            case Failure(sig):
                sig.reraise()
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Outcome[T]:
        return Success(value)

    @staticmethod
    def failure(signal: FailureSignal) -> Outcome[T]:
        return Failure(signal)

    # ──────────────────────── Dunder methods ────────────────────────

    def __iter__(self) -> Iterator[Any]:
        """Unpack as (value_or_signal, failed)."""
        match self:
            case Success(v):
                return iter((v, False))
            case Failure(sig):
                return iter((sig, True))
        raise TypeError("unreachable")  # pragma: no cover

    def __bool__(self) -> bool:
        """`if outcome: ...` succeeds only on Success, whatever the value."""
        return self.is_success()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        match (self, other):
            case (Success(a), Success(b)):
                return a == b
            case (Failure(a), Failure(b)):
                return a == b
            case _:
                return False


@dataclass(frozen=True, slots=True, eq=False)
class Success(Outcome[T]):
    """The success track. `None` is the value of a void computation."""

    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


# Enable structural pattern matching: case Success(value)
Success.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True, eq=False)
class Failure(Outcome[T]):
    """The failure track — wraps a FailureSignal."""

    _signal: FailureSignal

    def __post_init__(self) -> None:
        if not isinstance(self._signal, FailureSignal):
            raise TypeError(f"Failure must wrap a FailureSignal, got {self._signal!r}")

    def __repr__(self) -> str:
        return f"Failure({self._signal.kind.name}: {self._signal.message!r})"


# Enable structural pattern matching: case Failure(signal)
Failure.__match_args__ = ("_signal",)
