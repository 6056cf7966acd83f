"""
Failure signals — what a captured failure looks like once it is data.

GuestError is the exception guest code raises; FailureSignal is the
immutable record protect() produces when anything is raised. The signal
keeps the original exception object so re-raising it is indistinguishable
from the failure never having been intercepted.

    >>> sig = FailureSignal.from_exception(GuestError(RUNTIME_ERROR, "boom"))
    >>> sig.kind.name, sig.message
    ('RuntimeError', 'boom')
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, NoReturn, Optional

from errbridge.kinds import RUNTIME_ERROR, FailureKind, KindRegistry, Recoverable, default_registry


class GuestError(Exception):
    """
    A failure raised with an explicit FailureKind.

    The message defaults to the kind's name, so `fail(kind)` reads like
    raising a bare exception class.
    """

    def __init__(self, kind: FailureKind, message: Optional[str] = None) -> None:
        if not isinstance(kind, FailureKind):
            raise TypeError(f"GuestError kind must be a FailureKind, got {kind!r}")
        self.kind = kind
        self.message = kind.name if message is None else message
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"GuestError({self.kind.name}: {self.message!r})"


@dataclass(frozen=True, slots=True)
class FailureSignal:
    """
    Immutable record of a captured failure: kind, message, exception, timestamp.

    Equality looks at kind and message only, so a signal can be compared
    with one built from a fresh exception of the same kind.
    """

    kind: FailureKind
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)

    @staticmethod
    def from_exception(
        exc: BaseException,
        registry: Optional[KindRegistry] = None,
    ) -> FailureSignal:
        """Classify `exc` and wrap it. Uses the default registry when none is given."""
        kind = (registry or default_registry()).classify(exc)
        message = exc.message if isinstance(exc, GuestError) else str(exc)
        return FailureSignal(kind=kind, message=message, exception=exc)

    def is_a(self, kind: FailureKind) -> bool:
        return self.kind.is_a(kind)

    def matches(self, entry: Recoverable) -> bool:
        """
        Membership test for one recoverable-set entry.

        A kind matches by ancestry; a native exception type matches only
        when the captured exception is an instance of it.
        """
        if isinstance(entry, FailureKind):
            return self.kind.is_a(entry)
        return self.exception is not None and isinstance(self.exception, entry)

    def reraise(self) -> NoReturn:
        """
        Hand the original exception back to Python's own propagation.

        A signal built without an exception raises a GuestError of its kind.
        """
        if self.exception is not None:
            raise self.exception
        raise GuestError(self.kind, self.message)

    def full_stack_trace(self) -> str:
        """Message followed by the formatted traceback of the captured exception."""
        if self.exception is None:
            return f"{self.kind.name}: {self.message}"
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.kind.name}: {self.message}\n{tb}"


def make_exception(*args: Any) -> BaseException:
    """
    Build the exception `fail(*args)` raises.

      ()                   → RuntimeError kind, empty message
      ("msg",)             → RuntimeError kind, "msg"
      (kind,)              → that kind, message = kind name
      (kind, "msg")        → that kind, "msg"
      (exception,)         → that exception object
      (ExceptionType, ...) → ExceptionType(*rest)
    """
    match args:
        case ():
            return GuestError(RUNTIME_ERROR, "")
        case (str() as message,):
            return GuestError(RUNTIME_ERROR, message)
        case (FailureKind() as kind,):
            return GuestError(kind)
        case (FailureKind() as kind, str() as message):
            return GuestError(kind, message)
        case (BaseException() as exc,):
            return exc
        case (type() as exc_type, *rest) if issubclass(exc_type, BaseException) and len(rest) <= 1:
            return exc_type(*rest)
        case _ if len(args) > 2:
            raise TypeError(f"wrong number of arguments ({len(args)} for 0..2)")
        case _:
            raise TypeError("exception class/object expected")


def fail(*args: Any) -> NoReturn:
    """
    Raise a failure from inside a computation.

    Usable where a statement is not, e.g. in a lambda body:

        protect(lambda: fail(RANGE_ERROR, "index 7 outside 0..3"))
    """
    raise make_exception(*args)
