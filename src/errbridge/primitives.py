"""
The four bridging primitives: protect, ensure, rescue, rescue_exceptions.

protect is the only place a raised failure is caught; it turns the failure
into an Outcome. The other three compose over that Outcome and hand
failures back to Python's propagation through an explicit unwrap/reraise.

    protect(body)                                 → Outcome  (never raises)
    ensure(body, cleanup)                         → value    (cleanup always runs)
    rescue(body, handler)                         → value    (standard kinds recovered)
    rescue_exceptions(recoverable, body, handler) → value    (listed kinds recovered)

Module-level functions use a default Bridge bound to the process-wide kind
registry. Embeddings that define their own kinds or a different default
recoverable set build their own Bridge; both surfaces behave identically.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

import structlog

from errbridge.config import BridgeSettings
from errbridge.failure import FailureSignal
from errbridge.kinds import STANDARD_ERROR, KindRef, KindRegistry, Recoverable, default_registry
from errbridge.outcome import Failure, Outcome, Success

T = TypeVar("T")
Computation = Callable[[], Any]

log = structlog.get_logger()


def _require_callable(fn: Any, role: str) -> None:
    if not callable(fn):
        raise TypeError(f"{role} must be a zero-argument callable, got {fn!r}")


def _matches(signal: FailureSignal, recoverable: tuple[Recoverable, ...]) -> bool:
    return any(signal.matches(entry) for entry in recoverable)


class Bridge:
    """
    The bridging primitives bound to one kind registry.

        registry = KindRegistry.with_builtins()
        custom = registry.define("CustomExp", parent="Exception")
        bridge = Bridge(registry)

        bridge.rescue(lambda: fail(custom, "x"), lambda: "rescued")  # raises: not standard
        bridge.rescue_exceptions([custom], lambda: fail(custom, "x"), lambda: "rescued")
    """

    def __init__(
        self,
        registry: Optional[KindRegistry] = None,
        rescue_kinds: Optional[Iterable[KindRef]] = None,
        log_captures: bool = False,
    ) -> None:
        self._registry = registry or default_registry()
        self._rescue_kinds = (
            self._registry.resolve(rescue_kinds) if rescue_kinds is not None else (STANDARD_ERROR,)
        )
        if not self._rescue_kinds:
            raise ValueError("rescue needs at least one recoverable kind")
        self._log_captures = log_captures

    @classmethod
    def from_settings(
        cls,
        settings: BridgeSettings,
        registry: Optional[KindRegistry] = None,
    ) -> Bridge:
        """Build a bridge from validated settings; kind names resolve against `registry`."""
        return cls(
            registry=registry,
            rescue_kinds=settings.rescue_kinds,
            log_captures=settings.log_captures,
        )

    @property
    def registry(self) -> KindRegistry:
        return self._registry

    @property
    def rescue_kinds(self) -> tuple[Recoverable, ...]:
        return self._rescue_kinds

    # ──────────────────────── Protect ────────────────────────

    def protect(self, body: Callable[[], T]) -> Outcome[T]:
        """
        Run `body` and capture its outcome instead of letting it propagate.

        Returns Success(result) or Failure(signal); unpacks as
        (value_or_signal, failed). `body` is checked to be callable before
        it runs, and a non-callable raises TypeError without being captured.
        Once `body` runs, every BaseException it raises is captured,
        including KeyboardInterrupt and SystemExit.

        Nothing is logged unless the bridge was built with log_captures=True.
        """
        _require_callable(body, "body")
        try:
            result = body()
        except BaseException as exc:
            signal = FailureSignal.from_exception(exc, self._registry)
        else:
            return Success(result)
        if self._log_captures:
            log.debug("protect.captured", kind=signal.kind.name, message=signal.message)
        return Failure(signal)

    # ──────────────────────── Ensure ────────────────────────

    def ensure(self, body: Callable[[], T], cleanup: Computation) -> T:
        """
        Run `body`, then `cleanup` exactly once, then return or re-raise.

        A failing cleanup is never suppressed. If body had already failed,
        the cleanup failure propagates with body's exception as its
        __context__, the same precedence a `finally` block has.
        """
        _require_callable(cleanup, "cleanup")
        outcome = self.protect(body)
        try:
            cleanup()
        except BaseException as cleanup_exc:
            if outcome.is_failure():
                pending = outcome.error()
                if self._log_captures:
                    log.warning(
                        "ensure.cleanup_failed",
                        pending_kind=pending.kind.name,
                        cleanup_error=str(cleanup_exc),
                    )
                if cleanup_exc.__context__ is None and cleanup_exc is not pending.exception:
                    cleanup_exc.__context__ = pending.exception
            raise
        return outcome.unwrap()

    # ──────────────────────── Rescue ────────────────────────

    def rescue(self, body: Callable[[], T], handler: Callable[[], T]) -> T:
        """
        Run `body`; if it fails with a standard kind, return `handler()` instead.

        The handler receives nothing about the failure; it is a plain
        fallback. Failures outside the bridge's rescue kinds (by default,
        anything not under StandardError) propagate unchanged.
        """
        return self._recover(self._rescue_kinds, body, handler)

    def rescue_exceptions(
        self,
        recoverable: KindRef | Iterable[KindRef],
        body: Callable[[], T],
        handler: Callable[[], T],
    ) -> T:
        """
        Run `body`; recover with `handler()` only for the listed kinds.

        `recoverable` entries may be FailureKinds, registered kind names, or
        native exception types. Kinds match by ancestry; exception types
        match by isinstance() on the captured exception and never widen to
        the kind of a base class. Any other failure is re-raised as the
        original exception object. An empty set recovers nothing.
        """
        return self._recover(self._registry.resolve(recoverable), body, handler)

    def _recover(
        self,
        recoverable: tuple[Recoverable, ...],
        body: Callable[[], T],
        handler: Callable[[], T],
    ) -> T:
        _require_callable(handler, "handler")
        match self.protect(body):
            case Success(value):
                return value
            case Failure(signal) if _matches(signal, recoverable):
                if self._log_captures:
                    log.debug("rescue.recovered", kind=signal.kind.name)
                return handler()
            case Failure(signal):
                if self._log_captures:
                    log.debug("rescue.relayed", kind=signal.kind.name)
                signal.reraise()
        raise TypeError("unreachable")  # pragma: no cover


_DEFAULT_BRIDGE = Bridge()


def default_bridge() -> Bridge:
    """The bridge behind the module-level functions."""
    return _DEFAULT_BRIDGE


# ──────────────────────── Module-level surface ────────────────────────


def protect(body: Callable[[], T]) -> Outcome[T]:
    """Run `body`; return Success(value) or Failure(signal). Never raises."""
    return _DEFAULT_BRIDGE.protect(body)


def ensure(body: Callable[[], T], cleanup: Computation) -> T:
    """Run `body`, always run `cleanup`, then return body's value or re-raise."""
    return _DEFAULT_BRIDGE.ensure(body, cleanup)


def rescue(body: Callable[[], T], handler: Callable[[], T]) -> T:
    """Run `body`; on a standard-kind failure return `handler()`."""
    return _DEFAULT_BRIDGE.rescue(body, handler)


def rescue_exceptions(
    recoverable: KindRef | Iterable[KindRef],
    body: Callable[[], T],
    handler: Callable[[], T],
) -> T:
    """Run `body`; on a failure of a listed kind return `handler()`, else re-raise."""
    return _DEFAULT_BRIDGE.rescue_exceptions(recoverable, body, handler)


# ──────────────────────── Decorator Helper ────────────────────────


def protected(fn: Callable[..., T]) -> Callable[..., Outcome[T]]:
    """
    Decorator: calling the wrapped function returns the Outcome of the call.

        @protected
        def parse_port(raw: str) -> int:
            return int(raw)

        parse_port("80")     # → Success(80)
        parse_port("eighty") # → Failure(ArgumentError: ...)
    """

    def wrapper(*args: Any, **kwargs: Any) -> Outcome[T]:
        return protect(lambda: fn(*args, **kwargs))

    wrapper.__name__ = fn.__name__
    wrapper.__doc__ = fn.__doc__
    return wrapper
