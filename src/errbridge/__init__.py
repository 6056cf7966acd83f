"""
errbridge — controlled exception bridging between a host and guest computations.

Run a guest computation and decide exactly what happens when it fails:
capture it as data, clean up and relay it, or recover from selected kinds.

    from errbridge import RANGE_ERROR, TYPE_ERROR, ensure, fail, protect, rescue_exceptions

    value, failed = protect(lambda: fail("test"))      # (FailureSignal, True)
    ensure(lambda: load(), lambda: release())          # release() always runs
    rescue_exceptions([TYPE_ERROR], lambda: fail(RANGE_ERROR, "x"), lambda: 0)  # re-raises
"""

from errbridge.outcome import Outcome, Success, Failure
from errbridge.failure import FailureSignal, GuestError, fail, make_exception
from errbridge.kinds import (
    ARGUMENT_ERROR,
    EXCEPTION,
    INDEX_ERROR,
    KEY_ERROR,
    NO_MEMORY_ERROR,
    NOT_IMPLEMENTED_ERROR,
    RANGE_ERROR,
    RUNTIME_ERROR,
    SCRIPT_ERROR,
    STANDARD_ERROR,
    SYSTEM_STACK_ERROR,
    TYPE_ERROR,
    FailureKind,
    KindRegistry,
    default_registry,
)
from errbridge.primitives import (
    Bridge,
    default_bridge,
    ensure,
    protect,
    protected,
    rescue,
    rescue_exceptions,
)
from errbridge.config import BridgeSettings
from errbridge.log_config import configure_structlog
from errbridge.assertions import OutcomeAssertions

__all__ = [
    "Outcome",
    "Success",
    "Failure",
    "FailureSignal",
    "GuestError",
    "fail",
    "make_exception",
    "FailureKind",
    "KindRegistry",
    "default_registry",
    "EXCEPTION",
    "STANDARD_ERROR",
    "RUNTIME_ERROR",
    "TYPE_ERROR",
    "ARGUMENT_ERROR",
    "INDEX_ERROR",
    "KEY_ERROR",
    "RANGE_ERROR",
    "SCRIPT_ERROR",
    "NOT_IMPLEMENTED_ERROR",
    "SYSTEM_STACK_ERROR",
    "NO_MEMORY_ERROR",
    "Bridge",
    "default_bridge",
    "protect",
    "ensure",
    "rescue",
    "rescue_exceptions",
    "protected",
    "BridgeSettings",
    "configure_structlog",
    "OutcomeAssertions",
]

__version__ = "0.1.0"
