"""
Assert helpers for tests that check what protect() captured.

    from errbridge import OutcomeAssertions, RANGE_ERROR, protect

    def test_out_of_range():
        signal = OutcomeAssertions.assert_failure(protect(lambda: lookup(7)), RANGE_ERROR)
        assert "7" in signal.message
"""

from __future__ import annotations

from typing import Any, TypeVar

from errbridge.failure import FailureSignal
from errbridge.kinds import FailureKind
from errbridge.outcome import Outcome

T = TypeVar("T")


def _suffix(note: str) -> str:
    return f" — {note}" if note else ""


class OutcomeAssertions:
    """Outcome checks whose assertion messages name the captured kind."""

    @staticmethod
    def assert_success(outcome: Outcome[T], note: str = "") -> T:
        """Assert the body completed and return its value."""
        if outcome.is_failure():
            signal = outcome.error()
            raise AssertionError(
                f"Expected Success but got Failure({signal.kind.name}: {signal.message!r})"
                f"{_suffix(note)}"
            )
        return outcome.value()

    @staticmethod
    def assert_failure(
        outcome: Outcome[T],
        expected_kind: FailureKind | None = None,
        note: str = "",
    ) -> FailureSignal:
        """
        Assert the body failed and return the captured signal.

        With `expected_kind`, the signal's kind must be that kind or one of
        its descendants, the same membership rule rescue uses.
        """
        if outcome.is_success():
            raise AssertionError(
                f"Expected Failure but got Success({outcome.value()!r}){_suffix(note)}"
            )
        signal = outcome.error()
        if expected_kind is not None and not signal.is_a(expected_kind):
            raise AssertionError(
                f"Expected failure kind {expected_kind.name} "
                f"but got {signal.kind.name}: {signal.message!r}{_suffix(note)}"
            )
        return signal

    @staticmethod
    def assert_success_value(outcome: Outcome[T], expected_value: Any) -> None:
        value = OutcomeAssertions.assert_success(outcome)
        if value != expected_value:
            raise AssertionError(f"Expected success value {expected_value!r} but got {value!r}")
