"""
Tests for Outcome — Success/Failure creation, pair unpacking,
extraction, unwrap and pattern matching.
"""

from __future__ import annotations

import pytest

from errbridge import RANGE_ERROR, TYPE_ERROR, Failure, FailureSignal, GuestError, Outcome, Success


def _failure(kind=RANGE_ERROR, message="test") -> Outcome:
    return Outcome.failure(FailureSignal.from_exception(GuestError(kind, message)))


class TestCreation:
    def test_success_wraps_value(self):
        outcome = Outcome.success(42)
        assert outcome.is_success()
        assert not outcome.is_failure()
        assert outcome.value() == 42

    def test_success_allows_none_for_void_computations(self):
        outcome = Success(None)
        assert outcome.is_success()
        assert outcome.value() is None

    def test_failure_wraps_signal(self):
        outcome = _failure()
        assert outcome.is_failure()
        assert outcome.error().kind is RANGE_ERROR

    def test_failure_rejects_non_signal(self):
        with pytest.raises(TypeError, match="FailureSignal"):
            Failure("boom")  # type: ignore[arg-type]

    def test_truthiness(self):
        assert Success(0)
        assert Success(None)
        assert not _failure()


class TestPairUnpacking:
    def test_success_unpacks_as_value_and_false(self):
        value, failed = Outcome.success("test")
        assert (value, failed) == ("test", False)

    def test_failure_unpacks_as_signal_and_true(self):
        signal, failed = _failure(message="boom")
        assert failed is True
        assert signal.message == "boom"

    def test_tuple_conversion(self):
        assert tuple(Success("test")) == ("test", False)


class TestExtraction:
    def test_value_on_failure_raises(self):
        with pytest.raises(ValueError, match="Cannot get value from a Failure"):
            _failure().value()

    def test_error_on_success_raises(self):
        with pytest.raises(ValueError, match="Cannot get error from a Success"):
            Success(1).error()

    def test_unwrap_success(self):
        assert Success("v").unwrap() == "v"

    def test_unwrap_failure_reraises_original(self):
        exc = GuestError(TYPE_ERROR, "mismatch")
        outcome = Outcome.failure(FailureSignal.from_exception(exc))
        with pytest.raises(GuestError) as info:
            outcome.unwrap()
        assert info.value is exc


class TestEqualityAndRepr:
    def test_success_equality(self):
        assert Success(1) == Success(1)
        assert Success(1) != Success(2)

    def test_failure_equality_by_kind_and_message(self):
        assert _failure(RANGE_ERROR, "x") == _failure(RANGE_ERROR, "x")
        assert _failure(RANGE_ERROR, "x") != _failure(TYPE_ERROR, "x")

    def test_success_never_equals_failure(self):
        assert Success("x") != _failure()

    def test_not_equal_to_other_types(self):
        assert Success(1) != 1

    def test_repr(self):
        assert repr(Success("a")) == "Success('a')"
        assert repr(_failure(RANGE_ERROR, "x")) == "Failure(RangeError: 'x')"


class TestPatternMatching:
    def test_match_success(self):
        match Success(7):
            case Success(v):
                assert v == 7
            case _:
                pytest.fail("expected Success")

    def test_match_failure(self):
        match _failure(TYPE_ERROR, "m"):
            case Failure(signal):
                assert signal.kind is TYPE_ERROR
            case _:
                pytest.fail("expected Failure")
