"""Tests for GuestError, FailureSignal and fail()."""

from __future__ import annotations

from datetime import datetime

import pytest

from errbridge import (
    RANGE_ERROR,
    RUNTIME_ERROR,
    STANDARD_ERROR,
    TYPE_ERROR,
    FailureSignal,
    GuestError,
    fail,
    make_exception,
)
from errbridge.kinds import ARGUMENT_ERROR


class TestGuestError:
    def test_kind_and_message(self):
        exc = GuestError(RANGE_ERROR, "index 7 outside 0..3")
        assert exc.kind is RANGE_ERROR
        assert exc.message == "index 7 outside 0..3"
        assert str(exc) == "index 7 outside 0..3"

    def test_message_defaults_to_kind_name(self):
        assert GuestError(TYPE_ERROR).message == "TypeError"

    def test_rejects_non_kind(self):
        with pytest.raises(TypeError, match="FailureKind"):
            GuestError("RangeError")  # type: ignore[arg-type]

    def test_repr(self):
        assert repr(GuestError(RANGE_ERROR, "x")) == "GuestError(RangeError: 'x')"


class TestMakeException:
    def test_no_arguments_is_runtime_error(self):
        exc = make_exception()
        assert exc.kind is RUNTIME_ERROR
        assert exc.message == ""

    def test_message_only_is_runtime_error(self):
        exc = make_exception("test")
        assert exc.kind is RUNTIME_ERROR
        assert exc.message == "test"

    def test_kind_only(self):
        exc = make_exception(RANGE_ERROR)
        assert exc.kind is RANGE_ERROR
        assert exc.message == "RangeError"

    def test_kind_and_message(self):
        exc = make_exception(TYPE_ERROR, "expected Integer")
        assert exc.kind is TYPE_ERROR
        assert exc.message == "expected Integer"

    def test_exception_instance_passes_through(self):
        original = ValueError("bad")
        assert make_exception(original) is original

    def test_native_exception_type(self):
        exc = make_exception(KeyError, "missing")
        assert isinstance(exc, KeyError)
        assert exc.args == ("missing",)

    def test_native_exception_type_without_message(self):
        assert isinstance(make_exception(ValueError), ValueError)

    def test_rejects_non_exception_object(self):
        with pytest.raises(TypeError, match="exception class/object expected"):
            make_exception(42)

    def test_rejects_too_many_arguments(self):
        with pytest.raises(TypeError, match="wrong number of arguments"):
            make_exception(RANGE_ERROR, "a", "b")


class TestFail:
    def test_raises_guest_error(self):
        with pytest.raises(GuestError) as info:
            fail(RANGE_ERROR, "test")
        assert info.value.kind is RANGE_ERROR

    def test_raises_native_exception(self):
        with pytest.raises(ZeroDivisionError):
            fail(ZeroDivisionError("divided by 0"))


class TestFailureSignal:
    def test_from_guest_error(self):
        exc = GuestError(RANGE_ERROR, "test")
        signal = FailureSignal.from_exception(exc)
        assert signal.kind is RANGE_ERROR
        assert signal.message == "test"
        assert signal.exception is exc
        assert isinstance(signal.timestamp, datetime)

    def test_from_native_exception(self):
        signal = FailureSignal.from_exception(ValueError("invalid literal"))
        assert signal.kind == ARGUMENT_ERROR
        assert signal.message == "invalid literal"

    def test_equality_ignores_exception_and_timestamp(self):
        a = FailureSignal.from_exception(GuestError(RANGE_ERROR, "test"))
        b = FailureSignal.from_exception(GuestError(RANGE_ERROR, "test"))
        assert a == b
        assert a != FailureSignal.from_exception(GuestError(TYPE_ERROR, "test"))

    def test_is_a(self):
        signal = FailureSignal(RANGE_ERROR, "x")
        assert signal.is_a(RANGE_ERROR)
        assert not signal.is_a(TYPE_ERROR)

    def test_matches_kind_by_ancestry(self):
        signal = FailureSignal.from_exception(GuestError(RANGE_ERROR, "x"))
        assert signal.matches(RANGE_ERROR)
        assert signal.matches(STANDARD_ERROR)
        assert not signal.matches(TYPE_ERROR)

    def test_matches_exception_type_by_isinstance(self):
        signal = FailureSignal.from_exception(ZeroDivisionError("division by zero"))
        assert signal.matches(ZeroDivisionError)
        assert signal.matches(ArithmeticError)
        assert not signal.matches(OverflowError)

    def test_exception_type_never_matches_guest_kind(self):
        signal = FailureSignal.from_exception(GuestError(TYPE_ERROR, "t"))
        assert not signal.matches(ArithmeticError)
        assert not signal.matches(TypeError)

    def test_exception_type_never_matches_detached_signal(self):
        assert not FailureSignal(TYPE_ERROR, "x").matches(Exception)

    def test_reraise_raises_original_object(self):
        exc = GuestError(RANGE_ERROR, "test")
        signal = FailureSignal.from_exception(exc)
        with pytest.raises(GuestError) as info:
            signal.reraise()
        assert info.value is exc

    def test_reraise_without_exception_builds_guest_error(self):
        with pytest.raises(GuestError) as info:
            FailureSignal(TYPE_ERROR, "detached").reraise()
        assert info.value.kind is TYPE_ERROR
        assert info.value.message == "detached"

    def test_full_stack_trace_includes_traceback(self):
        try:
            fail(RANGE_ERROR, "deep")
        except GuestError as exc:
            signal = FailureSignal.from_exception(exc)
        trace = signal.full_stack_trace()
        assert trace.startswith("RangeError: deep")
        assert "Traceback" in trace

    def test_full_stack_trace_without_exception(self):
        assert FailureSignal(TYPE_ERROR, "x").full_stack_trace() == "TypeError: x"

    def test_frozen(self):
        signal = FailureSignal(TYPE_ERROR, "x")
        with pytest.raises(AttributeError):
            signal.message = "y"  # type: ignore[misc]
