"""
Shared test fixtures for the errbridge test suite.

Provides a private kind registry per test (so user-defined kinds never leak
into the process-wide registry) and resets structlog after each test so a
cached configuration from one module cannot hide events from another.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from errbridge import EXCEPTION, Bridge, KindRegistry


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture()
def registry() -> KindRegistry:
    """A fresh registry holding only the built-in taxonomy."""
    return KindRegistry.with_builtins()


@pytest.fixture()
def custom_registry(registry: KindRegistry) -> KindRegistry:
    """
    Registry extended with a user kind declared directly under the root:
    the CustomExp of the fixtures, which is not a standard failure.
    """
    registry.define("CustomExp", parent=EXCEPTION)
    return registry


@pytest.fixture()
def bridge(custom_registry: KindRegistry) -> Bridge:
    """A Bridge bound to the extended registry."""
    return Bridge(custom_registry)
