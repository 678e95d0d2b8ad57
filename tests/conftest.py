"""
Shared test fixtures and helpers for the xresult test suite.

Provides a closeable test double for scoped-resource tests, an
application-defined cause, and resets structlog between tests so that
configure_structlog() in one test never leaks into another.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import pytest
import structlog

from xresult import Cause


class FakeHandle:
    """Closeable test double that counts close() calls."""

    def __init__(self, fail_on_close: bool = False) -> None:
        self.close_count = 0
        self._fail_on_close = fail_on_close

    def close(self) -> None:
        self.close_count += 1
        if self._fail_on_close:
            raise OSError("close failed")


@dataclass(frozen=True, slots=True)
class HttpError(Cause):
    """Application-defined cause carrying HTTP failure details."""

    status: int
    message: str
    method: str
    url: str

    def describe(self) -> str:
        return f"{self.method} {self.url} -> {self.status} {self.message}"


@pytest.fixture()
def handle() -> FakeHandle:
    return FakeHandle()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
