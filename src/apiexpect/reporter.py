from __future__ import annotations

from typing import Protocol


class Reporter(Protocol):
    def error(self, message: str) -> None: ...


class AssertReporter:
    """Fails the running test immediately by raising AssertionError."""

    def error(self, message: str) -> None:
        raise AssertionError(message)


class RecordingReporter:
    """Collects failure messages so a test can continue and check them later."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)

    @property
    def failed(self) -> bool:
        return bool(self.messages)

    def clear(self) -> None:
        self.messages.clear()

    def raise_if_failed(self) -> None:
        if self.messages:
            raise AssertionError("\n\n".join(self.messages))
