# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Progress indicator collaborator.

Operations announce long-running requests through an injected
ProgressIndicator instead of a process-wide singleton, so tests and
non-interactive callers can pass NullProgress.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, Protocol

from rich.console import Console


class Activity(str, Enum):
    """Kind of request being performed, used to pick the progress message."""

    GETTING = "Loading"
    ADDING = "Adding"
    UPDATING = "Updating"
    DELETING = "Deleting"
    RESTORING = "Restoring"
    PURGING = "Purging"
    ERASING = "Erasing"
    IMPORTING = "Importing"
    EXPORTING = "Exporting"


class ProgressIndicator(Protocol):
    """Something that can display and hide a busy indicator."""

    def show(self, activity: Activity) -> None: ...

    def hide(self) -> None: ...


class NullProgress:
    """Indicator that displays nothing."""

    def show(self, activity: Activity) -> None:
        pass

    def hide(self) -> None:
        pass


class ConsoleProgress:
    """Rich spinner on the terminal while requests are in flight.

    Overlapping requests share one spinner: each show() must be paired with
    a hide(), and the spinner stops when the last in-flight request hides it.
    The message follows the most recent activity.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)
        self._status: Any = None
        self._active = 0

    @property
    def active(self) -> int:
        """Number of requests currently showing the spinner."""
        return self._active

    def show(self, activity: Activity) -> None:
        self._active += 1
        message = f"{activity.value}..."
        if self._status is None:
            self._status = self.console.status(message)
            self._status.start()
        else:
            self._status.update(message)

    def hide(self) -> None:
        if self._active == 0:
            return
        self._active -= 1
        if self._active == 0 and self._status is not None:
            self._status.stop()
            self._status = None


@contextmanager
def showing(progress: ProgressIndicator, activity: Activity, enabled: bool) -> Iterator[None]:
    """Show progress for the duration of the block when enabled."""
    if not enabled:
        yield
        return
    progress.show(activity)
    try:
        yield
    finally:
        progress.hide()


__all__ = ["Activity", "ConsoleProgress", "NullProgress", "ProgressIndicator", "showing"]
