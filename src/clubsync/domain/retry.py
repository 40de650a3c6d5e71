"""Bounded retry and polling helpers used around directory writes."""

from __future__ import annotations

import time
from logging import getLogger
from typing import TYPE_CHECKING

from clubsync.domain.errors import DirectoryError

if TYPE_CHECKING:
    from collections.abc import Callable

    from clubsync.domain.errors import DirectoryErrorKind

log = getLogger(__name__)

type Sleep = Callable[[float], None]


class RetryExhaustedError(RuntimeError):
    """Raised when a bounded retry loop gives up."""

    def __init__(
        self, message: str, *, attempts: int, last_error: BaseException | None = None
    ) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


def retry_on_specific_error[T](
    operation: Callable[[], T],
    kind: DirectoryErrorKind,
    *,
    backoff_seconds: float,
    max_attempts: int,
    sleep: Sleep = time.sleep,
) -> T:
    """Call ``operation`` until it stops raising ``DirectoryError`` of ``kind``.

    Any other error propagates immediately. After ``max_attempts`` calls that all
    failed with ``kind`` a ``RetryExhaustedError`` is raised.
    """

    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: DirectoryError | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except DirectoryError as exc:
            if exc.kind is not kind:
                raise
            last_error = exc
            log.info("Attempt %d/%d hit %s; retrying", attempt, max_attempts, kind)
            if attempt < max_attempts:
                sleep(backoff_seconds)

    raise RetryExhaustedError(
        f"Gave up after {max_attempts} attempts: {last_error}",
        attempts=max_attempts,
        last_error=last_error,
    )


def wait_until_or_timeout(
    max_attempts: int,
    predicate: Callable[[], bool],
    *,
    interval_seconds: float,
    sleep: Sleep = time.sleep,
) -> bool:
    """Poll ``predicate`` up to ``max_attempts`` times and return its last value."""

    result = False
    for attempt in range(1, max_attempts + 1):
        result = predicate()
        if result:
            return True
        if attempt < max_attempts:
            sleep(interval_seconds)
    return result
