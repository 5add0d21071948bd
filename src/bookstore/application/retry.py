"""Bounded retry for operations that lost a concurrent-write race.

Only wrap operations that re-read their inputs on every attempt; a retry
then works against fresh state instead of replaying a stale decision.
"""

from __future__ import annotations

import logging
import time
from functools import wraps

from bookstore.domain.exceptions import ConcurrentModificationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF = 0.05


def retry_on_conflict(method):
    """Retry a handler method on ConcurrentModificationError.

    The handler supplies ``_max_attempts`` and ``_backoff`` (seconds,
    multiplied by the attempt number).
    """

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        attempt = 0
        while True:
            attempt += 1
            try:
                return method(self, *args, **kwargs)
            except ConcurrentModificationError as exc:
                if attempt >= self._max_attempts:
                    raise
                logger.warning(
                    "%s.%s conflicted (attempt %d/%d): %s",
                    type(self).__name__, method.__name__,
                    attempt, self._max_attempts, exc,
                )
                time.sleep(self._backoff * attempt)

    return wrapper
