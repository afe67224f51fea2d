"""Deduplicating warning sink.

Non-fatal problems (a pattern written as ``/files*``, a malformed
percent escape, a pop the history did not create) are reported here
instead of raising.  Each router or history owns one instance, so the
"already warned" set lives with its owner rather than in module state.
"""

import logging

_default_logger = logging.getLogger("waymark")


class Diagnostics:
    """Logs warnings, optionally suppressing repeats.

    Args:
        logger: Logger to emit on. Defaults to the ``waymark`` logger.
        warn_once: When true, a message (or explicit *key*) is logged
            only the first time it is seen by this instance.
    """

    __slots__ = ("_logger", "_seen", "warn_once")

    def __init__(self, logger: logging.Logger | None = None, *, warn_once: bool = True) -> None:
        self._logger = logger or _default_logger
        self._seen: set[str] = set()
        self.warn_once = warn_once

    @property
    def seen(self) -> frozenset[str]:
        """Keys of every warning emitted so far."""
        return frozenset(self._seen)

    def warn(self, message: str, *, key: str | None = None) -> bool:
        """Log *message* at WARNING level.

        Returns ``True`` if the message was emitted, ``False`` if it was
        suppressed as a repeat.
        """
        dedupe_key = key or message
        if self.warn_once and dedupe_key in self._seen:
            return False
        self._seen.add(dedupe_key)
        self._logger.warning(message)
        return True

    def reset(self) -> None:
        """Forget every warning seen so far."""
        self._seen.clear()


def emit_warning(
    message: str,
    diagnostics: Diagnostics | None = None,
    *,
    logger: logging.Logger | None = None,
    key: str | None = None,
) -> None:
    """Route *message* through *diagnostics*, or log it directly when none is given."""
    if diagnostics is not None:
        diagnostics.warn(message, key=key)
    else:
        (logger or _default_logger).warning(message)
