"""Ordered handler registry used for listeners and blockers."""

from collections.abc import Callable
from typing import Any


class Registry[F: Callable[..., Any]]:
    """Handlers kept in registration order.

    ``push`` returns an unsubscribe function.  Unsubscribing removes
    every registration of that handler.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: list[F] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def __bool__(self) -> bool:
        return bool(self._handlers)

    def push(self, fn: F) -> Callable[[], None]:
        self._handlers.append(fn)

        def unsubscribe() -> None:
            self._handlers = [handler for handler in self._handlers if handler is not fn]

        return unsubscribe

    def call(self, arg: Any) -> None:
        """Call every handler, in registration order."""
        for fn in list(self._handlers):
            fn(arg)

    def call_first(self, arg: Any) -> bool:
        """Call only the earliest registered handler. Returns ``False`` if there is none."""
        if not self._handlers:
            return False
        self._handlers[0](arg)
        return True
