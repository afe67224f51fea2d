"""Blocked navigations and persisted entry payloads."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from waymark.location import Action, Location, To

if TYPE_CHECKING:
    from waymark.history.base import History


@dataclass(frozen=True, slots=True)
class Transition:
    """A navigation intercepted by a blocker before it committed.

    The blocked operation is kept as data: ``action`` says which method
    was called and ``target``/``state`` are the arguments it was called
    with (``target`` is the delta for a ``POP``).  ``retry()`` calls that
    method again with the same arguments; if a blocker is still
    registered at that point, the retry is blocked again.
    """

    action: Action
    location: Location
    target: To | int
    state: Any = None
    history: "History | None" = field(default=None, repr=False, compare=False)

    def retry(self) -> None:
        if self.history is None:
            msg = "Transition is not bound to a history"
            raise RuntimeError(msg)
        self.history.retry(self)


@dataclass(frozen=True, slots=True)
class PersistedEntry:
    """The payload a platform stores with each stack entry.

    ``index`` is the entry's position in the logical stack; an entry
    without one was not created by this history.
    """

    state: Any
    key: str
    index: int | None
