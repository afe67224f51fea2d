"""In-memory history stack.

Useful for tests and for hosts without a navigable stack of their own.
Unlike the platform histories, ``go`` is blocked before it happens, so
no reconciliation is needed.
"""

from collections.abc import Mapping, Sequence

from waymark._internal.diagnostics import Diagnostics
from waymark.config import NavigationConfig
from waymark.history.base import History
from waymark.history.transition import Transition
from waymark.location import Action, Location, To, create_key, to_partial_path


def _clamp(n: int, lower: int, upper: int) -> int:
    return min(max(n, lower), upper)


class MemoryHistory(History):
    """A history whose entries live in a Python list.

    Args:
        initial_entries: Starting stack. Strings, paths, mappings and
            locations are accepted; a ``Location`` keeps its state and key.
        initial_index: Starting position. Defaults to the last entry and
            is clamped to the stack.
    """

    def __init__(
        self,
        initial_entries: Sequence[To | Location] = ("/",),
        initial_index: int | None = None,
        config: NavigationConfig | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        super().__init__(config, diagnostics)
        if not initial_entries:
            msg = "MemoryHistory needs at least one initial entry"
            raise ValueError(msg)

        self._entries: list[Location] = [self._initial_location(entry) for entry in initial_entries]
        last = len(self._entries) - 1
        self._index = _clamp(last if initial_index is None else initial_index, 0, last)
        self._location = self._entries[self._index]

    @property
    def entries(self) -> tuple[Location, ...]:
        return tuple(self._entries)

    def go(self, delta: int) -> None:
        next_index = _clamp(self._index + delta, 0, len(self._entries) - 1)
        next_location = self._entries[next_index]
        if self._allow(Transition(Action.POP, next_location, delta, None, self)):
            self._apply(Action.POP, next_location, next_index)

    def _initial_location(self, entry: To | Location) -> Location:
        if isinstance(entry, Location):
            location = entry
        else:
            partial = to_partial_path(entry)
            extras = entry if isinstance(entry, Mapping) else {}
            location = Location(
                pathname=partial.pathname or "/",
                search=partial.search or "",
                hash=partial.hash or "",
                state=extras.get("state"),
                key=extras.get("key") or create_key(self.config.key_length),
            )
        if not location.pathname.startswith("/"):
            self.diagnostics.warn(
                f"Relative pathnames are not supported in MemoryHistory initial entries "
                f"(invalid entry: {entry!r})"
            )
        return location

    def _check_target(self, to: To, location: Location, method: str) -> None:
        self._warn_relative(to, location, method, "memory history")

    def _commit_push(self, location: Location) -> None:
        index = self._index + 1
        del self._entries[index:]
        self._entries.append(location)
        self._apply(Action.PUSH, location, index)

    def _commit_replace(self, location: Location) -> None:
        self._entries[self._index] = location
        self._apply(Action.REPLACE, location, self._index)
