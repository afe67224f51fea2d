"""Histories backed by a host platform's navigation stack.

The platform (a browser's session history, a webview, a test double)
owns the real stack.  These histories push and replace entries on it,
stamp each entry with its logical index, and listen for the platform's
position-change notifications.

A platform back/forward has already happened by the time it is
reported, so it cannot simply be refused.  To block one, the history
moves the platform back to where it was, remembers the attempted pop as
a pending ``Transition``, and hands that transition to the blocker when
the platform reports the reversal.  ``transition.retry()`` replays the
original move.
"""

from abc import abstractmethod
from collections.abc import Callable
from typing import Protocol

from waymark._internal.diagnostics import Diagnostics
from waymark.config import NavigationConfig
from waymark.history.base import History
from waymark.history.transition import PersistedEntry, Transition
from waymark.location import Action, Location, PartialPath, To, create_path, parse_path


class Platform(Protocol):
    """What a host must provide to back a ``BrowserHistory`` or ``HashHistory``.

    URLs are path-only strings (``/users?page=2#top``); for hash
    histories the path lives after the ``#``.
    """

    def read(self) -> tuple[str, PersistedEntry | None]:
        """Return the current URL and the payload stored with the current entry."""
        ...

    def push_entry(self, entry: PersistedEntry, url: str) -> None: ...

    def replace_entry(self, entry: PersistedEntry, url: str | None = None) -> None:
        """Replace the current entry's payload, and its URL unless *url* is ``None``."""
        ...

    def go(self, delta: int) -> None:
        """Move the stack position; the platform reports the change to subscribers."""
        ...

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call *callback* after every position change. Returns an unsubscribe function."""
        ...

    def set_unload_guard(self, enabled: bool) -> None:
        """Prompt the user before the page or process unloads while enabled."""
        ...


class _PlatformHistory(History):
    """Shared push/replace/pop handling for platform-backed histories."""

    def __init__(
        self,
        platform: Platform,
        config: NavigationConfig | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        super().__init__(config, diagnostics)
        self.platform = platform
        self._blocked_pop: Transition | None = None
        # True while the current entry is one this history did not create
        self._off_stack = False

        index, location = self._read()
        if index is None:
            index = 0
            self.platform.replace_entry(
                PersistedEntry(state=location.state, key=location.key, index=index)
            )
        self._index = index
        self._location = location
        self._unsubscribe = self.platform.subscribe(self._handle_pop)

    @property
    def pending_pop(self) -> Transition | None:
        """The reverted pop waiting to be handed to the blocker, if any."""
        return self._blocked_pop

    def go(self, delta: int) -> None:
        self.platform.go(delta)

    def close(self) -> None:
        """Stop listening to the platform and drop the unload guard."""
        self._unsubscribe()
        if self._blockers:
            self.platform.set_unload_guard(False)

    @abstractmethod
    def _path_from_url(self, url: str) -> PartialPath:
        """Extract the location path from a platform URL."""

    def _read(self) -> tuple[int | None, Location]:
        url, entry = self.platform.read()
        path = self._path_from_url(url)
        location = Location(
            pathname=path.pathname or "/",
            search=path.search or "",
            hash=path.hash or "",
            state=entry.state if entry else None,
            key=(entry.key if entry else None) or "default",
        )
        return (entry.index if entry else None), location

    def _handle_pop(self) -> None:
        if self._blocked_pop is not None:
            # This notification is our own revert; now ask the blocker
            transition, self._blocked_pop = self._blocked_pop, None
            self._blockers.call_first(transition)
            return

        next_index, next_location = self._read()

        if self._blockers:
            if next_index is None:
                self.diagnostics.warn(
                    "You are trying to block a POP navigation to a location that was not "
                    "created by this history. The navigation cannot be reverted and will "
                    "proceed; do all navigation through the history to avoid this.",
                    key="unblockable-pop",
                )
            elif not self._off_stack:
                delta = self._index - next_index
                if delta:
                    self._blocked_pop = Transition(Action.POP, next_location, -delta, None, self)
                    self.go(delta)
                return
            # Leaving an entry with no index: there is no position to revert to

        self._off_stack = next_index is None
        self._apply(Action.POP, next_location, self._index if next_index is None else next_index)

    def _commit_push(self, location: Location) -> None:
        index = self._index + 1
        entry = PersistedEntry(state=location.state, key=location.key, index=index)
        self.platform.push_entry(entry, self.create_href(location))
        self._off_stack = False
        self._apply(Action.PUSH, location, index)

    def _commit_replace(self, location: Location) -> None:
        entry = PersistedEntry(state=location.state, key=location.key, index=self._index)
        self.platform.replace_entry(entry, self.create_href(location))
        self._off_stack = False
        self._apply(Action.REPLACE, location, self._index)

    def _set_unload_guard(self, enabled: bool) -> None:
        self.platform.set_unload_guard(enabled)


class BrowserHistory(_PlatformHistory):
    """History stored in the platform URL's path, search, and hash."""

    def _path_from_url(self, url: str) -> PartialPath:
        return parse_path(url)


class HashHistory(_PlatformHistory):
    """History stored in the platform URL's fragment: ``/index.html#/users/42``.

    Args:
        base_href: Prefix placed before the ``#`` in created hrefs.
    """

    def __init__(
        self,
        platform: Platform,
        base_href: str = "",
        config: NavigationConfig | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self.base_href = base_href
        super().__init__(platform, config, diagnostics)

    def create_href(self, to: To) -> str:
        return self.base_href + "#" + (to if isinstance(to, str) else create_path(to))

    def _path_from_url(self, url: str) -> PartialPath:
        hash_index = url.find("#")
        return parse_path(url[hash_index + 1 :] if hash_index >= 0 else "")

    def _check_target(self, to: To, location: Location, method: str) -> None:
        self._warn_relative(to, location, method, "hash history")
