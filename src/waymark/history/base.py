"""History engine core shared by every history flavour.

Owns the ``(index, location, action)`` triple and the listener and
blocker registries, and implements the push/replace blocking protocol.
Subclasses decide how a committed navigation reaches the stack
(``_commit_push``/``_commit_replace``) and how ``go`` moves within it.

Execution is synchronous: every method runs to completion, listeners
fire in registration order exactly once per committed navigation, and
a blocked navigation fires no listener at all.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from waymark._internal.diagnostics import Diagnostics
from waymark._internal.types import Blocker, Listener, State
from waymark.config import NavigationConfig
from waymark.history.events import Registry
from waymark.history.transition import Transition
from waymark.location import Action, Location, To, Update, create_key, create_path, to_partial_path

logger = logging.getLogger("waymark.history")


class History(ABC):
    """Base navigation engine. Use ``MemoryHistory``, ``BrowserHistory`` or ``HashHistory``."""

    def __init__(
        self,
        config: NavigationConfig | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self.config = config or NavigationConfig()
        self.diagnostics = diagnostics or Diagnostics(logger, warn_once=self.config.warn_once)
        self._action = Action.POP
        self._index = 0
        self._location = Location()
        self._listeners: Registry[Listener] = Registry()
        self._blockers: Registry[Blocker] = Registry()

    # -- State --

    @property
    def action(self) -> Action:
        """How the current location was reached."""
        return self._action

    @property
    def location(self) -> Location:
        return self._location

    @property
    def index(self) -> int:
        """Position of the current entry in the stack."""
        return self._index

    def create_href(self, to: To) -> str:
        """Return the URL string for *to*."""
        return to if isinstance(to, str) else create_path(to)

    # -- Navigation --

    def push(self, to: To, state: State = None) -> None:
        """Add a new entry after the current one, discarding any later entries."""
        next_location = self._next_location(to, state)
        self._check_target(to, next_location, "push")
        if self._allow(Transition(Action.PUSH, next_location, to, state, self)):
            self._commit_push(next_location)

    def replace(self, to: To, state: State = None) -> None:
        """Overwrite the current entry."""
        next_location = self._next_location(to, state)
        self._check_target(to, next_location, "replace")
        if self._allow(Transition(Action.REPLACE, next_location, to, state, self)):
            self._commit_replace(next_location)

    @abstractmethod
    def go(self, delta: int) -> None:
        """Move *delta* entries through the stack."""

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def retry(self, transition: Transition) -> None:
        """Re-attempt a blocked navigation with its stored arguments."""
        if transition.action is Action.PUSH:
            self.push(transition.target, transition.state)
        elif transition.action is Action.REPLACE:
            self.replace(transition.target, transition.state)
        else:
            self.go(transition.target)

    # -- Subscriptions --

    def listen(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with an ``Update`` after every committed navigation."""
        return self._listeners.push(listener)

    def block(self, blocker: Blocker) -> Callable[[], None]:
        """Intercept navigations before they commit.

        Only the first registered blocker is consulted.  It receives a
        ``Transition``; calling ``transition.retry()`` after unblocking
        performs the navigation.  While any blocker is registered the
        platform is asked to prompt before unloading.
        """
        unblock = self._blockers.push(blocker)
        if len(self._blockers) == 1:
            self._set_unload_guard(True)

        def unsubscribe() -> None:
            unblock()
            if not self._blockers:
                self._set_unload_guard(False)

        return unsubscribe

    # -- Internals --

    def _next_location(self, to: To, state: State) -> Location:
        partial = to_partial_path(to)
        return Location(
            pathname=self._location.pathname if partial.pathname is None else partial.pathname,
            search=self._location.search if partial.search is None else partial.search,
            hash=self._location.hash if partial.hash is None else partial.hash,
            state=state,
            key=create_key(self.config.key_length),
        )

    def _allow(self, transition: Transition) -> bool:
        if not self._blockers:
            return True
        logger.debug("Blocked %s to %s", transition.action, create_path(transition.location))
        self._blockers.call_first(transition)
        return False

    def _apply(self, action: Action, location: Location, index: int) -> None:
        self._action = action
        self._location = location
        self._index = index
        self._listeners.call(Update(action=action, location=location))

    def _warn_relative(self, to: To, location: Location, method: str, flavour: str) -> None:
        if not location.pathname.startswith("/"):
            self.diagnostics.warn(
                f"Relative pathnames are not supported in {flavour}.{method}({to!r})"
            )

    def _check_target(self, to: To, location: Location, method: str) -> None:
        """Hook for flavours that validate push/replace targets."""

    @abstractmethod
    def _commit_push(self, location: Location) -> None:
        """Put a new entry on the stack after the current one and apply it."""

    @abstractmethod
    def _commit_replace(self, location: Location) -> None:
        """Overwrite the current entry and apply it."""

    def _set_unload_guard(self, enabled: bool) -> None:
        """Hook for flavours whose host can prompt before unloading."""
