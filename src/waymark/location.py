"""Location data model shared by routing and history.

A ``Path`` is the URL-visible part of a location (pathname, search,
hash).  A ``Location`` adds the application ``state`` and the entry
``key``.  Both are frozen; the history creates a new one on every
navigation and never mutates an existing one.

``PartialPath`` is the "some parts may be missing" form produced by
:func:`parse_path` and accepted wherever a navigation target (``To``)
is expected.
"""

import random
import string
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from waymark._internal.types import PathMapping

_KEY_ALPHABET = string.digits + string.ascii_lowercase


class Action(StrEnum):
    """How the current location changed. Describes the change, not a direction."""

    POP = "POP"  # Moved to an existing entry (back/forward, or the initial load)
    PUSH = "PUSH"  # Added a new entry; later entries are discarded
    REPLACE = "REPLACE"  # Overwrote the entry at the current index


@dataclass(frozen=True, slots=True)
class Path:
    """The URL-visible parts of a location.

    ``pathname`` begins with ``/``; ``search`` is empty or begins with
    ``?``; ``hash`` is empty or begins with ``#``.
    """

    pathname: str = "/"
    search: str = ""
    hash: str = ""


@dataclass(frozen=True, slots=True)
class PartialPath:
    """A path where any part may be absent (``None``)."""

    pathname: str | None = None
    search: str | None = None
    hash: str | None = None


@dataclass(frozen=True, slots=True)
class Location(Path):
    """A history entry: a path plus opaque application state and a key.

    ``key`` is unique per entry, except for the reserved ``"default"``
    key given to an initial entry the history did not create.
    """

    state: Any = None
    key: str = "default"


@dataclass(frozen=True, slots=True)
class Update:
    """Delivered to listeners on every committed navigation."""

    action: Action
    location: Location


type To = str | Path | PartialPath | PathMapping


def parse_path(path: str) -> PartialPath:
    """Split a URL path string into its pathname, search, and hash.

    Parts that are not present come back as ``None``::

        >>> parse_path("/users?page=2#top")
        PartialPath(pathname='/users', search='?page=2', hash='#top')
        >>> parse_path("?q=1")
        PartialPath(pathname=None, search='?q=1', hash=None)
    """
    pathname = search = hash_ = None
    if path:
        hash_index = path.find("#")
        if hash_index >= 0:
            hash_ = path[hash_index:]
            path = path[:hash_index]

        search_index = path.find("?")
        if search_index >= 0:
            search = path[search_index:]
            path = path[:search_index]

        if path:
            pathname = path

    return PartialPath(pathname=pathname, search=search, hash=hash_)


def create_path(path: Path | PartialPath | PathMapping) -> str:
    """Join the parts of a path back into a string.

    Missing parts default to ``/``, ``""`` and ``""``.
    """
    partial = to_partial_path(path)
    return (partial.pathname or "/") + (partial.search or "") + (partial.hash or "")


def to_partial_path(to: To) -> PartialPath:
    """Normalize any accepted navigation target to a ``PartialPath``."""
    if isinstance(to, str):
        return parse_path(to)
    if isinstance(to, PartialPath):
        return to
    if isinstance(to, Path):
        return PartialPath(pathname=to.pathname, search=to.search, hash=to.hash)
    if isinstance(to, Mapping):
        return PartialPath(
            pathname=to.get("pathname"),
            search=to.get("search"),
            hash=to.get("hash"),
        )
    msg = f"Cannot interpret {to!r} as a path"
    raise TypeError(msg)


def create_key(length: int = 8) -> str:
    """Return a random base-36 key for a new history entry."""
    return "".join(random.choices(_KEY_ALPHABET, k=length))
