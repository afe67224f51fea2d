"""Shared type aliases used across waymark modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Parameters captured from a pathname, keyed by ``:name`` (or ``*``)
Params: TypeAlias = dict[str, str]

# Opaque application state stored alongside a history entry
State: TypeAlias = Any

# Navigation listener: receives an ``Update``
Listener: TypeAlias = Callable[[Any], None]

# Navigation blocker: receives a ``Transition``
Blocker: TypeAlias = Callable[[Any], None]

# Mapping form of a navigation target: {"pathname": ..., "search": ..., "hash": ...}
PathMapping: TypeAlias = Mapping[str, str | None]
