"""Route tree nodes, flattened branches, and match results."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from waymark._internal.types import Params


@dataclass(frozen=True, slots=True, eq=False)
class RouteNode:
    """A declarative route description.

    Nodes compare by identity: a ``RouteMatch.route`` is always the very
    node object that was passed in.  ``payload`` is opaque to matching.

    Path route:   ``RouteNode(path="users")``
    Index route:  ``RouteNode(index=True)``
    Layout route: ``RouteNode(children=[...])`` (no path, no index)
    """

    path: str | None = None
    index: bool = False
    case_sensitive: bool = False
    children: tuple["RouteNode", ...] = ()
    payload: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RouteNode":
        """Build a node (and its children) from a plain mapping.

        Accepts ``caseSensitive`` as an alias for ``case_sensitive``::

            RouteNode.from_dict({"path": "/users", "children": [{"index": True}]})
        """
        case_sensitive = data.get("case_sensitive", data.get("caseSensitive", False))
        return cls(
            path=data.get("path"),
            index=bool(data.get("index", False)),
            case_sensitive=bool(case_sensitive),
            children=tuple(cls.from_dict(child) for child in data.get("children") or ()),
            payload=data.get("payload"),
        )

    @classmethod
    def tree(cls, routes: Iterable[Mapping[str, Any]]) -> list["RouteNode"]:
        """Build a list of top-level nodes from plain mappings."""
        return [cls.from_dict(route) for route in routes]


@dataclass(frozen=True, slots=True)
class RouteMeta:
    """Per-level metadata of a branch, ordered root to leaf."""

    relative_path: str
    case_sensitive: bool
    child_index: int
    route: RouteNode = field(repr=False)


@dataclass(frozen=True, slots=True)
class RouteBranch:
    """A single root-to-leaf path through the route tree."""

    path: str
    score: int
    routes_meta: tuple[RouteMeta, ...]

    @property
    def child_indexes(self) -> tuple[int, ...]:
        return tuple(meta.child_index for meta in self.routes_meta)


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A pattern matched against some portion of a URL pathname.

    ``path`` may contain ``:name`` segments and may end with ``/*``.
    ``end`` requires the pattern to consume the whole pathname.
    """

    path: str
    case_sensitive: bool = False
    end: bool = True


@dataclass(frozen=True, slots=True)
class PathMatch:
    """How a ``PathPattern`` matched a pathname."""

    params: Params
    pathname: str
    pathname_base: str
    pattern: PathPattern


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """One matched level of the route tree.

    ``params`` holds the parameters captured at this level and every
    ancestor level.  ``pathname_base`` is the portion of the pathname
    matched before any child routes (the splat value excluded).
    """

    params: Params
    pathname: str
    pathname_base: str
    route: RouteNode
