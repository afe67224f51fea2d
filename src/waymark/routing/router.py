"""Route tree flattening, ranking, and matching.

A route tree is flattened into branches (one per root-to-leaf path),
the branches are ranked by specificity, and the first branch whose
every level matches the pathname wins.  Branches are recomputed on
every match; nothing is cached between calls.
"""

import functools
import logging
import re
from collections.abc import Sequence

from waymark._internal.diagnostics import Diagnostics, emit_warning
from waymark.config import NavigationConfig
from waymark.errors import ConfigurationError
from waymark.location import Path, PartialPath, To, to_partial_path
from waymark.routing.pattern import match_path
from waymark.routing.resolve import join_paths, resolve_to, strip_basename
from waymark.routing.route import PathPattern, RouteBranch, RouteMatch, RouteMeta, RouteNode

logger = logging.getLogger("waymark.routing")

_PARAM_SEGMENT = re.compile(r":\w+")

# Per-segment scores; higher sorts first
DYNAMIC_SEGMENT_VALUE = 3
INDEX_ROUTE_VALUE = 2
EMPTY_SEGMENT_VALUE = 1
STATIC_SEGMENT_VALUE = 10
SPLAT_PENALTY = -2


def flatten_routes(
    routes: Sequence[RouteNode],
    branches: list[RouteBranch] | None = None,
    parents_meta: tuple[RouteMeta, ...] = (),
    parent_path: str = "",
) -> list[RouteBranch]:
    """Flatten a route tree into branches, depth first.

    Children are emitted before their parent so that, at equal score,
    the more specific branch is tried first.  Nodes with neither a path
    nor ``index`` only group their children.

    Raises ``ConfigurationError`` for an absolute child path outside its
    parent's path, or for an index route that declares children.
    """
    if branches is None:
        branches = []

    for child_index, route in enumerate(routes):
        relative_path = route.path or ""

        if relative_path.startswith("/"):
            if not relative_path.startswith(parent_path):
                msg = (
                    f'Absolute route path "{relative_path}" nested under path '
                    f'"{parent_path}" is not valid. An absolute child route path '
                    f"must start with the combined path of all its parent routes."
                )
                raise ConfigurationError(msg)
            relative_path = relative_path[len(parent_path) :]

        meta = RouteMeta(
            relative_path=relative_path,
            case_sensitive=route.case_sensitive,
            child_index=child_index,
            route=route,
        )
        path = join_paths([parent_path, relative_path])
        routes_meta = (*parents_meta, meta)

        if route.children:
            if route.index:
                msg = (
                    f"Index routes must not have child routes. Please remove "
                    f'all child routes from route path "{path}".'
                )
                raise ConfigurationError(msg)
            flatten_routes(route.children, branches, routes_meta, path)

        if route.path is None and not route.index:
            continue

        branches.append(
            RouteBranch(path=path, score=compute_score(path, route.index), routes_meta=routes_meta)
        )

    return branches


def compute_score(path: str, index: bool) -> int:
    """Score a branch path; more specific paths score higher.

    ``:param`` segments are worth 3, empty segments 1, static segments
    10.  Index routes get +2, and any ``*`` segment costs 2 (the splat
    segment itself is not scored).
    """
    segments = path.split("/")
    score = len(segments)
    if "*" in segments:
        score += SPLAT_PENALTY
    if index:
        score += INDEX_ROUTE_VALUE

    for segment in segments:
        if segment == "*":
            continue
        if _PARAM_SEGMENT.fullmatch(segment):
            score += DYNAMIC_SEGMENT_VALUE
        elif segment == "":
            score += EMPTY_SEGMENT_VALUE
        else:
            score += STATIC_SEGMENT_VALUE
    return score


def compare_indexes(a: Sequence[int], b: Sequence[int]) -> int:
    """Order sibling branches by declaration; non-siblings compare equal."""
    siblings = len(a) == len(b) and all(x == y for x, y in zip(a[:-1], b[:-1], strict=True))
    return a[-1] - b[-1] if siblings else 0


def _compare_branches(a: RouteBranch, b: RouteBranch) -> int:
    if a.score != b.score:
        return b.score - a.score
    return compare_indexes(a.child_indexes, b.child_indexes)


def rank_route_branches(branches: list[RouteBranch]) -> None:
    """Sort *branches* in place: higher score first, then sibling order."""
    branches.sort(key=functools.cmp_to_key(_compare_branches))


def match_route_branch(
    branch: RouteBranch,
    pathname: str,
    diagnostics: Diagnostics | None = None,
) -> list[RouteMatch] | None:
    """Match every level of *branch* against *pathname*.

    Only the leaf level must consume the whole pathname.  Any level
    failing, the leaf included, rejects the whole branch.
    """
    matched_params: dict[str, str] = {}
    matched_pathname = "/"
    matches: list[RouteMatch] = []
    last = len(branch.routes_meta) - 1

    for i, meta in enumerate(branch.routes_meta):
        remaining_pathname = (
            pathname if matched_pathname == "/" else pathname[len(matched_pathname) :] or "/"
        )
        match = match_path(
            PathPattern(path=meta.relative_path, case_sensitive=meta.case_sensitive, end=i == last),
            remaining_pathname,
            diagnostics,
        )
        if match is None:
            return None

        matched_params.update(match.params)
        matches.append(
            RouteMatch(
                params=dict(matched_params),
                pathname=join_paths([matched_pathname, match.pathname]),
                pathname_base=join_paths([matched_pathname, match.pathname_base]),
                route=meta.route,
            )
        )

        if match.pathname_base != "/":
            matched_pathname = join_paths([matched_pathname, match.pathname_base])

    return matches


def match_routes(
    routes: Sequence[RouteNode],
    location: To,
    basename: str = "/",
    diagnostics: Diagnostics | None = None,
) -> list[RouteMatch] | None:
    """Match *location* against a route tree.

    Returns one ``RouteMatch`` per matched level, root first, or
    ``None`` if no branch matches or the pathname is outside *basename*.
    """
    pathname = strip_basename(to_partial_path(location).pathname or "/", basename)
    if pathname is None:
        return None

    branches = flatten_routes(routes)
    rank_route_branches(branches)

    for branch in branches:
        matches = match_route_branch(branch, pathname, diagnostics)
        if matches is not None:
            return matches
    return None


def match_nested_routes(
    routes: Sequence[RouteNode],
    location: To,
    parent_matches: Sequence[RouteMatch] = (),
    *,
    location_override: To | None = None,
    diagnostics: Diagnostics | None = None,
) -> list[RouteMatch] | None:
    """Match a descendant route table beneath already matched parents.

    The part of the pathname consumed by *parent_matches* is removed
    before matching; the results are re-based onto it and carry the
    parents' params.  A *location_override* whose pathname does not
    start with the parents' base is warned about and matched as given.
    """
    parent = parent_matches[-1] if parent_matches else None
    parent_params = parent.params if parent else {}
    parent_base = parent.pathname_base if parent else "/"

    if location_override is not None:
        pathname = to_partial_path(location_override).pathname or "/"
        if parent_base != "/" and not pathname.startswith(parent_base):
            emit_warning(
                f"When overriding the location for nested routes, the location pathname "
                f"must begin with the portion of the URL pathname that was matched by all "
                f'parent routes. The current pathname base is "{parent_base}" but pathname '
                f'"{pathname}" was given.',
                diagnostics,
                logger=logger,
            )
            remaining_pathname = pathname
        else:
            remaining_pathname = (
                pathname if parent_base == "/" else pathname[len(parent_base) :] or "/"
            )
    else:
        pathname = to_partial_path(location).pathname or "/"
        remaining_pathname = pathname if parent_base == "/" else pathname[len(parent_base) :] or "/"

    matches = match_routes(routes, PartialPath(pathname=remaining_pathname), diagnostics=diagnostics)
    if matches is None:
        return None

    return [
        RouteMatch(
            params={**parent_params, **match.params},
            pathname=join_paths([parent_base, match.pathname]),
            pathname_base=join_paths([parent_base, match.pathname_base]),
            route=match.route,
        )
        for match in matches
    ]


class Router:
    """A route tree plus the settings and diagnostics used to match it.

    The tree is validated on construction, so configuration errors
    surface before the first navigation.

    Usage::

        router = Router([
            RouteNode(path="/users", children=[
                RouteNode(index=True),
                RouteNode(path=":id"),
            ]),
        ])
        matches = router.match("/users/42")
        matches[-1].params  # {"id": "42"}
    """

    __slots__ = ("_routes", "config", "diagnostics")

    def __init__(
        self,
        routes: Sequence[RouteNode],
        config: NavigationConfig | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self._routes = tuple(routes)
        self.config = config or NavigationConfig()
        self.diagnostics = diagnostics or Diagnostics(logger, warn_once=self.config.warn_once)
        flatten_routes(self._routes)

    @property
    def routes(self) -> tuple[RouteNode, ...]:
        """The top-level route nodes, as given."""
        return self._routes

    @property
    def branches(self) -> list[RouteBranch]:
        """Ranked branches, recomputed on each access."""
        branches = flatten_routes(self._routes)
        rank_route_branches(branches)
        return branches

    def match(self, location: To) -> list[RouteMatch] | None:
        """Match *location* against the tree, honouring the configured basename."""
        return match_routes(self._routes, location, self.config.basename, self.diagnostics)

    def match_nested(
        self,
        location: To,
        parent_matches: Sequence[RouteMatch],
        location_override: To | None = None,
    ) -> list[RouteMatch] | None:
        """Match this tree as a descendant route table of *parent_matches*."""
        return match_nested_routes(
            self._routes,
            location,
            parent_matches,
            location_override=location_override,
            diagnostics=self.diagnostics,
        )

    def resolve(self, to: To, matches: Sequence[RouteMatch], current_pathname: str) -> Path:
        """Resolve a navigation target relative to the given matched levels."""
        return resolve_to(to, [match.pathname_base for match in matches], current_pathname)
