"""``waymark match`` and ``waymark branches`` — inspect a route file.

``match`` prints each matched level of a pathname; ``branches`` prints
the ranked branch table the matcher walks.
"""

import argparse
import json
import sys

from waymark.cli._load import load_routes
from waymark.errors import ConfigurationError
from waymark.routing.route import RouteNode
from waymark.routing.router import flatten_routes, match_routes, rank_route_branches


def _load_or_exit(filename: str) -> list[RouteNode]:
    try:
        routes = load_routes(filename)
        flatten_routes(routes)
    except (OSError, ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return routes


def run_match(args: argparse.Namespace) -> None:
    """Match ``args.pathname`` against the routes in ``args.routes``.

    Prints one row per matched level (PATH, PATHNAME, PARAMS), or exits
    with code 1 when nothing matches.
    """
    routes = _load_or_exit(args.routes)
    matches = match_routes(routes, args.pathname, args.basename)
    if matches is None:
        print(f"No routes match {args.pathname!r}", file=sys.stderr)
        raise SystemExit(1)

    if args.json:
        print(
            json.dumps(
                [
                    {
                        "path": match.route.path,
                        "index": match.route.index,
                        "pathname": match.pathname,
                        "pathnameBase": match.pathname_base,
                        "params": match.params,
                    }
                    for match in matches
                ],
                indent=2,
            )
        )
        return

    rows = [
        (
            "(index)" if match.route.index and match.route.path is None else match.route.path or "",
            match.pathname,
            ", ".join(f"{k}={v}" for k, v in match.params.items()),
        )
        for match in matches
    ]
    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    max_pathname = max(max(len(r[1]) for r in rows), 8)  # "PATHNAME" header

    fmt = f"{{:<{max_path}}}  {{:<{max_pathname}}}  {{}}"
    print(fmt.format("PATH", "PATHNAME", "PARAMS"))
    for row in rows:
        print(fmt.format(*row))


def run_branches(args: argparse.Namespace) -> None:
    """Print the ranked branches of ``args.routes``: SCORE, PATH, INDEXES."""
    routes = _load_or_exit(args.routes)
    branches = flatten_routes(routes)
    rank_route_branches(branches)

    if not branches:
        print("No routes defined.")
        return

    max_path = max(max(len(b.path) for b in branches), 4)
    fmt = f"{{:>5}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("SCORE", "PATH", "INDEXES"))
    for branch in branches:
        indexes = ".".join(str(i) for i in branch.child_indexes)
        print(fmt.format(branch.score, branch.path, indexes))
