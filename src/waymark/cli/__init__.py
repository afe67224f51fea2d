"""Waymark CLI — route table inspection and path utilities.

Entry point registered as ``waymark`` in ``pyproject.toml``::

    [project.scripts]
    waymark = "waymark.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waymark`` command."""
    parser = argparse.ArgumentParser(
        prog="waymark",
        description="Waymark — route matching and navigation history.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level for diagnostics (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waymark match ----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Match a pathname against a route file")
    match_parser.add_argument("routes", help="JSON route file")
    match_parser.add_argument("pathname", help="Pathname to match (e.g. /users/42)")
    match_parser.add_argument("--basename", default="/", help="Prefix stripped before matching")
    match_parser.add_argument("--json", action="store_true", help="Print matches as JSON")

    # -- waymark branches -------------------------------------------------
    branches_parser = subparsers.add_parser("branches", help="List ranked route branches")
    branches_parser.add_argument("routes", help="JSON route file")

    # -- waymark resolve --------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a relative path")
    resolve_parser.add_argument("to", help="Target path (e.g. ../login)")
    resolve_parser.add_argument(
        "--from",
        dest="from_pathname",
        default="/",
        help="Pathname to resolve against (default: /)",
    )

    # -- waymark generate -------------------------------------------------
    generate_parser = subparsers.add_parser("generate", help="Interpolate params into a pattern")
    generate_parser.add_argument("pattern", help="Route pattern (e.g. /users/:id)")
    generate_parser.add_argument("params", nargs="*", help="NAME=VALUE pairs (use *=rest for splats)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "match":
        from waymark.cli._routes import run_match

        run_match(args)
    elif args.command == "branches":
        from waymark.cli._routes import run_branches

        run_branches(args)
    elif args.command == "resolve":
        from waymark.cli._paths import run_resolve

        run_resolve(args)
    elif args.command == "generate":
        from waymark.cli._paths import run_generate

        run_generate(args)
