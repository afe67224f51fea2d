"""``waymark resolve`` and ``waymark generate`` — path algebra from the shell."""

import argparse
import sys

from waymark.errors import MissingParamError
from waymark.location import create_path
from waymark.routing.pattern import generate_path
from waymark.routing.resolve import resolve_path


def run_resolve(args: argparse.Namespace) -> None:
    """Print ``args.to`` resolved against ``args.from_pathname``."""
    print(create_path(resolve_path(args.to, args.from_pathname)))


def run_generate(args: argparse.Namespace) -> None:
    """Print ``args.pattern`` with ``NAME=VALUE`` params interpolated.

    Exits with code 2 on a malformed param and 1 on a missing one.
    """
    params: dict[str, str | None] = {}
    for item in args.params:
        name, sep, value = item.partition("=")
        if not sep or not name:
            print(f"Error: expected NAME=VALUE, got {item!r}", file=sys.stderr)
            raise SystemExit(2)
        params[name] = value

    try:
        print(generate_path(args.pattern, params))
    except MissingParamError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
