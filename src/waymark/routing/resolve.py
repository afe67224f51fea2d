"""Relative path resolution.

``resolve_path`` works like a URL resolver: ``..`` walks up one URL
segment.  ``resolve_to`` is route-aware: each leading ``..`` walks up one
*matched route level*, using the ancestor pathnames passed in by the
caller::

    >>> resolve_path("../login", "/auth/").pathname
    '/login'
    >>> resolve_to("..", ["/", "/users", "/users/42/edit"], "/users/42/edit").pathname
    '/users'
"""

import re
from collections.abc import Sequence

from waymark.location import Path, PartialPath, To, to_partial_path

_TRAILING_SLASHES = re.compile(r"/+\Z")
_LEADING_SLASHES = re.compile(r"\A/*")
_REPEATED_SLASHES = re.compile(r"//+")


def join_paths(paths: Sequence[str]) -> str:
    """Join *paths* with ``/`` and collapse repeated slashes."""
    return _REPEATED_SLASHES.sub("/", "/".join(paths))


def normalize_pathname(pathname: str) -> str:
    """Drop trailing slashes and keep exactly one leading slash."""
    return _LEADING_SLASHES.sub("/", _TRAILING_SLASHES.sub("", pathname), count=1)


def normalize_search(search: str | None) -> str:
    """Prefix *search* with ``?`` if missing; empty or a bare ``?`` gives ``""``."""
    if not search or search == "?":
        return ""
    return search if search.startswith("?") else "?" + search


def normalize_hash(hash_: str | None) -> str:
    """Prefix *hash_* with ``#`` if missing; empty or a bare ``#`` gives ``""``."""
    if not hash_ or hash_ == "#":
        return ""
    return hash_ if hash_.startswith("#") else "#" + hash_


def strip_basename(pathname: str, basename: str) -> str | None:
    """Return *pathname* relative to *basename*, or ``None`` if it lies outside.

    The basename comparison is case-insensitive and must end on a
    segment boundary: ``/app`` strips ``/APP/users`` but not ``/appextra``.
    """
    if basename == "/":
        return pathname
    if not pathname.lower().startswith(basename.lower()):
        return None
    next_char = pathname[len(basename) : len(basename) + 1]
    if next_char and next_char != "/":
        return None
    return pathname[len(basename) :] or "/"


def _resolve_pathname(relative_path: str, from_pathname: str) -> str:
    segments = _TRAILING_SLASHES.sub("", from_pathname).split("/")
    for segment in relative_path.split("/"):
        if segment == "..":
            # Keep the root "" segment so the result still starts at /
            if len(segments) > 1:
                segments.pop()
        elif segment != ".":
            segments.append(segment)
    return "/".join(segments) if len(segments) > 1 else "/"


def resolve_path(to: To, from_pathname: str = "/") -> Path:
    """Resolve *to* against *from_pathname*.

    - no pathname in *to*: keep *from_pathname*
    - absolute pathname: used as-is
    - relative pathname: ``.`` is dropped, ``..`` pops one segment (never
      past the root), anything else is appended

    Search and hash are normalized independently.
    """
    partial = to_partial_path(to)
    to_pathname = partial.pathname
    if not to_pathname:
        pathname = from_pathname
    elif to_pathname.startswith("/"):
        pathname = to_pathname
    else:
        pathname = _resolve_pathname(to_pathname, from_pathname)

    return Path(
        pathname=pathname,
        search=normalize_search(partial.search),
        hash=normalize_hash(partial.hash),
    )


def resolve_to(to: To, ancestor_pathnames: Sequence[str], current_pathname: str) -> Path:
    """Resolve *to* relative to a chain of matched route pathnames.

    *ancestor_pathnames* are the ``pathname_base`` values of the matched
    routes, root first.  A target with only a search or hash resolves
    against *current_pathname* instead.  An empty target resolves to the
    nearest ancestor.  A trailing slash on the target pathname is kept.
    """
    partial = to_partial_path(to)
    to_pathname = "/" if to == "" or partial.pathname == "" else partial.pathname

    if to_pathname is None:
        from_pathname = current_pathname
    else:
        ancestor_index = len(ancestor_pathnames) - 1

        if to_pathname.startswith(".."):
            to_segments = to_pathname.split("/")
            # Each leading ".." is one route level, not one URL segment
            while to_segments and to_segments[0] == "..":
                to_segments.pop(0)
                ancestor_index -= 1
            partial = PartialPath(
                pathname="/".join(to_segments),
                search=partial.search,
                hash=partial.hash,
            )

        # More ".." than ancestors resolves from the root
        from_pathname = ancestor_pathnames[ancestor_index] if ancestor_index >= 0 else "/"

    path = resolve_path(partial, from_pathname)

    if (
        to_pathname
        and to_pathname != "/"
        and to_pathname.endswith("/")
        and not path.pathname.endswith("/")
    ):
        path = Path(pathname=path.pathname + "/", search=path.search, hash=path.hash)

    return path
