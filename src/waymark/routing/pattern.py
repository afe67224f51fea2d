"""Path pattern compilation, matching, and generation.

Patterns use ``:name`` for dynamic segments and a trailing ``/*`` (splat)
to capture the rest of the pathname::

    "/users"            static
    "/users/:id"        params == {"id": ...}
    "/files/*"          params == {"*": "rest/of/path"}
    "/files/:type/*"    params == {"type": ..., "*": ...}

Matching is case-insensitive unless the pattern says otherwise.
"""

import re
from urllib.parse import unquote

from waymark._internal.diagnostics import Diagnostics, emit_warning
from waymark._internal.types import Params
from waymark.errors import MissingParamError
from waymark.routing.route import PathMatch, PathPattern

_PARAM = re.compile(r":(\w+)")
_TRAILING_SPLAT = re.compile(r"/*\*?\Z")
_TRAILING_SPLAT_ONLY = re.compile(r"/*\*\Z")
_LEADING_SLASHES = re.compile(r"\A/*")
_REGEX_SPECIAL = re.compile(r"[\\.*+^$?{}|()\[\]]")
_TRAILING_SLASHES_AFTER_CHAR = re.compile(r"(.)/+\Z")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def compile_path(
    path: str,
    case_sensitive: bool = False,
    end: bool = True,
    diagnostics: Diagnostics | None = None,
) -> tuple[re.Pattern[str], list[str]]:
    """Compile *path* into a regex and the ordered list of its parameter names.

    Examples::

        compile_path("/")                -> ^//*\\Z, []
        compile_path("/auth", end=False) -> ^/auth(?:\\b|\\Z), []
        compile_path("/users/:id")       -> ^/users/([^/]+)/*\\Z, ["id"]
        compile_path("auth/*")           -> ^/auth(?:/(.+)|/*)\\Z, ["*"]
    """
    if not (path == "*" or not path.endswith("*") or path.endswith("/*")):
        corrected = path[:-1] + "/*"
        emit_warning(
            f'Route path "{path}" will be treated as if it were "{corrected}" because '
            f"the `*` character must always follow a `/` in the pattern. To get rid of "
            f'this warning, please change the route path to "{corrected}".',
            diagnostics,
        )

    param_names: list[str] = []

    def _param(match: re.Match[str]) -> str:
        param_names.append(match.group(1))
        return "([^/]+)"

    source = _TRAILING_SPLAT.sub("", path, count=1)
    source = _LEADING_SLASHES.sub("/", source, count=1)
    source = _REGEX_SPECIAL.sub(lambda m: "\\" + m.group(0), source)
    source = "^" + _PARAM.sub(_param, source)

    if path.endswith("*"):
        param_names.append("*")
        if path in ("*", "/*"):
            # The leading / is already matched; take everything after it
            source += r"(.*)\Z"
        else:
            # The separating / is not part of params["*"]
            source += r"(?:/(.+)|/*)\Z"
    elif end:
        source += r"/*\Z"
    else:
        # Parent routes match whole words only: "/home" must not match "/home2"
        source += r"(?:\b|\Z)"

    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(source, flags), param_names


def _decode_component(value: str) -> str:
    if _BAD_PERCENT.search(value):
        msg = "malformed percent escape"
        raise ValueError(msg)
    return unquote(value, errors="strict")


def safely_decode_param(value: str, param_name: str, diagnostics: Diagnostics | None = None) -> str:
    """Percent-decode a captured value, keeping it raw if it is malformed."""
    try:
        return _decode_component(value)
    except ValueError as exc:
        emit_warning(
            f'The value for the URL param "{param_name}" will not be decoded because '
            f'the string "{value}" is a malformed URL segment. This is probably due '
            f"to a bad percent encoding ({exc}).",
            diagnostics,
        )
        return value


def match_path(
    pattern: PathPattern | str,
    pathname: str,
    diagnostics: Diagnostics | None = None,
) -> PathMatch | None:
    """Match *pathname* against *pattern*.

    Returns ``None`` when it does not match.  A string pattern matches
    case-insensitively to the end of the pathname.
    """
    if isinstance(pattern, str):
        pattern = PathPattern(path=pattern, case_sensitive=False, end=True)

    matcher, param_names = compile_path(
        pattern.path, pattern.case_sensitive, pattern.end, diagnostics
    )
    match = matcher.match(pathname)
    if match is None:
        return None

    matched_pathname = match.group(0)
    pathname_base = _TRAILING_SLASHES_AFTER_CHAR.sub(r"\1", matched_pathname, count=1)
    capture_groups = match.groups()

    params: Params = {}
    for i, param_name in enumerate(param_names):
        raw = capture_groups[i] or ""
        if param_name == "*":
            # Base is computed from the raw splat; the decoded one may differ in length
            pathname_base = _TRAILING_SLASHES_AFTER_CHAR.sub(
                r"\1", matched_pathname[: len(matched_pathname) - len(raw)], count=1
            )
        params[param_name] = safely_decode_param(raw, param_name, diagnostics)

    return PathMatch(
        params=params,
        pathname=matched_pathname,
        pathname_base=pathname_base,
        pattern=pattern,
    )


def generate_path(path: str, params: dict[str, str | None] | None = None) -> str:
    """Interpolate *params* into *path*.

    Examples::

        generate_path("/users/:id", {"id": "42"})                     -> "/users/42"
        generate_path("/files/:type/*", {"type": "img", "*": "cat.jpg"}) -> "/files/img/cat.jpg"

    Raises ``MissingParamError`` if a ``:name`` segment has no value.
    """
    params = params or {}

    def _param(match: re.Match[str]) -> str:
        key = match.group(1)
        value = params.get(key)
        if value is None:
            raise MissingParamError(key)
        return str(value)

    def _splat(_match: re.Match[str]) -> str:
        splat = params.get("*")
        if splat is None:
            return ""
        return _LEADING_SLASHES.sub("/", str(splat), count=1)

    return _TRAILING_SPLAT_ONLY.sub(_splat, _PARAM.sub(_param, path), count=1)
