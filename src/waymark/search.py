"""Search-string parameters.

``SearchParams`` is an immutable, ordered view of the ``search`` part of
a location in which a key may repeat.  ``create_search_params`` builds
one from a search string, a list of pairs, or a mapping whose values
may be lists::

    params = create_search_params({"sort": ["name", "price"], "q": "red shoes"})
    str(params)                    # "sort=name&sort=price&q=red+shoes"
    history.push("?" + str(params))

    params = create_search_params(history.location.search)
    params["sort"]                 # "name"
    params.get_list("sort")        # ["name", "price"]
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from urllib.parse import parse_qsl, urlencode


class SearchParams(Mapping[str, str]):
    """Immutable search parameters, kept as ``(key, value)`` pairs in order.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    ``str()`` gives the encoded string without a leading ``?``.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._pairs: tuple[tuple[str, str], ...] = tuple((str(k), str(v)) for k, v in pairs)

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self._pairs)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SearchParams):
            return self._pairs == other._pairs
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SearchParams({list(self._pairs)!r})"

    def __str__(self) -> str:
        return urlencode(self._pairs)

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        """Every ``(key, value)`` pair, repeats included, in order."""
        return self._pairs

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*, or an empty list if missing."""
        return [value for name, value in self._pairs if name == key]

    def with_defaults(self, defaults: "SearchParamsInit") -> "SearchParams":
        """Return a copy with every value of each *defaults* key this one lacks appended.

        Keys already present keep only their own values::

            create_search_params("page=2").with_defaults({"page": "1", "sort": "name"})
            # page=2&sort=name
        """
        extra = [(k, v) for k, v in create_search_params(defaults).pairs if k not in self]
        return SearchParams((*self._pairs, *extra))


type SearchParamsInit = (
    str | SearchParams | Iterable[tuple[str, str]] | Mapping[str, str | Sequence[str]]
)


def create_search_params(init: SearchParamsInit = "") -> SearchParams:
    """Build ``SearchParams`` from a search string, pairs, or a mapping.

    - string: parsed as ``application/x-www-form-urlencoded``; one
      leading ``?`` is ignored and valueless keys map to ``""``
    - pairs: used in order
    - mapping: a list (or tuple) value becomes one pair per item

    ``create_search_params({"sort": ["name", "price"]})`` is the same as
    ``create_search_params([("sort", "name"), ("sort", "price")])``.
    """
    if isinstance(init, SearchParams):
        return init
    if isinstance(init, str):
        return SearchParams(parse_qsl(init.removeprefix("?"), keep_blank_values=True))
    if isinstance(init, Mapping):
        pairs: list[tuple[str, str]] = []
        for key, value in init.items():
            if isinstance(value, str):
                pairs.append((key, value))
            else:
                pairs.extend((key, item) for item in value)
        return SearchParams(pairs)
    return SearchParams(init)
