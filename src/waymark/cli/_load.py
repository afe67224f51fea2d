"""Route file loading — reads a JSON route tree into ``RouteNode`` values.

Shared by ``waymark match`` and ``waymark branches``.  A route file is a
JSON list of route mappings::

    [
        {"path": "/users", "children": [{"index": true}, {"path": ":id"}]},
        {"path": "*"}
    ]
"""

import json
from pathlib import Path

from waymark.routing.route import RouteNode


def load_routes(filename: str) -> list[RouteNode]:
    """Load a route tree from *filename*.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or not a list of mappings.
    """
    data = json.loads(Path(filename).read_text(encoding="utf-8"))
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        msg = f"{filename}: expected a JSON list of route objects"
        raise ValueError(msg)
    return RouteNode.tree(data)
