"""Waymark — route matching and navigation history for client-side apps.

Decides which routes apply to a location and what they bind, and keeps
a navigable history stack whose navigations can be intercepted.

Basic usage::

    from waymark import MemoryHistory, RouteNode, Router

    router = Router([
        RouteNode(path="/", children=[
            RouteNode(index=True),
            RouteNode(path="users/:id"),
        ]),
    ])

    history = MemoryHistory(["/"])
    history.listen(lambda update: print(router.match(update.location)))
    history.push("/users/42")
"""

__version__ = "0.1.0"
__all__ = [
    "Action",
    "BrowserHistory",
    "ConfigurationError",
    "HashHistory",
    "History",
    "Location",
    "MemoryHistory",
    "MissingParamError",
    "NavigationConfig",
    "Path",
    "PathMatch",
    "PathPattern",
    "Platform",
    "RouteMatch",
    "RouteNode",
    "Router",
    "SearchParams",
    "Transition",
    "Update",
    "WaymarkError",
    "create_path",
    "create_search_params",
    "generate_path",
    "match_path",
    "match_routes",
    "parse_path",
    "resolve_path",
    "resolve_to",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "Action": "waymark.location",
    "BrowserHistory": "waymark.history.platform",
    "ConfigurationError": "waymark.errors",
    "HashHistory": "waymark.history.platform",
    "History": "waymark.history.base",
    "Location": "waymark.location",
    "MemoryHistory": "waymark.history.memory",
    "MissingParamError": "waymark.errors",
    "NavigationConfig": "waymark.config",
    "Path": "waymark.location",
    "PathMatch": "waymark.routing.route",
    "PathPattern": "waymark.routing.route",
    "Platform": "waymark.history.platform",
    "RouteMatch": "waymark.routing.route",
    "RouteNode": "waymark.routing.route",
    "Router": "waymark.routing.router",
    "SearchParams": "waymark.search",
    "Transition": "waymark.history.transition",
    "Update": "waymark.location",
    "WaymarkError": "waymark.errors",
    "create_path": "waymark.location",
    "create_search_params": "waymark.search",
    "generate_path": "waymark.routing.pattern",
    "match_path": "waymark.routing.pattern",
    "match_routes": "waymark.routing.router",
    "parse_path": "waymark.location",
    "resolve_path": "waymark.routing.resolve",
    "resolve_to": "waymark.routing.resolve",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waymark`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
