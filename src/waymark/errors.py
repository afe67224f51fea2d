"""Waymark exception hierarchy.

Shared across the routing and history packages so every module raises
and catches the same types.  Non-fatal problems are not exceptions;
they go through :class:`waymark._internal.diagnostics.Diagnostics`.
"""


class WaymarkError(Exception):
    """Base for all waymark-specific errors."""


class ConfigurationError(WaymarkError):
    """Raised when a route tree is invalid.

    Typically raised while flattening routes, before any matching
    happens.
    """


class MissingParamError(WaymarkError, KeyError):
    """Raised by ``generate_path`` when a ``:name`` segment has no value."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f'Missing ":{self.name}" param'
