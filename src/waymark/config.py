"""Navigation configuration.

One frozen ``NavigationConfig`` is shared by a router and the histories
built alongside it; each reads only the fields it needs.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NavigationConfig:
    """Router and history configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = NavigationConfig(basename="/app", warn_once=False)
    """

    # Routing
    basename: str = "/"  # Prefix stripped from pathnames before matching

    # History
    key_length: int = 8  # Length of the random key given to each new entry

    # Diagnostics
    warn_once: bool = True  # Log each distinct warning message only once per owner
