"""Test utilities for waymark.

Provides a simulated host platform for exercising platform-backed
histories without a browser::

    from waymark.testing import SimulatedPlatform
"""

from waymark.testing.platform import PlatformEntry, SimulatedPlatform

__all__ = [
    "PlatformEntry",
    "SimulatedPlatform",
]
