"""History — a navigable stack of locations with listeners and blockers.

``MemoryHistory`` keeps its stack in memory.  ``BrowserHistory`` and
``HashHistory`` drive a host ``Platform`` and reconcile its back/forward
pops with registered blockers.
"""
