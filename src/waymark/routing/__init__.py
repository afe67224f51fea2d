"""Routing — route tree flattening, ranking, and pattern matching.

Route trees are plain ``RouteNode`` values built by the caller; every
match flattens and ranks them afresh.
"""
