"""Reverse navigation — page references resolved to URLs."""

from pathroute.navigation.hashing import cyrb53, function_hash
from pathroute.navigation.index import NavigationIndex, build_index, fill_index, query_to_string
from pathroute.navigation.navigator import Navigator

__all__ = [
    "NavigationIndex",
    "Navigator",
    "build_index",
    "cyrb53",
    "fill_index",
    "function_hash",
    "query_to_string",
]
