# lexrel/adapters/index/__init__.py
"""Nearest-neighbour index adapters."""

from .kd_tree_index import KDTreeNeighborIndex

__all__ = [
    "KDTreeNeighborIndex",
]
