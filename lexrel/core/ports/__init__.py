# lexrel/core/ports/__init__.py
"""
Core Ports (Interfaces).

This package defines the abstract base classes (Protocols) that the
Infrastructure Adapters must implement. These interfaces allow the Core
Domain to interact with embedding files and spatial indexes without
knowing the implementation details.
"""

from .embedding_store import IEmbeddingStore
from .lexical_api import ILexicalSemanticAPI
from .neighbor_index import INeighborIndex

__all__ = [
    "IEmbeddingStore",
    "ILexicalSemanticAPI",
    "INeighborIndex",
]
