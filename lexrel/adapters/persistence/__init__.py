# lexrel/adapters/persistence/__init__.py
"""
Persistence Adapters.

Reads (and, for tooling, writes) word embeddings on disk.

Components:
- glove_binary: codec for the dict.bin + vectors.bin folder layout and the GloVe text format.
- GloveBinaryEmbeddingStore: Concrete implementation of IEmbeddingStore over that layout.
"""

from .embedding_store import GloveBinaryEmbeddingStore

__all__ = [
    "GloveBinaryEmbeddingStore",
]
