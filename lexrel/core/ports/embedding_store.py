# lexrel/core/ports/embedding_store.py
from typing import Iterable, Optional, Protocol

import numpy as np

from lexrel.core.domain.models import VectorRecord

class IEmbeddingStore(Protocol):
    """
    Port for point lookups of word vectors.
    Implementations: GloveBinaryEmbeddingStore (random access over the binary folder).
    """

    @property
    def dimension(self) -> int:
        """Length of every vector held by the store."""
        ...

    def lookup(self, word: str) -> Optional[np.ndarray]:
        """
        Resolves a word to its vector.

        Returns:
            The vector, or None when the word is out of vocabulary or the
            read failed. Never raises for a missing word.
        """
        ...

    def get_record(self, word: str) -> Optional[VectorRecord]:
        """Same as `lookup`, wrapped with its word."""
        ...

    def words(self) -> Iterable[str]:
        """The vocabulary, in source order."""
        ...

    def __contains__(self, word: object) -> bool:
        ...

    def __len__(self) -> int:
        ...

    def close(self) -> None:
        """Releases file handles. Idempotent."""
        ...
