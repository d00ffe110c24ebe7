# lexrel/adapters/persistence/embedding_store.py
import os
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, List, Optional

import numpy as np
import structlog

from lexrel.adapters.persistence.glove_binary import (
    VECTOR_DTYPE,
    GloveHeader,
    PathLike,
    decode_vector,
    read_header,
    resolve_paths,
)
from lexrel.core.domain.exceptions import LoadError
from lexrel.core.domain.models import VectorRecord
from lexrel.core.ports.embedding_store import IEmbeddingStore
from lexrel.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

class GloveBinaryEmbeddingStore(IEmbeddingStore):
    """
    Random-access word -> vector table over a binary GloVe folder.

    Only the dictionary (word -> byte offset) is held in memory; each lookup
    is one positional read (`os.pread`) from the vector table. With
    `in_memory=True` the whole table is read once into a float64 matrix and
    the file is closed right away.

    The store is read-only after construction, so any number of threads can
    call `lookup` concurrently without locking, in either mode.

    Duplicate words in the source shadow earlier ones (last write wins).
    """

    def __init__(self, path: PathLike, in_memory: bool = False):
        self.path = Path(path)
        self._handle: Optional[BinaryIO] = None
        self._matrix: Optional[np.ndarray] = None

        with tracer.start_as_current_span("embedding_store.open") as span:
            header, entries = read_header(self.path)
            self.header: GloveHeader = header
            self._words: List[str] = [entry.word for entry in entries]
            self._offsets: Dict[str, int] = {}
            for entry in entries:
                self._offsets[entry.word] = entry.offset

            _, vectors_path = resolve_paths(self.path)
            try:
                if in_memory:
                    self._matrix = self._read_matrix(vectors_path)
                else:
                    self._handle = vectors_path.open("rb", buffering=0)
            except (OSError, ValueError) as e:
                raise LoadError(str(self.path), f"cannot read vector table: {e}") from e

            span.set_attribute("lexrel.vocabulary_size", header.vocabulary_size)
            span.set_attribute("lexrel.dimension", header.dimension)

        logger.info(
            "embedding_store_opened",
            path=str(self.path),
            vocabulary_size=header.vocabulary_size,
            distinct_words=len(self._offsets),
            dimension=header.dimension,
            in_memory=in_memory,
        )

    @classmethod
    def open(cls, path: PathLike, in_memory: bool = False) -> "GloveBinaryEmbeddingStore":
        return cls(path, in_memory=in_memory)

    def _read_matrix(self, vectors_path: Path) -> np.ndarray:
        raw = np.fromfile(vectors_path, dtype=VECTOR_DTYPE)
        shape = (self.header.vocabulary_size, self.header.dimension)
        return raw.reshape(shape).astype(np.float64)

    # --- Introspection ---

    @property
    def dimension(self) -> int:
        return self.header.dimension

    @property
    def vocabulary_size(self) -> int:
        """Number of records in the source, duplicates included."""
        return self.header.vocabulary_size

    @property
    def in_memory(self) -> bool:
        return self._matrix is not None

    def words(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._offsets

    def __len__(self) -> int:
        return len(self._offsets)

    # --- Lookups ---

    def lookup(self, word: str) -> Optional[np.ndarray]:
        offset = self._offsets.get(word)
        if offset is None:
            return None

        if self._matrix is not None:
            return self._matrix[offset // self.header.stride].copy()

        try:
            return self._read_vector(offset)
        except (OSError, ValueError) as e:
            # A failed read is reported as a missing word
            logger.warning("embedding_lookup_failed", word=word, path=str(self.path), error=str(e))
            return None

    def get_record(self, word: str) -> Optional[VectorRecord]:
        vector = self.lookup(word)
        if vector is None:
            return None
        return VectorRecord(word=word, vector=vector)

    def _read_vector(self, offset: int) -> np.ndarray:
        handle = self._handle
        if handle is None:
            raise ValueError("embedding store is closed")
        # Positional read: no shared file cursor between concurrent lookups
        raw = os.pread(handle.fileno(), self.header.stride, offset)
        if len(raw) != self.header.stride:
            raise OSError(f"short read at offset {offset}: {len(raw)} of {self.header.stride} bytes")
        return decode_vector(raw)

    # --- Resource management ---

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            logger.debug("embedding_store_closed", path=str(self.path))

    def __enter__(self) -> "GloveBinaryEmbeddingStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
