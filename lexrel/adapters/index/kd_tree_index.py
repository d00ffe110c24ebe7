# lexrel/adapters/index/kd_tree_index.py
"""
k-d tree backed nearest-neighbour index.

The tree is built eagerly over every record of a stream (in arrival order,
duplicates included) and never changes afterwards. Distances are Euclidean;
turning them into relatedness scores is the caller's business.
"""

from typing import Iterable, List, Optional, Sequence

import numpy as np
import structlog
from scipy.spatial import cKDTree

from lexrel.adapters.persistence.glove_binary import PathLike, iter_glove_binary
from lexrel.core.domain.exceptions import InvalidInputError, LoadError
from lexrel.core.domain.models import Neighbor, VectorRecord
from lexrel.core.ports.neighbor_index import INeighborIndex
from lexrel.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

DEFAULT_LEAF_SIZE = 16


class KDTreeNeighborIndex(INeighborIndex):
    """
    Immutable k-nearest-neighbour index over word vectors.

    An index built from zero records is valid and answers every query with
    an empty list.
    """

    def __init__(
        self,
        words: Sequence[str],
        vectors: np.ndarray,
        leaf_size: int = DEFAULT_LEAF_SIZE,
    ):
        if len(words) != len(vectors):
            raise InvalidInputError(f"{len(words)} words for {len(vectors)} vectors")

        self._words: List[str] = list(words)
        self._tree: Optional[cKDTree] = None
        self._dimension = 0
        if self._words:
            data = np.asarray(vectors, dtype=np.float64)
            self._dimension = int(data.shape[1])
            self._tree = cKDTree(data, leafsize=leaf_size)

    @classmethod
    def build(
        cls,
        records: Iterable[VectorRecord],
        leaf_size: int = DEFAULT_LEAF_SIZE,
        source: str = "<stream>",
    ) -> "KDTreeNeighborIndex":
        """
        Consumes `records` once and builds the tree.

        Raises:
            LoadError: If the records do not all share one dimensionality.
        """
        words: List[str] = []
        rows: List[np.ndarray] = []

        with tracer.start_as_current_span("neighbor_index.build") as span:
            for record in records:
                vector = np.asarray(record.vector, dtype=np.float64)
                if vector.ndim != 1 or vector.size == 0:
                    raise LoadError(source, f"vector of '{record.word}' is empty")
                if rows and vector.size != rows[0].size:
                    raise LoadError(
                        source,
                        f"vector of '{record.word}' has {vector.size} components, expected {rows[0].size}",
                    )
                words.append(record.word)
                rows.append(vector)

            vectors = np.vstack(rows) if rows else np.empty((0, 0), dtype=np.float64)
            index = cls(words, vectors, leaf_size=leaf_size)
            span.set_attribute("lexrel.points", len(index))

        logger.info("neighbor_index_built", source=source, points=len(index), dimension=index.dimension)
        return index

    @classmethod
    def from_glove_binary(cls, path: PathLike, leaf_size: int = DEFAULT_LEAF_SIZE) -> "KDTreeNeighborIndex":
        """Streams a binary GloVe folder into a new index."""
        return cls.build(iter_glove_binary(path), leaf_size=leaf_size, source=str(path))

    @property
    def dimension(self) -> int:
        return self._dimension

    def is_empty(self) -> bool:
        return self._tree is None

    def __len__(self) -> int:
        return len(self._words)

    def k_nearest(self, query: np.ndarray, k: int) -> List[Neighbor]:
        if k <= 0 or self._tree is None:
            return []

        point = np.asarray(query, dtype=np.float64)
        if point.shape != (self._dimension,):
            raise InvalidInputError(
                f"query has shape {point.shape}, index expects ({self._dimension},)"
            )

        k = min(k, len(self._words))
        distances, positions = self._tree.query(point, k=k)
        # scipy returns scalars when k == 1
        distances = np.atleast_1d(distances)
        positions = np.atleast_1d(positions)

        return [
            Neighbor(
                word=self._words[int(position)],
                distance=float(distance),
                vector=self._tree.data[int(position)].copy(),
            )
            for distance, position in zip(distances, positions)
        ]
