# lexrel/adapters/glove_adaptor.py
"""
GloVe backend of the lexical-semantic API.

Word relatedness is the cosine similarity of GloVe vectors. Related-word
queries additionally need the k-d tree, which is only built on request
because it holds every vector in memory.
"""

from typing import Dict, List, Optional, Set, Tuple

import numpy as np
import structlog

from lexrel.adapters.index.kd_tree_index import DEFAULT_LEAF_SIZE, KDTreeNeighborIndex
from lexrel.adapters.persistence.embedding_store import GloveBinaryEmbeddingStore
from lexrel.adapters.persistence.glove_binary import PathLike
from lexrel.core.domain.exceptions import InvalidInputError, UnsupportedStateError
from lexrel.core.domain.models import Concept, ConceptRelation, Domain, WordRelation
from lexrel.core.ports.embedding_store import IEmbeddingStore
from lexrel.core.ports.lexical_api import ILexicalSemanticAPI
from lexrel.core.ports.neighbor_index import INeighborIndex
from lexrel.core.services.similarity import CosineSimilarityScorer

logger = structlog.get_logger()

DEFAULT_RELATEDNESS_THRESHOLD = 0.70
DEFAULT_MAX_RELATED_WORDS = 10


class GloVeAdaptor(ILexicalSemanticAPI):
    """
    Concrete implementation of the lexical API over GloVe embeddings.

    The store and the optional neighbour index are independent read-only
    structures over the same vectors; both must be present for
    `related_words` and `related_words_weighted`.

    The relatedness threshold is a plain attribute: changing it while other
    threads run relation queries needs external synchronization.
    """

    def __init__(
        self,
        store: IEmbeddingStore,
        neighbor_index: Optional[INeighborIndex] = None,
        scorer: Optional[CosineSimilarityScorer] = None,
        threshold: float = DEFAULT_RELATEDNESS_THRESHOLD,
        max_related_words: int = DEFAULT_MAX_RELATED_WORDS,
    ):
        self.store = store
        self.neighbor_index = neighbor_index
        self.scorer = scorer or CosineSimilarityScorer()
        self.max_related_words = max_related_words
        self._threshold = DEFAULT_RELATEDNESS_THRESHOLD
        self.set_threshold(threshold)

    @classmethod
    def from_path(
        cls,
        path: PathLike,
        compute_neighbour_tree: bool = False,
        in_memory: bool = False,
        leaf_size: int = DEFAULT_LEAF_SIZE,
        **kwargs,
    ) -> "GloVeAdaptor":
        """
        Opens a binary GloVe folder.

        Args:
            path: Folder holding dict.bin and vectors.bin.
            compute_neighbour_tree: Also stream the folder into a k-d tree,
                which `related_words` requires.
            in_memory: Read the whole vector table into memory.
            **kwargs: Forwarded to the constructor (threshold, ...).

        Raises:
            LoadError: If the folder is missing or malformed.
        """
        store = GloveBinaryEmbeddingStore.open(path, in_memory=in_memory)
        index = None
        if compute_neighbour_tree:
            try:
                index = KDTreeNeighborIndex.from_glove_binary(path, leaf_size=leaf_size)
            except Exception:
                store.close()
                raise
        return cls(store, neighbor_index=index, **kwargs)

    # --- Threshold ---

    @property
    def threshold(self) -> float:
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self.set_threshold(value)

    def set_threshold(self, threshold: float) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise InvalidInputError(f"threshold must lie in [0, 1], got {threshold}")
        self._threshold = float(threshold)

    # --- Helpers ---

    def _similarity(self, v1: Optional[np.ndarray], v2: Optional[np.ndarray]) -> float:
        try:
            return self.scorer.score(v1, v2)
        except InvalidInputError as e:
            logger.debug("similarity_defaulted", reason=e.message)
            return 0.0

    def _nearest_neighbours(self, word: str, max_words: int) -> List[Tuple[str, float]]:
        """
        The `max_words` words closest to `word`, as (word, score) pairs sorted
        by decreasing score. The query word itself is never part of the result.
        """
        if self.neighbor_index is None or self.neighbor_index.is_empty():
            raise UnsupportedStateError(
                "related_words",
                "related words can only be computed if the nearest neighbour tree "
                "is built at construction time (compute_neighbour_tree=True).",
            )

        vector = self.store.lookup(word)
        if vector is None:
            return []

        # "+ 1" because the word itself is usually its own nearest neighbour
        neighbours = self.neighbor_index.k_nearest(vector, max_words + 1)

        scored = []
        for n in neighbours:
            if n.word == word:
                continue
            candidate = n.vector if n.vector is not None else self.store.lookup(n.word)
            scored.append((n.word, self._similarity(vector, candidate), n.distance))
        scored.sort(key=lambda hit: (-hit[1], hit[2]))
        return [(w, score) for w, score, _ in scored[:max(max_words, 0)]]

    # --- Word level ---

    def related_words(
        self,
        word: str,
        relation: Optional[WordRelation] = None,
        max_words: Optional[int] = None,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> List[str]:
        if max_words is None:
            max_words = self.max_related_words
        return [w for w, _ in self._nearest_neighbours(word, max_words)]

    def related_words_weighted(
        self,
        word: str,
        relation: Optional[WordRelation] = None,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Dict[str, float]:
        weighted: Dict[str, float] = {}
        for w, score in self._nearest_neighbours(word, self.max_related_words):
            weighted.setdefault(w, score)
        return weighted

    def word_relations_weighted(
        self,
        word1: str,
        word2: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Dict[WordRelation, float]:
        sim = self._similarity(self.store.lookup(word1), self.store.lookup(word2))
        return {
            WordRelation.WORD_RELATEDNESS: sim,
            WordRelation.WORD_SIMILARITY: sim,
        }

    def word_relations(
        self,
        word1: str,
        word2: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Set[WordRelation]:
        weighted = self.word_relations_weighted(word1, word2)
        # Membership is "strictly below the threshold"
        return {rel for rel, score in weighted.items() if score < self._threshold}

    # --- Word <-> Concept ---

    def word_to_concepts(
        self,
        word: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Set[Concept]:
        record = self.store.get_record(word)
        if record is None:
            return set()
        return {Concept.from_record(record)}

    def word_to_concepts_weighted(
        self,
        word: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Dict[Concept, float]:
        return {concept: 1.0 for concept in self.word_to_concepts(word)}

    def concept_to_words(
        self, concept: Optional[Concept], *, language: Optional[str] = None
    ) -> Set[str]:
        if concept is None:
            return set()
        return {concept.id}

    def concept_to_words_weighted(
        self, concept: Optional[Concept], *, language: Optional[str] = None
    ) -> Dict[str, float]:
        if concept is None:
            return {}
        return {concept.id: 1.0}

    # --- Concept level ---

    def concept_relations_weighted(
        self, concept1: Optional[Concept], concept2: Optional[Concept]
    ) -> Dict[ConceptRelation, float]:
        if concept1 is None or concept2 is None:
            return {}
        sim = self._similarity(concept1.vector, concept2.vector)
        return {
            ConceptRelation.CONCEPT_RELATEDNESS: sim,
            ConceptRelation.CONCEPT_SIMILARITY: sim,
        }

    def concept_relations(
        self, concept1: Optional[Concept], concept2: Optional[Concept]
    ) -> Set[ConceptRelation]:
        weighted = self.concept_relations_weighted(concept1, concept2)
        return {rel for rel, score in weighted.items() if score < self._threshold}

    # --- Resource management ---

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> "GloVeAdaptor":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
