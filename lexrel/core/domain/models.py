# lexrel/core/domain/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---

class WordRelation(str, Enum):
    """Relation kinds reported between two words."""
    WORD_RELATEDNESS = "word_relatedness"
    WORD_SIMILARITY = "word_similarity"

class ConceptRelation(str, Enum):
    """Relation kinds reported between two concepts."""
    CONCEPT_RELATEDNESS = "concept_relatedness"
    CONCEPT_SIMILARITY = "concept_similarity"

# --- Value Objects ---

class Domain(BaseModel):
    """
    A knowledge domain (e.g., 'medicine', 'sports').
    Part of the generic lexical API; the embedding backend accepts it but never filters on it.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable domain identifier")
    label: Optional[str] = Field(None, description="Human readable name")


@dataclass(frozen=True, eq=False)
class VectorRecord:
    """
    A word paired with its embedding vector.

    Records are compared by identity: two records for the same word may carry
    different vectors when a source file contains duplicates.
    """
    word: str
    vector: np.ndarray

    @property
    def dimension(self) -> int:
        return int(self.vector.shape[0])


@dataclass(frozen=True)
class Concept:
    """
    A word sense reified from exactly one VectorRecord.

    No sense disambiguation is performed, so the identifier is the word itself
    and equality/hashing only look at `id`.
    """
    id: str
    record: VectorRecord = field(compare=False, repr=False)

    @classmethod
    def from_record(cls, record: VectorRecord) -> "Concept":
        return cls(id=record.word, record=record)

    @property
    def vector(self) -> np.ndarray:
        return self.record.vector


@dataclass(frozen=True)
class Neighbor:
    """One hit of a nearest-neighbour query: a word, its distance to the query and the indexed vector."""
    word: str
    distance: float
    vector: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
