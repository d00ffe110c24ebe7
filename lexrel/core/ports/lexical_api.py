# lexrel/core/ports/lexical_api.py
"""
The generic lexical-semantic API shared by every backend.

Backends (embedding based, lexical-resource based, ontology based, ...)
implement the same capability set independently. Every method defaults to
raising `NotImplementedError`, so a backend overrides only what it supports
and callers can tell "no relation found" apart from "this backend cannot
answer that".
"""

from abc import ABC
from typing import Dict, List, Optional, Set

from lexrel.core.domain.models import Concept, ConceptRelation, Domain, WordRelation

class ILexicalSemanticAPI(ABC):
    """
    Interface (Port) for lexical-semantic queries over words and concepts.
    """

    def _unsupported(self, capability: str) -> NotImplementedError:
        return NotImplementedError(
            f"{type(self).__name__} does not support '{capability}'."
        )

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
        """Words related to `word`, most related first."""
        raise self._unsupported("related_words")

    def related_words_weighted(
        self,
        word: str,
        relation: Optional[WordRelation] = None,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Dict[str, float]:
        """Words related to `word`, mapped to their relatedness score."""
        raise self._unsupported("related_words_weighted")

    def word_relations(
        self,
        word1: str,
        word2: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Set[WordRelation]:
        """Relation kinds holding between two words."""
        raise self._unsupported("word_relations")

    def word_relations_weighted(
        self,
        word1: str,
        word2: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Dict[WordRelation, float]:
        """Relation kinds between two words, mapped to their score."""
        raise self._unsupported("word_relations_weighted")

    # --- Word <-> Concept ---

    def word_to_concepts(
        self,
        word: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Set[Concept]:
        raise self._unsupported("word_to_concepts")

    def word_to_concepts_weighted(
        self,
        word: str,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Dict[Concept, float]:
        raise self._unsupported("word_to_concepts_weighted")

    def constrained_concepts(
        self,
        word: str,
        hypernym: Concept,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Set[Concept]:
        """Senses of `word` that fall under `hypernym`."""
        raise self._unsupported("constrained_concepts")

    def constrained_concepts_weighted(
        self,
        word: str,
        hypernym: Concept,
        *,
        language: Optional[str] = None,
        domain: Optional[Domain] = None,
    ) -> Dict[Concept, float]:
        raise self._unsupported("constrained_concepts_weighted")

    def concept_to_words(
        self, concept: Optional[Concept], *, language: Optional[str] = None
    ) -> Set[str]:
        raise self._unsupported("concept_to_words")

    def concept_to_words_weighted(
        self, concept: Optional[Concept], *, language: Optional[str] = None
    ) -> Dict[str, float]:
        raise self._unsupported("concept_to_words_weighted")

    def gloss(self, concept: Concept, *, language: Optional[str] = None) -> str:
        """Definition text of a concept."""
        raise self._unsupported("gloss")

    # --- Concept level ---

    def related_concepts(
        self, concept: Concept, relations: Set[ConceptRelation]
    ) -> Set[Concept]:
        raise self._unsupported("related_concepts")

    def related_concepts_weighted(
        self, concept: Concept, relations: Set[ConceptRelation]
    ) -> Dict[Concept, float]:
        raise self._unsupported("related_concepts_weighted")

    def concept_relations(
        self, concept1: Optional[Concept], concept2: Optional[Concept]
    ) -> Set[ConceptRelation]:
        raise self._unsupported("concept_relations")

    def concept_relations_weighted(
        self, concept1: Optional[Concept], concept2: Optional[Concept]
    ) -> Dict[ConceptRelation, float]:
        raise self._unsupported("concept_relations_weighted")

    # --- Languages & Domains ---

    def languages(
        self, domain: Optional[Domain] = None, word: Optional[str] = None
    ) -> Set[str]:
        """Languages covered by the backend, optionally restricted to a domain or word."""
        raise self._unsupported("languages")

    def concept_languages(self, concept: Concept) -> Set[str]:
        raise self._unsupported("concept_languages")

    def domains(
        self, language: Optional[str] = None, word: Optional[str] = None
    ) -> Set[Domain]:
        raise self._unsupported("domains")

    def domains_weighted(
        self, language: str, word: str, domains: Set[Domain]
    ) -> Dict[Domain, float]:
        raise self._unsupported("domains_weighted")

    def concept_domains(self, concept: Concept) -> Set[Domain]:
        raise self._unsupported("concept_domains")

    def concept_domains_weighted(self, concept: Concept) -> Dict[Domain, float]:
        raise self._unsupported("concept_domains_weighted")
