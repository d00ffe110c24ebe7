# lexrel/__init__.py
"""
lexrel - Embedding-backed Lexical Relatedness.

Answers word/word similarity, nearest-neighbour and word-to-concept queries
on top of pretrained GloVe vectors stored in the Java GloVe binary layout.

The package follows Hexagonal Architecture (Ports & Adapters):
- `lexrel.core`: domain models, errors, ports and the similarity service.
- `lexrel.adapters`: the binary codec, the embedding store, the k-d tree
  index and the GloVe backend of the lexical API.
- `lexrel.shared`: configuration, logging, tracing and DI wiring.
"""

__version__ = "1.0.0"
