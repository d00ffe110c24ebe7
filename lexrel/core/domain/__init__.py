# lexrel/core/domain/__init__.py
"""
Domain Entities and Value Objects.

This package defines the core data structures used throughout the application
(VectorRecord, Concept, Neighbor, relation kinds) and the error taxonomy.
They are devoid of any infrastructure logic.
"""
