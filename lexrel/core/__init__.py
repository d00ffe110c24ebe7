# lexrel/core/__init__.py
"""
Core Domain Layer.

This package contains the pure relatedness logic and entities of the system.
It strictly follows the Hexagonal Architecture (Ports & Adapters) pattern:
- No dependencies on infrastructure (files, k-d trees, DI containers).
- Defines Interfaces (Ports) that the Infrastructure layer must implement.
"""
