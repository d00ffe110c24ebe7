# lexrel/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Construction Errors ---

class LoadError(DomainError):
    """Raised when an embedding source cannot be loaded (missing, truncated, inconsistent)."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load embeddings from '{path}': {reason}")

# --- Process/State Errors ---

class UnsupportedStateError(DomainError):
    """Raised when an operation needs a structure (e.g., the neighbour index) that was never built."""
    def __init__(self, operation: str, reason: str):
        self.operation = operation
        super().__init__(f"'{operation}' is not available: {reason}")

# --- Validation Errors ---

class InvalidInputError(DomainError):
    """Raised when vectors or parameters handed to an operation are malformed."""
    def __init__(self, reason: str):
        super().__init__(f"Invalid input: {reason}")
