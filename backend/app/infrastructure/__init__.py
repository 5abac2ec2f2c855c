"""Infrastructure Layer - database session management and observability.

Invariants:
    - Infrastructure never imports domain logic from core/ (errors excepted)
    - Every storage error is mapped to StorageFailureError
"""
