"""Infrastructure Layer - storage, logging and pre-request filters.

Invariants:
    - Infrastructure never imports from api/
    - Storage exceptions are mapped to StorageError before leaving this layer
"""
