"""Core Layer - pure request-checking logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
    - Checks return error descriptors (dict) or None; they never raise

Design Decisions:
    - Functional core separated from imperative shell: the API layer turns
      descriptors into typed errors at the request boundary
"""
