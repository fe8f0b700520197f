"""Core Layer — identity types, entities, errors, storage contracts. No IO, no FastAPI.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Entities and ids are immutable values

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
