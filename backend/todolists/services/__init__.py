"""Services Layer — authentication, authorization, operations, and their wiring.

Invariants:
    - Services depend on storage Protocols, never on a concrete store class
    - One Operation class per use case; TodoService is the only place that constructs them

Design Decisions:
    - Explicit construction in container.build_services (ADR: no lazily-initialized singletons)
"""
