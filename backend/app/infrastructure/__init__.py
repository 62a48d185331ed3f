"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure imports core/ only for errors and pure helpers
    - All external calls bounded by a timeout and mapped to ContactRelayError subclasses

Design Decisions:
    - Thin wrappers over one shared httpx.AsyncClient (ADR: single responsibility)
"""
