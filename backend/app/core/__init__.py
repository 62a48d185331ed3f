"""Core Layer — pure submission logic: errors, sanitization, window math, formatting.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic (Protocols describe the IO boundary only)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
