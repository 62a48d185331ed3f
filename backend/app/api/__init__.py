"""API Layer — FastAPI routes, CORS envelope, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All contact endpoint responses return {ok, error?} JSON with CORS headers

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
