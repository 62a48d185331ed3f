"""Pydantic Schemas — request/response validation for the contact endpoint.

Invariants:
    - Schemas validate at system boundary (decoded request body, response envelope)
"""
