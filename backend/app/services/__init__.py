"""Services Layer — the contact submission pipeline.

Invariants:
    - Services orchestrate IO around pure core functions
    - Collaborators injected through core/repository_protocols.py Protocols
"""
