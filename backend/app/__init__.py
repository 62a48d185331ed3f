"""Contact Relay Application Package — throttled, verified contact-form relay.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
