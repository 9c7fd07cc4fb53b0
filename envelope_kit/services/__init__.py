"""Services Layer — orchestrates core logic around IO collaborators.

Invariants:
    - Services depend on core protocols, never on a concrete transport
"""
