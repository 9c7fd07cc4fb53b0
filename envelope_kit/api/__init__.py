"""API Layer — FastAPI route class, routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes returning Response variants use EnvelopeRoute

Design Decisions:
    - Thin routes delegate to services (ADR: ExMA impureim sandwich)
"""
