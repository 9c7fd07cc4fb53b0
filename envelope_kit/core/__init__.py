"""Core Layer — pure encoding logic, no IO, no async, no transport imports.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Resolution and encoding are synchronous, re-entrant and stateless

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
