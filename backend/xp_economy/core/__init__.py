"""Core Layer: pure progression logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All randomness flows through an injected RandomSource

Design Decisions:
    - Functional core separated from imperative shell (impureim sandwich)
"""
