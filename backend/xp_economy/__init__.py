"""XP Economy Package: match-outcome-driven player progression.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
