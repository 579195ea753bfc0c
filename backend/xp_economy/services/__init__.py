"""Services Layer: async shell around the pure progression core.

Invariants:
    - Services load state, call core, and persist; they make no numeric decisions
    - Every service takes its RandomSource and Settings as arguments (defaults
      come from config)
"""
