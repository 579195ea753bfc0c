"""Infrastructure Layer: database access, repositories, and logging.

Invariants:
    - Infrastructure never imports core/ decision logic, only core types and ports
    - Repositories implement the Protocols in core/repository_protocols.py
"""
