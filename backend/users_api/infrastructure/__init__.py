"""Infrastructure Layer — database access, repositories and observability.

Invariants:
    - Infrastructure implements the Protocols declared in core/repository_protocols.py
    - Store faults raised here are never translated by the repository itself
"""
