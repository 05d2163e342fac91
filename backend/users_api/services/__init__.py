"""Services Layer — orchestration between routes and repositories.

Invariants:
    - Services depend on Protocols, never on concrete infrastructure classes
    - Collaborators are constructor-supplied (no module-level singletons)
"""
