"""Infrastructure Layer — database access, credentials, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Driver exceptions are mapped to DatabaseError before they reach routes

Design Decisions:
    - Thin wrappers over SQLAlchemy, passlib and python-jose: swappable collaborators
"""
