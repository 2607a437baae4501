"""Infrastructure Layer — database sessions, password hashing, structured logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver exceptions are mapped to DatabaseError before leaving this layer
"""
