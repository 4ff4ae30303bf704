"""Infrastructure Layer: database engine, sessions, and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every storage failure leaves here as a DatabaseError
"""
