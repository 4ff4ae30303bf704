"""Database Package: SQLAlchemy declarative Base.

Invariants:
    - Single declarative Base for every table

Design Decisions:
    - Engine and sessions live in infrastructure/database.py, not here
"""
