"""Core Layer: domain types, error taxonomy, route table. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/

Design Decisions:
    - Shared by server and client: both sides agree on paths, errors, and percentages
"""
