"""Services Layer: persistence of the report aggregate and startup bootstrap.

Invariants:
    - Services own transactions; routes never call commit()
"""
