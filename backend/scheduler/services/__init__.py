"""Services Layer — business rules over the repositories, one service per resource.

Invariants:
    - Services own the transaction: each mutating method ends in exactly one commit
    - Ownership and existence checks happen before any mutation
"""
