"""Database Base — declarative base and shared column mixins.

Invariants:
    - Models import Base from db/base.py only
    - Engine and session lifecycle live in infrastructure/database.py
"""
