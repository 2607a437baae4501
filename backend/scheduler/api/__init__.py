"""API Layer — FastAPI routes, session gate and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Every /api/* route except register and login requires a live session

Design Decisions:
    - Thin routes delegate to services; routes never touch repositories
"""
