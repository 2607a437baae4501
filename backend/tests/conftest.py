"""Root conftest — shared test configuration."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("DATABASE_CREATE_TABLES", "false")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")
# Minimum cost factor bcrypt accepts; keeps hashing fast under test
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "text")
