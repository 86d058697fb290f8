"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to a real database or sign with a real secret
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
