"""Root conftest — shared test configuration."""

import os

# Ensure tests never send real email or hit a real database
os.environ.setdefault("RESEND_API_KEY", "")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
