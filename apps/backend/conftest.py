"""Pytest configuration and fixtures"""

import os

# Set test environment variables BEFORE any imports
# This must happen at module load time, not in a fixture
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["INTEREST_EVENTS_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-casematch-backend-tests-only"
os.environ["JWT_ALGORITHM"] = "HS256"
