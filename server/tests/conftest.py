"""Shared test fixtures and configuration."""
import sys
import os

# Ensure the server package is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set required environment variables BEFORE any application module is imported.
# These are dummy values used only in tests; no real connections are made.
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key-for-unit-tests")
os.environ.setdefault("OPENAI_API_KEY", "sk-test-key-for-unit-tests")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-unit-tests")
os.environ.setdefault("AUTH_MODE", "static")

import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def student_repo():
    repo = MagicMock()
    repo.find_by_name = AsyncMock(return_value=None)
    repo.create_student = AsyncMock()
    repo.update_student = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def class_repo():
    repo = MagicMock()
    repo.find_by_name = AsyncMock(return_value=None)
    repo.count_enrollments = AsyncMock(return_value=0)
    repo.enroll_student = AsyncMock()
    return repo


@pytest.fixture
def task_repo():
    repo = MagicMock()
    repo.create_task = AsyncMock()
    return repo
