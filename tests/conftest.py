"""
Pytest configuration and fixtures for all tests.
"""

import asyncio
import os
import sys
import tempfile

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Make backend/ (app) and engine/ (emailrisk) importable without installing
for path in (os.path.join(ROOT, 'backend'), os.path.join(ROOT, 'engine')):
    if path not in sys.path:
        sys.path.insert(0, path)

# Set up test environment variables before importing any modules
os.environ.setdefault(
    'DATABASE_URL',
    'sqlite+aiosqlite:///' + os.path.join(tempfile.gettempdir(), 'medclarity-test.db'),
)
os.environ.setdefault('LOG_LEVEL', 'WARNING')
os.environ.setdefault('RISK_POLICY', 'default')


async def _prepare_database():
    from app import db

    await db.dispose_engine()
    await db.create_schema()
    await db.dispose_engine()


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with the schema created."""
    from app.config import settings

    monkeypatch.setattr(settings, 'DATABASE_URL', f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    asyncio.run(_prepare_database())
    yield settings.DATABASE_URL


@pytest.fixture
def client(database):
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
