"""
Root conftest.py for the item picker backend tests.

This file contains shared fixtures and pytest configuration
that applies to all test modules.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the project root is in the path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from api.settings import AppSettings


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow running",
    )


# ============================================================================
# Shared Fixtures
# ============================================================================


@pytest.fixture
def settings():
    """Settings with a small catalog so full scans stay fast."""
    return AppSettings(total_items=2000, add_batch_interval=10.0, commit_interval=1.0)


@pytest.fixture
def app(settings):
    """A fresh FastAPI app. Startup hooks are not run, so timers stay off."""
    from main import create_app

    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def app_state(app):
    """The state attached to the ``app`` fixture."""
    return app.state.picker


@pytest.fixture
def flush(app_state):
    """Run one drain and one commit on the app state, as the timers would."""

    def _flush():
        app_state.add_queue.drain()
        app_state.selection_store.commit_pending()

    return _flush
