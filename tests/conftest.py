"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/                  # Fast, isolated tests (mocks, in-memory store)
    │   ├── verse_auth/
    │   └── verse_config/
    ├── integration/           # SQLAlchemy repository against in-memory SQLite
    │   └── verse_auth/
    └── shared/                # Shared fixtures and utilities
"""

import pytest

from verse_config import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test load settings from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()
