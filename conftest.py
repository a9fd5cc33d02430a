import shutil
from pathlib import Path

import pytest

from spatial_tracker import config, sessions

TEST_DATA_DIR = Path("data-tests")


@pytest.fixture(autouse=True)
def clean_test_data(monkeypatch):
    """Wipe data-tests/, reset the toggle env var and forget all sessions."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    monkeypatch.delenv("SPATIAL_TRACKER_ACTIVE", raising=False)
    config.init_config(TEST_DATA_DIR)
    sessions.clear_sessions()
    yield
    # leave data-tests around after tests for inspection; CI can ignore it
