"""Pytest configuration for tests."""

import os
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from dotenv import load_dotenv

from tests.fixtures.factories import TECHNICAL_EVALUATION, TEST_GOOGLE_CREDENTIALS

# Load .env.test file if it exists
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path)

# Set test environment variables before any imports (only if not already set)
os.environ.setdefault("GOOGLE_SHEET_ID", "sheet-test")
os.environ.setdefault("GOOGLE_CREDENTIALS_JSON", TEST_GOOGLE_CREDENTIALS)
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("VAPI_API_KEY", "vapi-test-key")
os.environ.setdefault("LOG_LEVEL", "INFO")


@pytest.fixture
def record_store():
    """Record store double; writes succeed and the id column is empty."""
    store = AsyncMock()
    store.update.return_value = 3
    store.read_column.return_value = []
    return store


@pytest.fixture
def evaluator():
    """Evaluator double returning a technical-style evaluation."""
    mock = AsyncMock()
    mock.evaluate.return_value = TECHNICAL_EVALUATION
    return mock


@pytest.fixture
def dispatcher(record_store, evaluator):
    """Dispatcher wired to the record store and evaluator doubles."""
    from hiring_pipeline.services.correlator import ConversationCorrelator
    from hiring_pipeline.services.dispatcher import CallbackDispatcher

    return CallbackDispatcher(
        record_store=record_store,
        evaluator=evaluator,
        correlator=ConversationCorrelator(record_store, "sheet-test"),
        spreadsheet_id="sheet-test",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: marks tests as end-to-end HTTP tests (slower)")
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (medium speed)"
    )
