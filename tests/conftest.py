"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Client pipeline tests against a recording transport
"""

import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from graph_client import GraphClient  # noqa: E402
from fixtures.graph_responses import RecordingRequestor, SAMPLE_ACCESS_TOKEN  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Client pipeline tests against a recording transport")


@pytest.fixture
def requestor():
    """Recording transport with an empty response queue.

    Fails the test on teardown if the client made a call nothing was queued for.
    """
    recorder = RecordingRequestor()
    yield recorder
    assert recorder.unexpected_calls == [], (
        f"Transport called without a queued response: {recorder.unexpected_calls}"
    )


@pytest.fixture
def client(requestor):
    """GraphClient wired to the recording transport."""
    return GraphClient(SAMPLE_ACCESS_TOKEN, web_requestor=requestor)
