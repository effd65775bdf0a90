"""
Shared test fixtures and configuration for pytest.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from datalink.clients import StaticUpstreamClient
from datalink.core.models import ConnectorRequest


logger = logging.getLogger(__name__)


# ============================================================================
# Pytest hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "e2e: End-to-end tests through the CLI")


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def static_client():
    """Fixture providing a deterministic upstream client."""
    client = StaticUpstreamClient()
    yield client
    client.close()


@pytest.fixture
def ab_schema():
    """Two-field schema in host dict form."""
    return [
        {"name": "a", "label": "A", "dataType": "NUMBER",
         "semantics": {"conceptType": "METRIC"}},
        {"name": "b", "label": "B", "dataType": "NUMBER",
         "semantics": {"conceptType": "METRIC"}},
    ]


@pytest.fixture
def repo_params():
    """Config params selecting a repository."""
    return {"organization": "google", "repository": "datastudio"}


def _make_request(config_params=None, fields=None, sample_mode=False, credentials=None):
    return ConnectorRequest(
        config_params=dict(config_params or {}),
        fields=list(fields or []),
        credentials=credentials,
        sample_mode=sample_mode,
    )


@pytest.fixture
def make_request():
    """Fixture providing a ConnectorRequest builder with sensible defaults."""
    return _make_request
