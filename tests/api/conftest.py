# tests/api/conftest.py
import pytest
import sys
import os
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).parents[2]
sys.path.insert(0, str(project_root))

# Set test environment variables
os.environ["DEBUG"] = "true"
os.environ["API_KEY"] = "dev_key"
os.environ.pop("SIZING_CONFIG_PATH", None)


@pytest.fixture
def api_headers():
    """Fixture for API headers with authentication."""
    return {"X-API-Key": "dev_key"}


@pytest.fixture
def stack_and_drain_payload():
    """Stack feeding a horizontal drain, as sent by a client."""
    return {
        "segments": [
            {"id": "s1", "endpoint_a": [0, 0, 10], "endpoint_b": [0, 0, 9], "load_units": 40},
            {"id": "s2", "endpoint_a": [0, 0, 9], "endpoint_b": [0, 0, 8], "load_units": 100},
            {"id": "s3", "endpoint_a": [0, 0, 5], "endpoint_b": [8, 0, 5],
             "load_units": 5, "slope": 0.02,
             "neighbor_endpoints": [[[8, 0, 5], [16, 0, 5]]]},
        ]
    }
