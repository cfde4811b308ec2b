"""
Pytest configuration and fixtures for incident map tests.
"""

import copy
import os
import sys
import tempfile
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from sumbong.maps.map_config import IncidentMapConfig
from sumbong.reports.adapters import normalize_records
from sumbong.reports.sample_data import SAMPLE_RECORDS


@pytest.fixture
def sample_records():
    """Local (camelCase) records of the Parian sample snapshot."""
    return copy.deepcopy(SAMPLE_RECORDS)


@pytest.fixture
def sample_reports(sample_records):
    """The six sample reports: three theft, one each of assault, vandalism, drug."""
    return normalize_records(sample_records)


@pytest.fixture
def remote_records():
    """Rows in the reports API (snake_case) shape."""
    return [
        {
            'id': 101,
            'crime_type': 'Theft',
            'location': 'Parian Terminal',
            'latitude': '14.2008',
            'longitude': '121.1528',
            'description': 'Bag snatching at the jeepney terminal',
            'status': 'pending',
            'date': '2024-02-01T08:15:00',
        },
        {
            'id': 102,
            'crime_type': 'drug-related',
            'location': 'Parian Creek',
            'lat': 14.1995,
            'lng': 121.1561,
            'description': 'Reported drug session',
            'status': 'Under Investigation',
            'date': '2024-02-02',
        },
        {
            'report_id': 'r-103',
            'crime_type': 'cybercrime',
            'location': 'Online',
            'description': 'Online selling scam',
            'status': 'verified',
            'date': None,
        },
    ]


@pytest.fixture
def temp_directory():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def map_config(temp_directory):
    """Default configuration that never reads a config file from the working directory."""
    return IncidentMapConfig(os.path.join(temp_directory, "incident_map_config.json"))


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
