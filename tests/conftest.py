"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from src.core.repository import RateRepository
from src.core.rates_service import FreightRatesService
from tests.test_fixtures import InMemoryBackend, sea_form


@pytest.fixture
def backend():
    """In-memory backend signed in as user-1."""
    return InMemoryBackend(user_id="user-1")


@pytest.fixture
def repository(backend):
    """Repository bound to the in-memory backend."""
    return RateRepository(backend, table="freight_rates")


@pytest.fixture
def service(repository):
    """Rates service over the in-memory repository."""
    return FreightRatesService(repository)


@pytest.fixture
def sample_sea_form():
    """Complete sea freight form values."""
    return sea_form()
