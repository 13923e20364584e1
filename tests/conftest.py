"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.calculations.metrics import evaluate_project
from tests.fixtures.test_inputs import (
    get_default_state,
    get_empty_tenant_state,
    get_destination_state,
)


@pytest.fixture
def default_state():
    """Default project scenario."""
    return get_default_state()


@pytest.fixture
def empty_tenant_state():
    """Default scenario without tenants."""
    return get_empty_tenant_state()


@pytest.fixture
def destination_state():
    """Scenario with a destination-grade street."""
    return get_destination_state()


@pytest.fixture
def traced_evaluation(default_state):
    """Default scenario evaluated with tracing enabled."""
    return evaluate_project(default_state, trace_enabled=True)
