"""Pytest configuration and shared fixtures."""

from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest

from capacity_reservation import config
from capacity_reservation.clients.ec2_client import EC2Client
from capacity_reservation.models import ResourceModel
from capacity_reservation.services import ReconciliationEngine


# =============================================================================
# Environment and Configuration Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    """Fake credentials so no test can reach a real AWS account."""
    test_vars = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "AWS_DEFAULT_REGION": "us-east-1",
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    config.reset_settings()
    yield test_vars
    config.reset_settings()


# =============================================================================
# EC2 Mocks
# =============================================================================

@pytest.fixture
def mock_ec2():
    """EC2Client mock; tests set return values or side effects per call."""
    return MagicMock(spec=EC2Client)


@pytest.fixture
def engine(mock_ec2):
    """Engine with a short delay and a small stabilization limit."""
    return ReconciliationEngine(
        mock_ec2,
        callback_delay_seconds=5,
        max_stabilization_attempts=3,
    )


# =============================================================================
# Test Data Fixtures
# =============================================================================

@pytest.fixture
def sample_model():
    """Desired state for a new t2.micro Windows reservation."""
    return ResourceModel(
        availability_zone="us-east-1a",
        instance_type="t2.micro",
        instance_platform="Windows",
        instance_count=1,
    )


@pytest.fixture
def sample_end_date():
    return datetime(2030, 1, 1, tzinfo=UTC)
