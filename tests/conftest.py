"""
Pytest configuration and shared fixtures for WheelSpin tests.

This module contains pytest configuration, shared fixtures, and test
utilities used across the test modules. It provides sample items, a fake
clock, a recording feedback sink, a mocked DynamoDB table and a ready-made
spin engine.

Fixtures:
    sample_items: The four-item A-D list used by the worked examples
    scheduler: ManualScheduler fake clock
    feedback: Mock feedback service recording pulses
    fast_settings: WheelSettings with the default timeline
    engine: SpinEngine wired to the fixtures above
    mock_items_table: Mocked DynamoDB items table
"""

import os
from typing import List
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

from src.wheelspin.config import WheelSettings
from src.wheelspin.models.item import SelectableItem
from src.wheelspin.services.feedback_service import FeedbackKind, FeedbackService
from src.wheelspin.services.item_source import InMemoryItemSource
from src.wheelspin.services.scheduler_service import ManualScheduler
from src.wheelspin.services.spin_engine import SpinEngine


# Test configuration constants
TEST_TABLE_NAME = "test-wheel-items"
TEST_REGION = "us-east-1"


@pytest.fixture(scope="session")
def aws_credentials():
    """
    Fixture to set up AWS credentials for testing.

    Sets fake credentials used by moto so boto3 never reaches real AWS.
    """
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = TEST_REGION


@pytest.fixture
def mock_items_table(aws_credentials):
    """
    Fixture that creates a mocked DynamoDB items table.

    Returns:
        boto3.resource.Table: Mocked DynamoDB table resource
    """
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name=TEST_REGION)

        table = dynamodb.create_table(
            TableName=TEST_TABLE_NAME,
            KeySchema=[{"AttributeName": "row_id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "row_id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()
        yield table


@pytest.fixture
def sample_items() -> List[SelectableItem]:
    """Four items labelled A to D."""
    return make_items(["A", "B", "C", "D"])


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def feedback() -> Mock:
    """
    Mock feedback service.

    Returns:
        Mock: Spec'd FeedbackService whose ``emit`` calls can be inspected
    """
    return Mock(spec=FeedbackService)


@pytest.fixture
def fast_settings() -> WheelSettings:
    """Default timeline, built explicitly so environment variables cannot leak in."""
    return WheelSettings()


@pytest.fixture
def item_source(sample_items) -> InMemoryItemSource:
    return InMemoryItemSource(sample_items)


@pytest.fixture
def fixed_rng() -> Mock:
    """
    Random source pinned to 3 full rotations and a 45 degree offset.

    ``random()`` returns 0.125, and 0.125 * 360 is exactly 45.0.
    """
    rng = Mock()
    rng.randint.return_value = 3
    rng.random.return_value = 0.125
    return rng


@pytest.fixture
def engine(item_source, scheduler, feedback, fast_settings, fixed_rng) -> SpinEngine:
    """
    Fixture that provides a SpinEngine wired to test doubles.

    Returns:
        SpinEngine: Engine over the A-D items with a fake clock and fixed draw
    """
    return SpinEngine(
        item_source=item_source,
        scheduler=scheduler,
        feedback=feedback,
        settings=fast_settings,
        rng=fixed_rng,
    )


# Pytest configuration
def pytest_configure(config):
    """
    Pytest configuration function.

    Registers custom markers for organizing test execution.
    """
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "aws: mark test as requiring AWS services")


# Test utilities
def make_items(labels: List[str]) -> List[SelectableItem]:
    """
    Utility function to create items from labels.

    Each item gets an id derived from its position, e.g. ``item-0``.
    """
    return [SelectableItem(id=f"item-{i}", label=label) for i, label in enumerate(labels)]


def feedback_kinds(feedback: Mock) -> List[FeedbackKind]:
    """Utility function listing the pulse kinds a mock feedback service received."""
    return [call.args[0] for call in feedback.emit.call_args_list]
