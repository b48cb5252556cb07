"""pytest configuration for conncheck tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest


# Configure asyncio mode for pytest-asyncio
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture
def aws_client():
    """A stub boto3 client plus a factory that hands it out."""
    client = MagicMock()
    calls: list[tuple[str, Any]] = []

    def factory(service_name, config):
        calls.append((service_name, config))
        return client

    client.factory = factory
    client.factory_calls = calls
    return client
