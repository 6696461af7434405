"""Pytest configuration and shared fixtures."""

import pytest

from cafequeue.config import QueueConfig
from cafequeue.engine.orchestrator import CoffeeShop
from cafequeue.engine.queue import OrderQueue


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def cfg():
    return QueueConfig()


@pytest.fixture
def queue(cfg):
    """Fresh SMART queue with a fixed seed."""
    return OrderQueue(cfg, seed=7)


@pytest.fixture
def shop(cfg):
    return CoffeeShop(cfg, seed=7)
