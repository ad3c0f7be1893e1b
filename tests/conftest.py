"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def sample_returns():
    """Monthly returns with mixed signs."""
    return [0.05, -0.03, 0.08, -0.01, 0.02]


@pytest.fixture
def sample_allocation():
    """Category amounts of a diversified household."""
    return {
        "real_estate": 650000,
        "stocks": 180000,
        "bank_accounts": 45000,
        "life_insurance": 120000,
    }
