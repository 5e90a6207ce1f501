"""
Pytest configuration and shared fixtures for the loan calculator tests.
"""

import os
from unittest.mock import patch

import pytest

from loan_calculator import create_app
from loan_calculator.config import reset_global_settings
from loan_calculator.models import FallbackRate, LoanInput, RatePeriod


@pytest.fixture(autouse=True)
def test_environment():
    """Provide a valid SECRET_KEY and fresh global settings for every test."""
    reset_global_settings()
    with patch.dict(os.environ, {"SECRET_KEY": "test-secret-key-123"}):
        yield
    reset_global_settings()


@pytest.fixture
def client():
    """Flask test client."""
    app = create_app()
    return app.test_client()


@pytest.fixture
def fallback():
    """Variable rate of 3% margin + 2.5% index."""
    return FallbackRate(margin_percent=3.0, index_percent=2.5)


@pytest.fixture
def two_tiers():
    """Twelve months at 1% followed by twelve months at 2%."""
    return [
        RatePeriod(duration_months=12, annual_rate_percent=1.0, enabled=True),
        RatePeriod(duration_months=12, annual_rate_percent=2.0, enabled=True),
    ]


@pytest.fixture
def sample_loan(fallback):
    """100,000 over 20 years at the variable rate only."""
    return LoanInput(principal=100000, total_months=240, tiers=[], fallback=fallback)
