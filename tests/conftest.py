"""Shared fixtures for execomp tests."""

import pytest

from helpers import FakeProvider, benchmark, executive, listing


@pytest.fixture
def asx_provider() -> FakeProvider:
    """ASX scenario: an empty symbol, a company without executives, one absent benchmark."""
    return FakeProvider(
        listings={"ASX": [listing("BRDL"), listing("GOOG"), listing("MSFT"), listing("")]},
        executives={
            "BRDL": [
                executive("BRDL", "Steve Pell CEO", 110001.0, "BOARD SERVICES"),
                executive("BRDL", "Allen Stephens CTO", 105000.0, "BOARD SERVICES"),
                executive("BRDL", "Sarah Graff VP", 150000.0, "TYPO SERVICES"),
            ],
            "GOOG": [
                executive("GOOG", "Steve Pell CEO", 300000.0, "WEB API DEVELOPMENT"),
                executive("GOOG", "Sundar Pichai CEO", 200000.0, "INTERNET SERVICES"),
                executive("GOOG", "Scott Silver VP", 200000.0, ""),
            ],
            "MSFT": [],
        },
        benchmarks={
            "BOARD SERVICES": benchmark("BOARD SERVICES", 100000.0),
            "INTERNET SERVICES": benchmark("INTERNET SERVICES", 150000.0),
            "WEB API DEVELOPMENT": benchmark("WEB API DEVELOPMENT", 42.0),
        },
    )
