"""
Pytest configuration and shared fixtures for all analyzer tests.

The driver is expensive to build (grammar load) and holds no per-run state,
so one instance is shared by the whole session.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from ruby_analyzer.analysis.environment import Environment
from ruby_analyzer.compiler.driver import AnalyzerDriver
from ruby_analyzer.frontend.parser import Parser


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_driver():
    """Session-scoped driver; every analyze() call builds a fresh Environment."""
    return AnalyzerDriver()


@pytest.fixture(scope="session")
def session_parser(session_driver):
    """Parser owned by the session driver."""
    return session_driver.parser


# =============================================================================
# Class-scoped fixtures
# =============================================================================

@pytest.fixture(scope="class")
def driver(session_driver):
    """Class-scoped driver - returns session driver (stateless, safe to share)."""
    return session_driver


@pytest.fixture(scope="class")
def parser(session_parser) -> Parser:
    return session_parser


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def env():
    """Fresh environment with default built-in tables."""
    return Environment()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as source-driven end-to-end tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
