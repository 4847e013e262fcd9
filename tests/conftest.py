"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the deprecation test suite.
"""

import shutil
import tempfile
import warnings
from collections.abc import Generator
from pathlib import Path

import pytest

from flaphl_deprecation import (
    DEBUG_ENV_VAR,
    LOG_FILE_ENV_VAR,
    configure_deprecation_handler,
    get_default_config,
    get_deprecation_handler,
)

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (may use DB, network, filesystem)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory that is cleaned up after the test.

    Yields:
        Path: Temporary directory path
    """
    temp_path = Path(tempfile.mkdtemp(prefix="flaphl-test-"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def log_file(temp_dir: Path) -> Path:
    """Provide a not-yet-created log file path inside a temporary directory."""
    return temp_dir / "deprecations.log"


@pytest.fixture(autouse=True)
def reset_deprecation_state(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """
    Reset process-wide deprecation state around each test.

    Clears the environment variables, the default config slots and any
    installed notice handler so tests cannot leak configuration.
    """
    monkeypatch.delenv(LOG_FILE_ENV_VAR, raising=False)
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)
    original_showwarning = warnings.showwarning

    yield

    config = get_default_config()
    config.set_log_file(None)
    config.set_logger(None)
    config.set_backtrace_limit(10)
    if get_deprecation_handler() is not None:
        configure_deprecation_handler(None)
    warnings.showwarning = original_showwarning


# =============================================================================
# Test Collection Hooks
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to add markers and skip conditions.

    Args:
        config: Pytest config object
        items: List of collected test items
    """
    # Add 'unit' marker to tests without other markers
    for item in items:
        if not any(
            mark.name in ["integration", "property"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
