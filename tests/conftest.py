"""
Root pytest configuration file for the Atlassian agent tool tests.
"""

import pytest


def pytest_addoption(parser):
    """Add command-line options for tests."""
    parser.addoption(
        "--use-real-data",
        action="store_true",
        default=False,
        help="Run tests that call the real Atlassian Cloud API (requires ATLASSIAN_ACCESS_TOKEN)",
    )


@pytest.fixture
def use_real_data(request):
    """True if the --use-real-data flag is passed to pytest."""
    return request.config.getoption("--use-real-data")


@pytest.fixture
def anyio_backend():
    return "asyncio"
