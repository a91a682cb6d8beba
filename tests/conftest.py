"""Suite-wide pytest configuration.

Integration tests (``tests/integration``) are skipped unless ``--integration``
is given, except those also marked ``ci_safe``: they stub every outbound call.
Live tests additionally need ``RIOT_COOKIES`` (see ``tests/live``).
"""

import pytest


def pytest_addoption(parser):
    """Add integration option to pytest."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests against stubbed or real Riot services",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless explicitly requested (``ci_safe`` always runs)."""
    if config.getoption("--integration"):
        return
    skip_integration = pytest.mark.skip(reason="Need --integration option to run")
    for item in items:
        if "integration" in item.keywords and "ci_safe" not in item.keywords:
            item.add_marker(skip_integration)
