import pytest

from pancake.logging_config import configure_logging


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Route structlog through stdlib logging so nothing lands on stdout."""
    configure_logging("WARNING")
