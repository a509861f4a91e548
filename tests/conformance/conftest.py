"""Pytest configuration for conformance tests."""

import pytest
from tests.conformance.runners.cli_runner import CliRunner
from tests.conformance.runners.frontend_runner import FrontendRunner


def get_available_runners():
    """Return list of available conformance runners."""
    runners = [FrontendRunner(), CliRunner()]
    return runners


@pytest.fixture(params=get_available_runners(), ids=lambda r: r.name)
def runner(request):
    """Provide conformance runner for testing.

    This fixture is parametrized to run tests against all available runners.
    Currently includes:
    - frontend: calls the pl0lib lexer and parser directly
    - cli: runs ``pl0lib ast`` and reads its output streams
    """
    return request.param
