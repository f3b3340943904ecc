"""
Shared pytest fixtures for groupform tests.

Provides the fake workspace, a provider wired to it, and test resource naming.
"""

from typing import Generator

import pytest

from groupform.provider import Provider
from groupform.testing.acctest import ACCEPTANCE_ENV_VAR, rand_string_from_charset
from tests.fixtures import FakeWorkspaceClient


@pytest.fixture
def random_suffix() -> str:
    """Five alphanumeric characters, unique per test."""
    return rand_string_from_charset(5)


@pytest.fixture
def fake_client() -> FakeWorkspaceClient:
    """Fresh in-memory workspace for each test."""
    return FakeWorkspaceClient()


@pytest.fixture
def provider(fake_client: FakeWorkspaceClient) -> Provider:
    """Provider backed by the fake workspace."""
    return Provider(fake_client)  # type: ignore[arg-type]


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    """Skip retry backoff waits."""
    monkeypatch.setattr("groupform.executors.base.time.sleep", lambda _: None)


@pytest.fixture
def acceptance_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Set the acceptance gate variable for the test duration."""
    monkeypatch.setenv(ACCEPTANCE_ENV_VAR, "test")
    yield


@pytest.fixture
def no_acceptance_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove the acceptance gate variable for the test duration."""
    monkeypatch.delenv(ACCEPTANCE_ENV_VAR, raising=False)
    yield
