"""
Integration test fixtures for groupform.

Provides the live workspace client, a provider bound to it, and a safety-net
cleanup of groups the tests created.
"""

import logging
from dataclasses import dataclass, field
from typing import Generator, List

import pytest
from databricks.sdk import WorkspaceClient
from databricks.sdk.errors import NotFound, ResourceDoesNotExist

from groupform.provider import Provider
from groupform.testing.acctest import skip_unless_acceptance

logger = logging.getLogger(__name__)


@dataclass
class ResourceTracker:
    """Group display names to remove after a test if the harness left them behind."""

    groups: List[str] = field(default_factory=list)

    def add_group(self, name: str) -> None:
        """Track a group for cleanup."""
        if name not in self.groups:
            self.groups.append(name)


@pytest.fixture(scope="session")
def workspace_client() -> WorkspaceClient:
    """
    Session-scoped WorkspaceClient using SDK auto-configuration.

    Respects DATABRICKS_HOST, DATABRICKS_TOKEN, or CLI profile.
    """
    skip_unless_acceptance()
    client = WorkspaceClient()
    try:
        current_user = client.current_user.me()
        logger.info(f"Connected to Databricks as {current_user.user_name}")
    except Exception as e:
        pytest.skip(f"Could not connect to Databricks: {e}")
    return client


@pytest.fixture
def live_provider(workspace_client: WorkspaceClient) -> Provider:
    """Provider bound to the live workspace."""
    return Provider(workspace_client)


@pytest.fixture
def resource_tracker() -> ResourceTracker:
    return ResourceTracker()


@pytest.fixture(autouse=True)
def cleanup_groups(
    workspace_client: WorkspaceClient,
    resource_tracker: ResourceTracker,
) -> Generator[None, None, None]:
    """
    Delete tracked groups that still exist after each test.

    Failed cleanups are logged but don't fail the test.
    """
    yield

    for group_name in reversed(resource_tracker.groups):
        try:
            groups = list(workspace_client.groups.list(filter=f'displayName eq "{group_name}"'))
            if groups and groups[0].id:
                workspace_client.groups.delete(groups[0].id)
                logger.warning(f"Cleaned up leftover group: {group_name}")
        except (NotFound, ResourceDoesNotExist):
            pass
        except Exception as e:
            logger.warning(f"Failed to cleanup group {group_name}: {e}")
