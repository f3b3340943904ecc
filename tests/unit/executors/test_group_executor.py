"""
Unit tests for GroupExecutor against an in-memory workspace.
"""

import pytest
from databricks.sdk.errors import NotFound, PermissionDenied, ResourceConflict, TemporarilyUnavailable
from databricks.sdk.service.iam import ComplexValue

from groupform.executors import GroupExecutor
from groupform.executors.base import OperationType
from tests.fixtures import FakeWorkspaceClient, make_group


@pytest.fixture
def executor(fake_client: FakeWorkspaceClient) -> GroupExecutor:
    return GroupExecutor(fake_client)  # type: ignore[arg-type]


class TestGroupExecutorCreate:
    """Tests for group creation."""

    def test_create_group(self, executor: GroupExecutor, fake_client: FakeWorkspaceClient) -> None:
        """Create records the remote ID on the model."""
        group = make_group("grp_create", allow_cluster_create=True)

        result = executor.create(group)

        assert result.success is True
        assert result.operation == OperationType.CREATE
        assert group.id in fake_client.groups.groups
        stored = fake_client.groups.groups[group.id]
        assert [e.value for e in stored.entitlements] == ["allow-cluster-create"]

    def test_create_duplicate_name_fails(self, executor: GroupExecutor) -> None:
        """An existing group with the same display name is an error."""
        executor.create(make_group("grp_dup"))

        with pytest.raises(ResourceConflict):
            executor.create(make_group("grp_dup"))
        assert executor.results[-1].success is False
        assert "already exists" in executor.results[-1].message

    def test_create_continue_on_error(self, fake_client: FakeWorkspaceClient) -> None:
        """With continue_on_error the failure is returned, not raised."""
        executor = GroupExecutor(fake_client, continue_on_error=True)  # type: ignore[arg-type]
        executor.create(make_group("grp_dup"))

        result = executor.create(make_group("grp_dup"))

        assert result.success is False
        assert isinstance(result.error, ResourceConflict)
        assert "Failed: 1" in executor.get_summary()

    def test_dry_run_create(self, fake_client: FakeWorkspaceClient) -> None:
        """Dry run create doesn't actually create the group."""
        executor = GroupExecutor(fake_client, dry_run=True)  # type: ignore[arg-type]

        result = executor.create(make_group("grp_dry_run"))

        assert result.success is True
        assert "dry run" in result.message.lower()
        assert fake_client.groups.groups == {}


class TestGroupExecutorRead:
    """Tests for reading groups by ID."""

    def test_read(self, executor: GroupExecutor) -> None:
        group = make_group("grp_read", allow_instance_pool_create=True)
        executor.create(group)

        observed = executor.read(group.id)

        assert observed.display_name == "grp_read"
        assert observed.allow_instance_pool_create is True
        assert observed.id == group.id

    def test_read_missing(self, executor: GroupExecutor) -> None:
        with pytest.raises(NotFound):
            executor.read("does-not-exist")

    def test_exists(self, executor: GroupExecutor) -> None:
        group = make_group("grp_exists")
        assert executor.exists(group) is False
        executor.create(group)
        assert executor.exists(group) is True
        assert executor.exists(make_group("grp_exists")) is True  # by name
        assert executor.exists(make_group("grp_exists", group_id="nope")) is False


class TestGroupExecutorUpdate:
    """Tests for in-place updates."""

    def test_update_syncs_entitlements(self, executor: GroupExecutor, fake_client: FakeWorkspaceClient) -> None:
        """Only the differences are added and removed."""
        group = make_group("grp_update", allow_cluster_create=True)
        executor.create(group)

        desired = make_group("grp_update", allow_instance_pool_create=True, group_id=group.id)
        result = executor.update(desired)

        assert result.operation == OperationType.UPDATE
        assert result.changes == {"added": ["allow-instance-pool-create"], "removed": ["allow-cluster-create"]}
        stored = fake_client.groups.groups[group.id]
        assert [e.value for e in stored.entitlements] == ["allow-instance-pool-create"]

    def test_update_keeps_unmanaged_entitlements(
        self, executor: GroupExecutor, fake_client: FakeWorkspaceClient
    ) -> None:
        """Entitlements not managed by flags are left alone."""
        group = make_group("grp_unmanaged")
        executor.create(group)
        fake_client.groups.groups[group.id].entitlements = [ComplexValue(value="workspace-access")]

        result = executor.update(make_group("grp_unmanaged", group_id=group.id))

        assert result.operation == OperationType.SKIPPED
        assert [e.value for e in fake_client.groups.groups[group.id].entitlements] == ["workspace-access"]

    def test_update_renames(self, executor: GroupExecutor, fake_client: FakeWorkspaceClient) -> None:
        group = make_group("grp_old")
        executor.create(group)

        executor.update(make_group("grp_new", group_id=group.id))

        assert fake_client.groups.groups[group.id].display_name == "grp_new"

    def test_update_without_id(self, executor: GroupExecutor) -> None:
        with pytest.raises(ValueError, match="has no ID"):
            executor.update(make_group("grp_no_id"))


class TestGroupExecutorDelete:
    """Tests for group deletion."""

    def test_delete_group(self, executor: GroupExecutor, fake_client: FakeWorkspaceClient) -> None:
        group = make_group("grp_delete")
        executor.create(group)

        result = executor.delete(group)

        assert result.success is True
        assert result.operation == OperationType.DELETE
        assert fake_client.groups.groups == {}

    def test_delete_by_name(self, executor: GroupExecutor, fake_client: FakeWorkspaceClient) -> None:
        """Without an ID the group is looked up by display name."""
        executor.create(make_group("grp_by_name"))

        result = executor.delete(make_group("grp_by_name"))

        assert result.operation == OperationType.DELETE
        assert fake_client.groups.groups == {}

    def test_delete_nonexistent(self, executor: GroupExecutor) -> None:
        """Deleting a non-existent group returns SKIPPED."""
        result = executor.delete(make_group("grp_nonexistent", group_id="missing"))

        assert result.success is True
        assert result.operation == OperationType.SKIPPED


class TestRetry:
    """Tests for transient failure handling."""

    def test_transient_error_retried(self, executor: GroupExecutor, fake_client, no_sleep) -> None:
        group = make_group("grp_retry")
        executor.create(group)
        fake_client.groups.get_failures = [TemporarilyUnavailable("try later"), None]

        assert executor.read(group.id).display_name == "grp_retry"
        assert fake_client.groups.calls.count("get") == 2

    def test_transient_error_exhausted(self, executor: GroupExecutor, fake_client, no_sleep) -> None:
        fake_client.groups.get_failures = [TemporarilyUnavailable("try later")] * 3

        with pytest.raises(TemporarilyUnavailable):
            executor.read("1")
        assert fake_client.groups.calls.count("get") == 3

    def test_permanent_error_not_retried(self, executor: GroupExecutor, fake_client, no_sleep) -> None:
        fake_client.groups.get_failures = [PermissionDenied("not an admin")]

        with pytest.raises(PermissionDenied):
            executor.read("1")
        assert fake_client.groups.calls.count("get") == 1

    def test_zero_retries_still_calls_once(self, fake_client: FakeWorkspaceClient) -> None:
        """A retry budget below one is raised to a single attempt."""
        executor = GroupExecutor(fake_client, max_retries=0)  # type: ignore[arg-type]
        group = make_group("grp_once")
        executor.create(group)

        assert executor.max_retries == 1
        assert executor.read(group.id).display_name == "grp_once"
        assert fake_client.groups.calls.count("get") == 1
