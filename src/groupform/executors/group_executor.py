"""
Executor for managing Databricks Groups.

Handles creating, reading, updating and deleting workspace groups through the
SCIM Groups API, keeping the group's managed entitlements in sync.
"""

import logging
from typing import Optional, Set

from databricks.sdk.errors import NotFound, ResourceDoesNotExist
from databricks.sdk.service.iam import Group as SdkGroup
from databricks.sdk.service.iam import Patch, PatchOp, PatchSchema

from groupform.models.group import ENTITLEMENT_FLAGS, GroupResource

from .base import BaseExecutor, ExecutionResult, OperationType

logger = logging.getLogger(__name__)

MANAGED_ENTITLEMENTS: Set[str] = {e.value for e in ENTITLEMENT_FLAGS.values()}


class GroupExecutor(BaseExecutor[GroupResource]):
    """
    Executor for managing Databricks groups.

    Example:
        ```python
        executor = GroupExecutor(workspace_client)

        group = GroupResource(display_name="data engineers", allow_cluster_create=True)
        result = executor.create(group)
        observed = executor.read(group.id)
        ```
    """

    def get_resource_type(self) -> str:
        return "Group"

    def exists(self, resource: GroupResource) -> bool:
        """Check if the group exists, by ID when known, else by display name."""
        if resource.id:
            try:
                self.execute_with_retry(self.client.groups.get, resource.id)
                return True
            except (NotFound, ResourceDoesNotExist):
                return False
        return self.find_by_name(resource.display_name) is not None

    def create(self, resource: GroupResource) -> ExecutionResult:
        """
        Create a group and record its remote ID on the model.

        Display names are unique per workspace; an existing group with the
        same name fails the create.
        """
        start_time = self._start_timer()
        resource_name = resource.display_name

        if self.dry_run:
            return ExecutionResult(
                success=True,
                operation=OperationType.NO_OP,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"[DRY RUN] Would create group {resource_name}",
                duration_seconds=self._elapsed(start_time),
            )

        sdk_group = resource.to_sdk_group()
        try:
            created = self.execute_with_retry(
                self.client.groups.create,
                display_name=sdk_group.display_name,
                entitlements=sdk_group.entitlements,
            )
            resource._sdk_id = created.id
            return self._record(ExecutionResult(
                success=True,
                operation=OperationType.CREATE,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"Created group {resource_name} (id: {created.id})",
                duration_seconds=self._elapsed(start_time),
                changes={"entitlements": resource.entitlements},
            ))
        except Exception as e:
            return self._handle_error(OperationType.CREATE, resource_name, e)

    def read(self, group_id: str) -> GroupResource:
        """
        Read a group by ID.

        Raises:
            NotFound: If the group does not exist
        """
        sdk_group = self.execute_with_retry(self.client.groups.get, group_id)
        return GroupResource.from_sdk_group(sdk_group)

    def update(self, resource: GroupResource) -> ExecutionResult:
        """
        Update a group in place.

        Renames the group if the display name differs and adds/removes the
        managed entitlements so they match the flags. Entitlements that are
        not managed by flags are left untouched.
        """
        start_time = self._start_timer()
        resource_name = resource.display_name

        if not resource.id:
            raise ValueError(f"Group {resource_name} has no ID")

        if self.dry_run:
            return ExecutionResult(
                success=True,
                operation=OperationType.NO_OP,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"[DRY RUN] Would update group {resource_name}",
                duration_seconds=self._elapsed(start_time),
            )

        try:
            existing: SdkGroup = self.execute_with_retry(self.client.groups.get, resource.id)

            desired: Set[str] = set(resource.entitlements)
            current: Set[str] = {
                e.value for e in (existing.entitlements or []) if e.value in MANAGED_ENTITLEMENTS
            }
            to_add = desired - current
            to_remove = current - desired

            operations = []
            if existing.display_name != resource.display_name:
                operations.append(Patch(op=PatchOp.REPLACE, path="displayName", value=resource.display_name))
            if to_add:
                operations.append(
                    Patch(op=PatchOp.ADD, path="entitlements", value=[{"value": e} for e in sorted(to_add)])
                )
            for e in sorted(to_remove):
                operations.append(Patch(op=PatchOp.REMOVE, path=f'entitlements[value eq "{e}"]'))

            if not operations:
                return self._record(ExecutionResult(
                    success=True,
                    operation=OperationType.SKIPPED,
                    resource_type=self.get_resource_type(),
                    resource_name=resource_name,
                    message="Group already in sync",
                    duration_seconds=self._elapsed(start_time),
                ))

            self.execute_with_retry(
                self.client.groups.patch,
                id=resource.id,
                operations=operations,
                schemas=[PatchSchema.URN_IETF_PARAMS_SCIM_API_MESSAGES_2_0_PATCH_OP],
            )
            return self._record(ExecutionResult(
                success=True,
                operation=OperationType.UPDATE,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"Added {len(to_add)}, removed {len(to_remove)} entitlements",
                duration_seconds=self._elapsed(start_time),
                changes={"added": sorted(to_add), "removed": sorted(to_remove)},
            ))
        except Exception as e:
            return self._handle_error(OperationType.UPDATE, resource_name, e)

    def delete(self, resource: GroupResource) -> ExecutionResult:
        """Delete a group. Deleting a group that is already gone is a no-op."""
        start_time = self._start_timer()
        resource_name = resource.display_name

        if self.dry_run:
            return ExecutionResult(
                success=True,
                operation=OperationType.NO_OP,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"[DRY RUN] Would delete group {resource_name}",
                duration_seconds=self._elapsed(start_time),
            )

        group_id = resource.id
        if not group_id:
            existing = self.find_by_name(resource_name)
            group_id = existing.id if existing else None
        if not group_id:
            return self._record(ExecutionResult(
                success=True,
                operation=OperationType.SKIPPED,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"Group {resource_name} does not exist",
                duration_seconds=self._elapsed(start_time),
            ))

        try:
            self.execute_with_retry(self.client.groups.delete, group_id)
            return self._record(ExecutionResult(
                success=True,
                operation=OperationType.DELETE,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"Deleted group {resource_name}",
                duration_seconds=self._elapsed(start_time),
            ))
        except (NotFound, ResourceDoesNotExist):
            return self._record(ExecutionResult(
                success=True,
                operation=OperationType.SKIPPED,
                resource_type=self.get_resource_type(),
                resource_name=resource_name,
                message=f"Group {resource_name} does not exist",
                duration_seconds=self._elapsed(start_time),
            ))
        except Exception as e:
            return self._handle_error(OperationType.DELETE, resource_name, e)

    def find_by_name(self, name: str) -> Optional[SdkGroup]:
        """Find group by display name."""
        try:
            groups = list(self.client.groups.list(filter=f'displayName eq "{name}"'))
            return groups[0] if groups else None
        except (NotFound, ResourceDoesNotExist):
            return None
