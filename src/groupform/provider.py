"""
Provider: maps declared resources onto workspace API calls.

Each resource type is served by a ResourceHandler that knows its attribute
schema and how to create, read, update, delete and import it. The Provider
owns the configured WorkspaceClient and the handler registry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from databricks.sdk import WorkspaceClient
from databricks.sdk.errors import NotFound, ResourceDoesNotExist
from pydantic import ValidationError

from groupform.config import GROUP_RESOURCE_TYPE, ConfigError
from groupform.diff import AttributeSchema
from groupform.executors import GroupExecutor
from groupform.models.group import GroupResource
from groupform.state import ResourceState

logger = logging.getLogger(__name__)


class ResourceHandler(ABC):
    """CRUD and schema for one resource type."""

    type_name: str = ""
    schema: Tuple[AttributeSchema, ...] = ()

    def __init__(self, client: WorkspaceClient):
        self.client = client

    @abstractmethod
    def normalize(self, arguments: Dict[str, Any]) -> Dict[str, str]:
        """
        Validate configuration arguments into a state attribute map.

        Raises:
            ConfigError: If the arguments do not match the schema
        """
        pass

    @abstractmethod
    def create(self, name: str, attributes: Dict[str, str]) -> ResourceState:
        pass

    @abstractmethod
    def read(self, resource: ResourceState) -> Optional[ResourceState]:
        """Refresh a resource from the API; None if it no longer exists."""
        pass

    @abstractmethod
    def update(self, resource: ResourceState, attributes: Dict[str, str]) -> ResourceState:
        pass

    @abstractmethod
    def delete(self, resource: ResourceState) -> None:
        pass

    def import_state(self, name: str, resource_id: str) -> ResourceState:
        """
        Bind an existing remote resource to a local name by ID.

        Raises:
            NotFound: If no resource with that ID exists
        """
        imported = self.read(ResourceState(type=self.type_name, name=name, primary_id=resource_id))
        if imported is None:
            raise NotFound(f"Cannot import non-existent remote object {self.type_name} {resource_id}")
        return imported


class GroupResourceHandler(ResourceHandler):
    """
    The databricks_group resource.

    Changing display_name forces a new group; entitlement flags are updated
    in place.
    """

    type_name = GROUP_RESOURCE_TYPE
    schema = (
        AttributeSchema(name="display_name", required=True, force_new=True),
        AttributeSchema(name="allow_cluster_create", default="false"),
        AttributeSchema(name="allow_instance_pool_create", default="false"),
        AttributeSchema(name="id", computed=True),
    )

    def __init__(self, client: WorkspaceClient):
        super().__init__(client)
        self.executor = GroupExecutor(client)

    def normalize(self, arguments: Dict[str, Any]) -> Dict[str, str]:
        try:
            return GroupResource(**arguments).to_attributes()
        except ValidationError as e:
            raise ConfigError(f"Invalid {self.type_name} configuration: {e}") from e

    def create(self, name: str, attributes: Dict[str, str]) -> ResourceState:
        group = GroupResource.from_attributes(attributes)
        self.executor.create(group)
        return self._to_state(name, group)

    def read(self, resource: ResourceState) -> Optional[ResourceState]:
        try:
            group = self.executor.read(resource.primary_id)
        except (NotFound, ResourceDoesNotExist):
            logger.info(f"{resource.address} ({resource.primary_id}) no longer exists")
            return None
        return self._to_state(resource.name, group)

    def update(self, resource: ResourceState, attributes: Dict[str, str]) -> ResourceState:
        group = GroupResource.from_attributes({**attributes, "id": resource.primary_id})
        self.executor.update(group)
        return self._to_state(resource.name, group)

    def delete(self, resource: ResourceState) -> None:
        group = GroupResource.from_attributes(resource.attributes)
        group._sdk_id = resource.primary_id
        self.executor.delete(group)

    def _to_state(self, name: str, group: GroupResource) -> ResourceState:
        if not group.id:
            raise ValueError(f"Group {group.display_name} has no ID")
        return ResourceState(
            type=self.type_name,
            name=name,
            primary_id=group.id,
            attributes=group.to_attributes(),
        )


class Provider:
    """
    Configured provider instance.

    Example:
        ```python
        provider = Provider()  # SDK auto-configuration
        handler = provider.handler("databricks_group")
        ```
    """

    handler_types = {
        GROUP_RESOURCE_TYPE: GroupResourceHandler,
    }

    def __init__(self, client: Optional[WorkspaceClient] = None):
        self._client = client
        self._handlers: Dict[str, ResourceHandler] = {}

    def configure(self) -> WorkspaceClient:
        """
        Build the WorkspaceClient if none was given.

        Respects DATABRICKS_HOST, DATABRICKS_TOKEN, or CLI profile.
        """
        if self._client is None:
            self._client = WorkspaceClient()
            logger.info(f"Configured workspace client for {self._client.config.host}")
        return self._client

    def meta(self) -> WorkspaceClient:
        """The configured client, for direct API verification."""
        return self.configure()

    def handler(self, resource_type: str) -> ResourceHandler:
        """
        Get the handler for a resource type.

        Raises:
            ConfigError: If the provider does not support the type
        """
        if resource_type not in self._handlers:
            handler_cls = self.handler_types.get(resource_type)
            if handler_cls is None:
                raise ConfigError(f"Unsupported resource type '{resource_type}'")
            self._handlers[resource_type] = handler_cls(self.configure())
        return self._handlers[resource_type]
