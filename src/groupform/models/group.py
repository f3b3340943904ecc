"""
Group model for the databricks_group resource.

Wraps the Databricks SDK IAM Group type, mapping the boolean entitlement flags
declared in configuration onto SCIM entitlement values and back.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from databricks.sdk.service.iam import ComplexValue
from databricks.sdk.service.iam import Group as SdkGroup
from pydantic import Field, field_validator

from .base import BaseResourceModel, format_bool, parse_bool
from .enums import WorkspaceEntitlement

logger = logging.getLogger(__name__)

# Configuration argument -> SCIM entitlement value
ENTITLEMENT_FLAGS: Dict[str, WorkspaceEntitlement] = {
    "allow_cluster_create": WorkspaceEntitlement.ALLOW_CLUSTER_CREATE,
    "allow_instance_pool_create": WorkspaceEntitlement.ALLOW_INSTANCE_POOL_CREATE,
}


class GroupResource(BaseResourceModel):
    """
    Declared (or observed) state of a Databricks workspace group.

    Example:
        ```python
        group = GroupResource(display_name="data engineers", allow_cluster_create=True)
        sdk_group = group.to_sdk_group()
        ```
    """

    display_name: str = Field(..., min_length=1, description="Group display name")
    allow_cluster_create: bool = Field(default=False, description="Members may create clusters")
    allow_instance_pool_create: bool = Field(default=False, description="Members may create instance pools")

    # Internal: remote ID assigned by the workspace on creation
    _sdk_id: Optional[str] = None

    @field_validator("allow_cluster_create", "allow_instance_pool_create", mode="before")
    @classmethod
    def validate_flag(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            try:
                return parse_bool(v.strip().strip('"'))
            except ValueError:
                pass
        raise ValueError(f"Entitlement flag must be a boolean, got {v!r}")

    @property
    def id(self) -> Optional[str]:
        """Remote group ID, once created or read."""
        return self._sdk_id

    @property
    def entitlements(self) -> List[str]:
        """SCIM entitlement values implied by the flags."""
        return [ent.value for flag, ent in ENTITLEMENT_FLAGS.items() if getattr(self, flag)]

    def to_sdk_group(self) -> SdkGroup:
        """Convert to SDK Group for API calls."""
        return SdkGroup(
            id=self._sdk_id,
            display_name=self.display_name,
            entitlements=[ComplexValue(value=e) for e in self.entitlements],
        )

    @classmethod
    def from_sdk_group(cls, sdk_group: SdkGroup) -> "GroupResource":
        """
        Create from an SDK Group returned by the API.

        Entitlements other than the managed flags are ignored.
        """
        values = {e.value for e in (sdk_group.entitlements or []) if e.value}
        group = cls(
            display_name=sdk_group.display_name or "",
            **{flag: ent.value in values for flag, ent in ENTITLEMENT_FLAGS.items()},
        )
        group._sdk_id = sdk_group.id
        return group

    def to_attributes(self) -> Dict[str, str]:
        """Flatten into the string attribute map kept in resource state."""
        attributes = {
            "display_name": self.display_name,
            "allow_cluster_create": format_bool(self.allow_cluster_create),
            "allow_instance_pool_create": format_bool(self.allow_instance_pool_create),
        }
        if self._sdk_id:
            attributes["id"] = self._sdk_id
        return attributes

    @classmethod
    def from_attributes(cls, attributes: Dict[str, str]) -> "GroupResource":
        """Rebuild a group from a state attribute map."""
        values = dict(attributes)
        group_id = values.pop("id", None)
        group = cls(**values)
        group._sdk_id = group_id
        return group
