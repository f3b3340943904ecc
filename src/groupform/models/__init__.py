"""
Resource models for groupform.

Module organization:
- enums: WorkspaceEntitlement, ChangeAction
- base: BaseResourceModel and state boolean helpers
- group: GroupResource (the databricks_group resource)
"""

from .base import BaseResourceModel, format_bool, parse_bool
from .enums import ChangeAction, WorkspaceEntitlement
from .group import ENTITLEMENT_FLAGS, GroupResource

__all__ = [
    "BaseResourceModel",
    "format_bool",
    "parse_bool",
    "ChangeAction",
    "WorkspaceEntitlement",
    "ENTITLEMENT_FLAGS",
    "GroupResource",
]
