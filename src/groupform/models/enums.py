"""
Enum definitions for groupform models.
"""

from enum import Enum


class WorkspaceEntitlement(str, Enum):
    """Workspace entitlements that can be assigned to a group."""
    ALLOW_CLUSTER_CREATE = "allow-cluster-create"
    ALLOW_INSTANCE_POOL_CREATE = "allow-instance-pool-create"
    WORKSPACE_ACCESS = "workspace-access"
    DATABRICKS_SQL_ACCESS = "databricks-sql-access"


class ChangeAction(str, Enum):
    """Action a plan would take on a single resource."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    REPLACE = "REPLACE"  # force-new attribute changed: delete, then create
    DELETE = "DELETE"
    NO_OP = "NO_OP"
