"""
groupform - declarative Databricks workspace groups with lifecycle testing.

Declare groups in configuration, plan the changes against last-known state,
apply them through the Databricks SDK, and verify the whole create / plan /
import / destroy lifecycle against a live workspace.

Quick Start:
    from groupform import Provider, render_group_config
    from groupform.testing import TestCase, TestStep, run_test, check_resource_attr

    provider = Provider()
    run_test(TestCase(
        provider=provider,
        steps=[
            TestStep(
                config=render_group_config("data engineers", "true", "false"),
                check=check_resource_attr("databricks_group.my_group", "allow_cluster_create", "true"),
            ),
        ],
    ))
"""

__version__ = "0.1.0"

from groupform.config import GROUP_RESOURCE_TYPE, ConfigError, ResourceConfig, parse_config, render_group_config
from groupform.diff import AttributeChange, AttributeSchema, ChangeSet, Plan, compute_diff
from groupform.executors import ExecutionResult, GroupExecutor, OperationType
from groupform.models import ChangeAction, GroupResource, WorkspaceEntitlement
from groupform.provider import GroupResourceHandler, Provider, ResourceHandler
from groupform.state import ModuleState, ResourceState, State

__all__ = [
    "__version__",
    "GROUP_RESOURCE_TYPE",
    "ConfigError",
    "ResourceConfig",
    "parse_config",
    "render_group_config",
    "AttributeChange",
    "AttributeSchema",
    "ChangeSet",
    "Plan",
    "compute_diff",
    "ExecutionResult",
    "GroupExecutor",
    "OperationType",
    "ChangeAction",
    "GroupResource",
    "WorkspaceEntitlement",
    "GroupResourceHandler",
    "Provider",
    "ResourceHandler",
    "ModuleState",
    "ResourceState",
    "State",
]
