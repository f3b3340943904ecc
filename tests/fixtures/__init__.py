"""Test fixtures for groupform."""

from .fake_workspace import FakeGroupsAPI, FakeWorkspaceClient
from .model_factories import make_group, make_group_state, make_sdk_group

__all__ = [
    "FakeGroupsAPI",
    "FakeWorkspaceClient",
    "make_group",
    "make_group_state",
    "make_sdk_group",
]
