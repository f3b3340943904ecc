"""
In-memory resource state tracked by the lifecycle harness.
"""

from __future__ import annotations

import copy
import json
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


@dataclass
class ResourceState:
    """Last-known state of one resource."""

    type: str
    name: str
    primary_id: str
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def address(self) -> str:
        return f"{self.type}.{self.name}"


@dataclass
class ModuleState:
    """Resources of the root module, keyed by address."""

    resources: Dict[str, ResourceState] = field(default_factory=dict)

    def of_type(self, resource_type: str) -> List[ResourceState]:
        """All resources of the given type."""
        return [rs for rs in self.resources.values() if rs.type == resource_type]


class State:
    """
    Harness state: a single root module of resources.

    State is never persisted by the harness; to_json()/from_json() exist so
    a failed run can dump what it created for manual cleanup.
    """

    def __init__(self, root: Optional[ModuleState] = None):
        self._root = root or ModuleState()

    def root_module(self) -> ModuleState:
        return self._root

    def get(self, address: str) -> Optional[ResourceState]:
        return self._root.resources.get(address)

    def set(self, resource: ResourceState) -> None:
        self._root.resources[resource.address] = resource

    def remove(self, address: str) -> None:
        self._root.resources.pop(address, None)

    def is_empty(self) -> bool:
        return not self._root.resources

    def copy(self) -> "State":
        """Independent snapshot of this state."""
        return State(copy.deepcopy(self._root))

    def to_json(self) -> str:
        return json.dumps(
            {"resources": [asdict(rs) for rs in self._root.resources.values()]},
            indent=2,
        )

    @classmethod
    def from_json(cls, text: str) -> "State":
        data = json.loads(text)
        state = cls()
        for item in data.get("resources", []):
            state.set(ResourceState(**item))
        return state

    def __str__(self) -> str:
        if self.is_empty():
            return "<empty state>"
        lines = []
        for address, rs in sorted(self._root.resources.items()):
            lines.append(f"{address}: (id={rs.primary_id})")
            for key in sorted(rs.attributes):
                lines.append(f"  {key} = {rs.attributes[key]}")
        return "\n".join(lines)
