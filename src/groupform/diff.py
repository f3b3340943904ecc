"""
Change computation between last-known state and declared configuration.

compute_diff() compares one resource's prior attributes with its desired
attributes under a resource schema and returns a ChangeSet. A Plan is the
ordered collection of change sets for a whole configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from groupform.models.enums import ChangeAction


@dataclass(frozen=True)
class AttributeSchema:
    """Schema of one resource attribute (all values are state strings)."""

    name: str
    required: bool = False
    default: Optional[str] = None
    force_new: bool = False
    computed: bool = False


@dataclass(frozen=True)
class AttributeChange:
    """A single attribute difference."""

    name: str
    old: Optional[str]
    new: Optional[str]
    forces_replacement: bool = False

    def __str__(self) -> str:
        suffix = " (forces new resource)" if self.forces_replacement else ""
        return f'{self.name}: "{self.old}" => "{self.new}"{suffix}'


@dataclass
class ChangeSet:
    """Planned change to one resource."""

    address: str
    action: ChangeAction
    changes: List[AttributeChange] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.action == ChangeAction.NO_OP

    def __str__(self) -> str:
        lines = [f"{self.action.value} {self.address}"]
        for change in self.changes:
            lines.append(f"    {change}")
        return "\n".join(lines)


@dataclass
class Plan:
    """Ordered change sets for a configuration."""

    change_sets: List[ChangeSet] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return all(cs.is_empty for cs in self.change_sets)

    def pending(self) -> List[ChangeSet]:
        """Change sets that would modify something."""
        return [cs for cs in self.change_sets if not cs.is_empty]

    def __str__(self) -> str:
        pending = self.pending()
        if not pending:
            return "No changes."
        return "\n".join(str(cs) for cs in pending)


def compute_diff(
    address: str,
    prior: Optional[Dict[str, str]],
    desired: Optional[Dict[str, str]],
    schema: Sequence[AttributeSchema],
) -> ChangeSet:
    """
    Compute the change set for one resource.

    Args:
        address: Resource address ("<type>.<name>")
        prior: Attributes from state, or None if the resource is not in state
        desired: Normalized attributes from configuration, or None if the
            resource is no longer declared
        schema: Attribute schema of the resource type

    Returns:
        ChangeSet describing the action and the attribute differences
    """
    if prior is None and desired is None:
        return ChangeSet(address=address, action=ChangeAction.NO_OP)

    if prior is None:
        changes = [
            AttributeChange(name=a.name, old=None, new=_value(desired, a))
            for a in schema
            if not a.computed and _value(desired, a) is not None
        ]
        return ChangeSet(address=address, action=ChangeAction.CREATE, changes=changes)

    if desired is None:
        changes = [
            AttributeChange(name=a.name, old=prior.get(a.name), new=None)
            for a in schema
            if prior.get(a.name) is not None
        ]
        return ChangeSet(address=address, action=ChangeAction.DELETE, changes=changes)

    changes = []
    for attribute in schema:
        if attribute.computed:
            continue
        old = _value(prior, attribute)
        new = _value(desired, attribute)
        if old != new:
            changes.append(AttributeChange(
                name=attribute.name,
                old=old,
                new=new,
                forces_replacement=attribute.force_new,
            ))

    if not changes:
        action = ChangeAction.NO_OP
    elif any(c.forces_replacement for c in changes):
        action = ChangeAction.REPLACE
    else:
        action = ChangeAction.UPDATE
    return ChangeSet(address=address, action=action, changes=changes)


def _value(attributes: Dict[str, str], attribute: AttributeSchema) -> Optional[str]:
    # Omitted optional attributes compare as their default
    value = attributes.get(attribute.name)
    return attribute.default if value is None else value
