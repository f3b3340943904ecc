"""
Declarative configuration for groupform resources.

Renders databricks_group resource blocks from test inputs and parses
configuration text back into per-resource arguments.

Usage:
    from groupform.config import parse_config, render_group_config

    text = render_group_config("tf group test a1B2c", "true", "true")
    resources = parse_config(text)
    resources["databricks_group.my_group"].arguments
    # {'display_name': 'tf group test a1B2c', 'allow_cluster_create': True, ...}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import hcl2

logger = logging.getLogger(__name__)

GROUP_RESOURCE_TYPE = "databricks_group"


class ConfigError(ValueError):
    """Raised when configuration text cannot be parsed or validated."""


@dataclass
class ResourceConfig:
    """A single declared resource block."""

    type: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    @property
    def address(self) -> str:
        return f"{self.type}.{self.name}"


def render_group_config(
    display_name: str,
    allow_cluster_create: Optional[str] = None,
    allow_instance_pool_create: Optional[str] = None,
    resource_name: str = "my_group",
) -> str:
    """
    Render a databricks_group resource block.

    Entitlement flags are passed as "true"/"false" strings and written
    verbatim; nothing is validated here, so a malformed flag surfaces as a
    ConfigError when the text is parsed. A flag left as None is omitted.

    Args:
        display_name: Group display name
        allow_cluster_create: Optional cluster-create entitlement flag
        allow_instance_pool_create: Optional instance-pool-create entitlement flag
        resource_name: Local name of the resource block

    Returns:
        Configuration text
    """
    lines = [
        f'resource "{GROUP_RESOURCE_TYPE}" "{resource_name}" {{',
        f'  display_name = "{display_name}"',
    ]
    if allow_cluster_create is not None:
        lines.append(f"  allow_cluster_create = {allow_cluster_create}")
    if allow_instance_pool_create is not None:
        lines.append(f"  allow_instance_pool_create = {allow_instance_pool_create}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def _normalize_value(value: Any) -> Any:
    # Some python-hcl2 releases keep the surrounding quotes on string literals
    if isinstance(value, str) and len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def parse_config(text: str) -> Dict[str, ResourceConfig]:
    """
    Parse configuration text into declared resources keyed by address.

    Args:
        text: Configuration text (HCL)

    Returns:
        Mapping of "<type>.<name>" to ResourceConfig

    Raises:
        ConfigError: If the text is not valid HCL, or a resource is declared twice
    """
    try:
        document = hcl2.loads(text)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    resources: Dict[str, ResourceConfig] = {}
    for block in document.get("resource", []):
        for resource_type, named in block.items():
            resource_type = _normalize_value(resource_type)
            for name, body in named.items():
                name = _normalize_value(name)
                arguments = {
                    key: _normalize_value(value)
                    for key, value in body.items()
                    if not key.startswith("__")  # parser line markers
                }
                resource = ResourceConfig(type=resource_type, name=name, arguments=arguments)
                if resource.address in resources:
                    raise ConfigError(f"Duplicate resource {resource.address}")
                resources[resource.address] = resource

    logger.debug(f"Parsed {len(resources)} resource(s) from configuration")
    return resources
