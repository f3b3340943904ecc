"""
Base classes for groupform models.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


def format_bool(value: bool) -> str:
    """Render a boolean the way it is stored in resource state."""
    return "true" if value else "false"


def parse_bool(value: str) -> bool:
    """Parse a state boolean ("true"/"false")."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"Expected 'true' or 'false', got '{value}'")


class BaseResourceModel(BaseModel):
    """
    Base model for all managed resources.

    Provides the standard Pydantic v2 configuration shared by resource models.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,  # Allow Databricks SDK types
        validate_assignment=False,
        validate_default=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
        extra="forbid",  # Unknown configuration arguments are errors
    )
