"""
Lifecycle testing support: the step harness, remote checks and acceptance helpers.
"""

from .acctest import (
    ACCEPTANCE_ENV_VAR,
    CHARSET_ALPHA,
    CHARSET_ALPHANUM,
    acceptance_enabled,
    rand_string_from_charset,
    requires_acceptance,
    skip_unless_acceptance,
)
from .checks import GroupHolder, check_group_destroyed, check_group_exists, check_group_values
from .harness import (
    CheckFunc,
    LifecycleTestError,
    TestCase,
    TestStep,
    check_resource_attr,
    compose_checks,
    run_test,
)

__all__ = [
    "ACCEPTANCE_ENV_VAR",
    "CHARSET_ALPHA",
    "CHARSET_ALPHANUM",
    "acceptance_enabled",
    "rand_string_from_charset",
    "requires_acceptance",
    "skip_unless_acceptance",
    "GroupHolder",
    "check_group_destroyed",
    "check_group_exists",
    "check_group_values",
    "CheckFunc",
    "LifecycleTestError",
    "TestCase",
    "TestStep",
    "check_resource_attr",
    "compose_checks",
    "run_test",
]
