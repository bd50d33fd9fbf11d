"""Public exports for pdum.rolegen types."""

from __future__ import annotations

from .constants import MAX_ROLE_SIZE_BYTES, ROLE_NAME_PATTERN, SPEC_SUFFIX, STAGE_GA, TOOL_NAME
from .exceptions import (
    DependencyError,
    FetchError,
    GCloudError,
    OutputError,
    ParseError,
    PatternError,
    RoleGenError,
    RoleSizeError,
)
from .resolved_role import ResolvedRole
from .role_spec import RoleSpec

__all__ = [
    "MAX_ROLE_SIZE_BYTES",
    "ROLE_NAME_PATTERN",
    "SPEC_SUFFIX",
    "STAGE_GA",
    "TOOL_NAME",
    "DependencyError",
    "FetchError",
    "GCloudError",
    "OutputError",
    "ParseError",
    "PatternError",
    "ResolvedRole",
    "RoleGenError",
    "RoleSizeError",
    "RoleSpec",
]
