"""Shared constants for pdum.rolegen types."""

from __future__ import annotations

import re

TOOL_NAME = "pdum_rolegen"

STAGE_GA = "GA"

# "The total size of the title, description, and permission names for a
# custom role is limited to 64 KB."
MAX_ROLE_SIZE_BYTES = 64 * 1024

# Custom role IDs: letters, digits, underscores and periods, 3 to 64 characters.
ROLE_NAME_PATTERN: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_.]{3,64}$")

SPEC_SUFFIX = ".yaml"

__all__ = [
    "MAX_ROLE_SIZE_BYTES",
    "ROLE_NAME_PATTERN",
    "SPEC_SUFFIX",
    "STAGE_GA",
    "TOOL_NAME",
]
