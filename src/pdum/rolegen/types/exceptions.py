"""Custom exceptions for pdum.rolegen."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


class RoleGenError(Exception):
    """Base class for every error that aborts role generation.

    ``spec_path`` is filled in by the pipeline with the spec being processed.
    """

    spec_path: Optional[Path] = None


class ParseError(RoleGenError):
    """Raised when a spec file is malformed or misses required fields."""

    def __init__(self, source: Optional[Path | str], problems: Sequence[str]) -> None:
        self.source = source
        self.problems = tuple(problems)
        where = str(source) if source is not None else "<spec>"
        super().__init__(f"invalid role spec {where}: " + "; ".join(self.problems))


class PatternError(RoleGenError):
    """Raised when a permission regex does not compile."""

    def __init__(self, pattern: str, spec_name: Optional[str], cause: Exception) -> None:
        self.pattern = pattern
        self.spec_name = spec_name
        self.cause = cause
        super().__init__(f"invalid permission regex {pattern!r} in role {spec_name}: {cause}")


class FetchError(RoleGenError):
    """Raised when the permissions of a predefined role cannot be fetched."""

    def __init__(self, role_id: str, cause: object, spec_name: Optional[str] = None) -> None:
        self.role_id = role_id
        self.cause = cause
        self.spec_name = spec_name
        message = f"could not fetch permissions of {role_id}"
        if spec_name:
            message += f" (included by role {spec_name})"
        super().__init__(f"{message}: {cause}")


class DependencyError(RoleGenError):
    """Raised when a required external tool or credential is unavailable."""


class RoleSizeError(RoleGenError):
    """Raised when a resolved role exceeds the custom role size limit."""

    def __init__(self, role_name: str, size: int, limit: int) -> None:
        self.role_name = role_name
        self.size = size
        self.limit = limit
        super().__init__(
            f"role {role_name} is {size} bytes, over the {limit} byte limit for "
            "title, description and permission names"
        )


class OutputError(RoleGenError):
    """Raised when a generated role file cannot be written."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"cannot write {path}: {cause}")


class GCloudError(RoleGenError):
    """Exception raised for gcloud command errors."""


__all__ = [
    "DependencyError",
    "FetchError",
    "GCloudError",
    "OutputError",
    "ParseError",
    "PatternError",
    "RoleGenError",
    "RoleSizeError",
]
