"""Resolve a role spec into its final permission list.

The resolver merges the spec's literal permissions with the permissions of
every predefined role it includes, deduplicates them, keeps the ones that pass
the include regexes and fail the exclude regexes, and sorts the result.

Fetching the permissions of a predefined role is delegated to a callable so the
resolver never touches gcloud or the network itself.
"""

from __future__ import annotations

import re
from typing import Callable, Optional, Sequence

from pdum.rolegen.types import (
    MAX_ROLE_SIZE_BYTES,
    FetchError,
    PatternError,
    ResolvedRole,
    RoleGenError,
    RoleSizeError,
    RoleSpec,
)

FetchRolePermissions = Callable[[str], Sequence[str]]
Predicate = Callable[[str], bool]


def compile_predicate(
    patterns: Sequence[str],
    *,
    default: bool,
    spec_name: Optional[str] = None,
) -> Predicate:
    """Build a predicate that is true when a permission matches any pattern.

    Patterns are searched, not anchored: a match anywhere in the permission
    counts.

    Args:
        patterns: Regular expressions to OR together
        default: Constant result when ``patterns`` is empty
        spec_name: Role name used in error messages

    Returns:
        A callable taking a permission and returning a bool

    Raises:
        PatternError: If any pattern fails to compile
    """
    if not patterns:
        return lambda permission: default

    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise PatternError(pattern, spec_name, e) from e

    # Matched one by one so inline flags and group numbers stay local to each pattern.
    return lambda permission: any(rx.search(permission) for rx in compiled)


def collect_candidates(spec: RoleSpec, fetch_role_permissions: FetchRolePermissions) -> set[str]:
    """Gather the unique permissions named directly or through included roles.

    Raises:
        FetchError: If fetching any included role fails
    """
    candidates = set(spec.include_permissions)
    for role_id in spec.include_roles:
        try:
            permissions = fetch_role_permissions(role_id)
        except RoleGenError:
            raise
        except Exception as e:
            raise FetchError(role_id, e, spec_name=spec.name) from e
        candidates.update(permissions)
    return candidates


def resolve(spec: RoleSpec, fetch_role_permissions: FetchRolePermissions) -> ResolvedRole:
    """Compute the custom role described by ``spec``.

    Args:
        spec: The parsed role spec
        fetch_role_permissions: Returns the permissions of a predefined role

    Returns:
        The role with its sorted, deduplicated, filtered permissions

    Raises:
        PatternError: If an include or exclude regex is invalid
        FetchError: If an included role cannot be fetched

    Example:
        >>> spec = RoleSpec(name="x.y", title="X", description="Y",
        ...                 include_permissions=("a.b.list", "a.b.get"),
        ...                 exclude_regexes=("get$",))
        >>> resolve(spec, lambda role_id: []).included_permissions
        ('a.b.list',)
    """
    # Compile first so a bad pattern fails before any fetch happens.
    included = compile_predicate(spec.include_regexes, default=True, spec_name=spec.name)
    excluded = compile_predicate(spec.exclude_regexes, default=False, spec_name=spec.name)

    candidates = collect_candidates(spec, fetch_role_permissions)
    permissions = sorted(p for p in candidates if included(p) and not excluded(p))

    return ResolvedRole(
        name=spec.name,
        title=spec.title,
        description=spec.description,
        included_permissions=tuple(permissions),
    )


def check_role_size(role: ResolvedRole, limit: int = MAX_ROLE_SIZE_BYTES) -> None:
    """Raise RoleSizeError if ``role`` is too large to create as a custom role."""
    size = role.size_bytes
    if size > limit:
        raise RoleSizeError(role.name, size, limit)
