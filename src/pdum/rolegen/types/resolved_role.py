"""Resolved custom role dataclass."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import STAGE_GA


@dataclass(frozen=True)
class ResolvedRole:
    """A custom role with its final permission list.

    Attributes
    ----------
    name : str
        Custom role ID.
    title : str
        Human-readable title for the role.
    description : str
        Short description of what the role grants.
    included_permissions : tuple of str
        Deduplicated permissions in ascending lexicographic order.
    stage : str
        Launch stage, always ``"GA"``.
    """

    name: str
    title: str
    description: str
    included_permissions: tuple[str, ...] = ()
    stage: str = STAGE_GA

    @property
    def size_bytes(self) -> int:
        """Bytes counted against the custom role size limit."""
        parts = (self.title, self.description, *self.included_permissions)
        return sum(len(part.encode("utf-8")) for part in parts)

    def to_dict(self) -> dict:
        """Return the role in the shape ``gcloud iam roles describe`` emits."""
        return {
            "description": self.description,
            "includedPermissions": list(self.included_permissions),
            "name": self.name,
            "stage": self.stage,
            "title": self.title,
        }


__all__ = ["ResolvedRole"]
