"""Sources for the permissions of predefined roles.

Every fetcher is a callable taking a role name (``"roles/viewer"``,
``"projects/my-project/roles/myRole"``, ...) and returning the list of
permissions the role grants. The resolver only depends on that call shape.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Optional, Protocol, Sequence

import yaml

from pdum.rolegen.gcloud import require_gcloud, run_gcloud
from pdum.rolegen.types import DependencyError, FetchError, GCloudError

if TYPE_CHECKING:
    from google.auth.credentials import Credentials


class PermissionFetcher(Protocol):
    """Returns the permissions included in a role."""

    def __call__(self, role_id: str) -> list[str]: ...


def _included_permissions(role_id: str, role: object) -> list[str]:
    if not isinstance(role, dict):
        raise FetchError(role_id, "unexpected role description")
    permissions = role.get("includedPermissions", [])
    if not isinstance(permissions, list):
        raise FetchError(role_id, "includedPermissions is not a list")
    return [str(p) for p in permissions]


class GcloudFetcher:
    """Fetch role permissions with ``gcloud iam roles describe``."""

    def __init__(self, configuration: Optional[str] = None) -> None:
        require_gcloud()
        self.configuration = configuration

    def __call__(self, role_id: str) -> list[str]:
        try:
            output = run_gcloud(
                ["iam", "roles", "describe", role_id, "--format=json"],
                configuration=self.configuration,
            )
        except GCloudError as e:
            raise FetchError(role_id, e) from e
        try:
            role = json.loads(output) if output else {}
        except json.JSONDecodeError as e:
            raise FetchError(role_id, f"unparseable gcloud output: {e}") from e
        return _included_permissions(role_id, role)


class ApiFetcher:
    """Fetch role permissions from the IAM v1 API.

    Uses Application Default Credentials unless ``credentials`` is given.
    """

    def __init__(self, credentials: Optional["Credentials"] = None) -> None:
        import google.auth
        from google.auth.exceptions import DefaultCredentialsError

        from pdum.rolegen._clients import iam_v1

        if credentials is None:
            try:
                credentials, _ = google.auth.default(
                    scopes=["https://www.googleapis.com/auth/cloud-platform"]
                )
            except DefaultCredentialsError as e:
                raise DependencyError(
                    "No Application Default Credentials found. "
                    "Run 'gcloud auth application-default login'."
                ) from e
        self._iam = iam_v1(credentials)

    def _request(self, role_id: str):
        if role_id.startswith("roles/"):
            return self._iam.roles().get(name=role_id)
        if role_id.startswith("projects/"):
            return self._iam.projects().roles().get(name=role_id)
        if role_id.startswith("organizations/"):
            return self._iam.organizations().roles().get(name=role_id)
        raise FetchError(role_id, "unsupported role name, expected roles/, projects/ or organizations/")

    def __call__(self, role_id: str) -> list[str]:
        from googleapiclient.errors import HttpError

        request = self._request(role_id)
        try:
            role = request.execute()
        except HttpError as e:
            raise FetchError(role_id, e) from e
        return _included_permissions(role_id, role)


class StaticFetcher:
    """Serve role permissions from an in-memory mapping.

    Example:
        >>> fetch = StaticFetcher({"roles/x": ["a.b.get", "a.b.create"]})
        >>> fetch("roles/x")
        ['a.b.get', 'a.b.create']
    """

    def __init__(self, roles: Mapping[str, Sequence[str]]) -> None:
        self.roles = {role_id: list(permissions) for role_id, permissions in roles.items()}

    @classmethod
    def from_file(cls, path: Path) -> "StaticFetcher":
        """Load a YAML mapping of role name to permission list.

        Raises:
            DependencyError: If the file cannot be read or has the wrong shape
        """
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise DependencyError(f"cannot load roles file {path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict) or not all(
            isinstance(v, list) and all(isinstance(p, str) for p in v) for v in data.values()
        ):
            raise DependencyError(f"roles file {path} must map role names to lists of permissions")
        return cls(data)

    def __call__(self, role_id: str) -> list[str]:
        try:
            return list(self.roles[role_id])
        except KeyError:
            raise FetchError(role_id, "role not found") from None
