"""Live tests against the real gcloud CLI.

These tests need an authenticated gcloud installation. They are skipped in CI
by default but can be run locally:

    PDUM_ROLEGEN_MANUAL_TESTS=1 uv run pytest tests/test_gcloud_live.py -v
"""

import os

import pytest

from pdum.rolegen import GcloudFetcher, RoleSpec, resolve

# Skip these tests in CI unless PDUM_ROLEGEN_MANUAL_TESTS environment variable is set
manual_test = pytest.mark.skipif(
    not os.getenv("PDUM_ROLEGEN_MANUAL_TESTS"),
    reason="Manual test - requires gcloud credentials. Set PDUM_ROLEGEN_MANUAL_TESTS=1 to run.",
)


@manual_test
def test_fetch_predefined_role():
    """Test fetching the permissions of a predefined role."""
    permissions = GcloudFetcher()("roles/storage.objectViewer")
    assert "storage.objects.get" in permissions
    print(f"\n✓ roles/storage.objectViewer has {len(permissions)} permissions")


@manual_test
def test_resolve_against_gcloud():
    """Test resolving a spec that filters a predefined role."""
    spec = RoleSpec(
        name="storage.objectLister",
        title="Storage Object Lister",
        description="List objects",
        include_roles=("roles/storage.objectViewer",),
        include_regexes=("^storage\\.objects\\.",),
        exclude_regexes=("get$",),
    )
    role = resolve(spec, GcloudFetcher())
    assert "storage.objects.list" in role.included_permissions
    assert "storage.objects.get" not in role.included_permissions
    print(f"\n✓ resolved {len(role.included_permissions)} permissions")
