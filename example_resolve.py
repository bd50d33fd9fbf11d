#!/usr/bin/env python3
"""Example script demonstrating permission resolution without gcloud.

This script resolves the spec under ``specs/`` against canned role data and
prints the role file that ``pdum_rolegen generate`` would write.

Usage:
    python example_resolve.py
"""

from pathlib import Path

from pdum.rolegen import StaticFetcher, load_spec, render_role, resolve

ROLES = {
    "roles/storage.objectViewer": [
        "resourcemanager.projects.get",
        "resourcemanager.projects.list",
        "storage.managedFolders.get",
        "storage.managedFolders.list",
        "storage.objects.get",
        "storage.objects.list",
    ],
}


def main():
    """Resolve the example spec and print the generated role."""
    spec_path = Path(__file__).parent / "specs" / "storage.objectLister.yaml"
    spec = load_spec(spec_path)

    role = resolve(spec, StaticFetcher(ROLES))

    print(f"{role.name}: {len(role.included_permissions)} permission(s), {role.size_bytes} bytes\n")
    print(render_role(role, spec.text, spec_path))


if __name__ == "__main__":
    main()
