"""Unit tests for the permission fetchers.

gcloud and the IAM API are replaced with fakes; nothing hits the network.
"""

import json
import subprocess
from types import SimpleNamespace

import pytest
from googleapiclient.errors import HttpError

from pdum.rolegen import ApiFetcher, DependencyError, FetchError, GcloudFetcher, StaticFetcher
from pdum.rolegen import _clients, gcloud


@pytest.fixture
def fake_gcloud(monkeypatch):
    """Pretend gcloud is installed and record the commands it runs."""
    calls = []
    responses = {}

    def fake_run(cmd, check, capture_output, text):
        calls.append(cmd)
        role_id = cmd[4]
        if role_id not in responses:
            raise subprocess.CalledProcessError(1, cmd, output="", stderr=f"NOT_FOUND: {role_id}")
        return subprocess.CompletedProcess(cmd, 0, stdout=responses[role_id], stderr="")

    monkeypatch.setattr(gcloud.shutil, "which", lambda name: "/usr/bin/gcloud")
    monkeypatch.setattr(gcloud.subprocess, "run", fake_run)
    return SimpleNamespace(calls=calls, responses=responses)


def test_gcloud_fetcher_parses_included_permissions(fake_gcloud):
    fake_gcloud.responses["roles/x"] = json.dumps(
        {"name": "roles/x", "includedPermissions": ["a.b.get", "a.b.create"], "stage": "GA"}
    )
    fetch = GcloudFetcher()
    assert fetch("roles/x") == ["a.b.get", "a.b.create"]
    assert fake_gcloud.calls == [["gcloud", "iam", "roles", "describe", "roles/x", "--format=json"]]


def test_gcloud_fetcher_passes_configuration(fake_gcloud):
    fake_gcloud.responses["roles/x"] = json.dumps({"includedPermissions": []})
    GcloudFetcher(configuration="work")("roles/x")
    assert fake_gcloud.calls[0][-1] == "--configuration=work"


def test_gcloud_fetcher_role_without_permissions(fake_gcloud):
    fake_gcloud.responses["roles/empty"] = json.dumps({"name": "roles/empty"})
    assert GcloudFetcher()("roles/empty") == []


def test_gcloud_fetcher_command_failure(fake_gcloud):
    with pytest.raises(FetchError) as exc_info:
        GcloudFetcher()("roles/missing")
    assert exc_info.value.role_id == "roles/missing"
    assert "NOT_FOUND" in str(exc_info.value)


def test_gcloud_fetcher_bad_output(fake_gcloud):
    fake_gcloud.responses["roles/x"] = "not json"
    with pytest.raises(FetchError):
        GcloudFetcher()("roles/x")


def test_gcloud_missing_is_dependency_error(monkeypatch):
    monkeypatch.setattr(gcloud.shutil, "which", lambda name: None)
    with pytest.raises(DependencyError):
        GcloudFetcher()


def test_verbose_echoes_commands(fake_gcloud, capsys):
    fake_gcloud.responses["roles/x"] = json.dumps({"includedPermissions": []})
    gcloud.set_verbose(True)
    try:
        GcloudFetcher()("roles/x")
    finally:
        gcloud.set_verbose(False)
    assert "iam roles describe" in capsys.readouterr().out


class FakeRequest:
    def __init__(self, result):
        self.result = result

    def execute(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class FakeRoles:
    def __init__(self, roles, collection):
        self.roles = roles
        self.collection = collection

    def get(self, name):
        self.collection.append(name)
        if name in self.roles:
            return FakeRequest(self.roles[name])
        resp = SimpleNamespace(status=404, reason="Not Found")
        return FakeRequest(HttpError(resp, b'{"error": {"message": "Role not found"}}'))


class FakeIam:
    def __init__(self, roles):
        self.requested = []
        self._roles = FakeRoles(roles, self.requested)

    def roles(self):
        return self._roles

    def projects(self):
        return SimpleNamespace(roles=lambda: self._roles)

    def organizations(self):
        return SimpleNamespace(roles=lambda: self._roles)


@pytest.fixture
def fake_iam(monkeypatch):
    iam = FakeIam(
        {
            "roles/x": {"name": "roles/x", "includedPermissions": ["a.b.get"]},
            "projects/p/roles/custom": {"name": "projects/p/roles/custom", "includedPermissions": ["c.d.list"]},
            "organizations/1/roles/org": {"name": "organizations/1/roles/org"},
        }
    )
    monkeypatch.setattr(_clients, "iam_v1", lambda credentials: iam)
    return iam


def test_api_fetcher_predefined_and_custom_roles(fake_iam):
    fetch = ApiFetcher(credentials=object())
    assert fetch("roles/x") == ["a.b.get"]
    assert fetch("projects/p/roles/custom") == ["c.d.list"]
    assert fetch("organizations/1/roles/org") == []
    assert fake_iam.requested == ["roles/x", "projects/p/roles/custom", "organizations/1/roles/org"]


def test_api_fetcher_http_error(fake_iam):
    with pytest.raises(FetchError) as exc_info:
        ApiFetcher(credentials=object())("roles/missing")
    assert isinstance(exc_info.value.__cause__, HttpError)


def test_api_fetcher_unsupported_name(fake_iam):
    with pytest.raises(FetchError):
        ApiFetcher(credentials=object())("viewer")


def test_static_fetcher_from_file(tmp_path):
    path = tmp_path / "roles.yaml"
    path.write_text("roles/x:\n- a.b.get\n- a.b.create\n")
    fetch = StaticFetcher.from_file(path)
    assert fetch("roles/x") == ["a.b.get", "a.b.create"]
    with pytest.raises(FetchError):
        fetch("roles/y")


def test_static_fetcher_bad_file(tmp_path):
    path = tmp_path / "roles.yaml"
    path.write_text("roles/x: a.b.get\n")
    with pytest.raises(DependencyError):
        StaticFetcher.from_file(path)
    with pytest.raises(DependencyError):
        StaticFetcher.from_file(tmp_path / "missing.yaml")
