"""Shared pytest fixtures for ocm-admin tests."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from ocm_admin_cli.lib.errors import ApiError, ErrorKind
from ocm_admin_cli.lib.result import Err, Ok, Result
from ocm_admin_cli.models import (
    Cluster,
    ClusterState,
    CurrentAccount,
    HtpasswdProviderSpec,
    HtpasswdUser,
    IdentityProvider,
    Label,
    LabelScope,
    User,
)

MUTATING = {
    "create_user",
    "delete_user",
    "create_identity_provider",
    "add_htpasswd_user",
    "add_label",
    "update_label",
    "delete_label",
}


def api_err(operation: str, status: int) -> Err[ApiError]:
    return Err(ApiError(operation, status, ErrorKind.from_status(status), f"HTTP {status}"))


@dataclass
class FakeControlPlane:
    """In-memory ControlPlane. Records every call; failures can be injected per method."""

    clusters: list[Cluster] = field(default_factory=list)
    group_users: dict[tuple[str, str], list[str]] = field(default_factory=dict)
    providers: dict[str, list[IdentityProvider]] = field(default_factory=dict)
    htpasswd: dict[tuple[str, str], dict[str, str]] = field(default_factory=dict)
    labels: dict[tuple[str, str, str], str] = field(default_factory=dict)
    current: CurrentAccount = field(
        default_factory=lambda: CurrentAccount("acc-1", "jdoe", "org-1", "ext-1")
    )
    failures: dict[str, ApiError] = field(default_factory=dict)
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    # --- test helpers --------------------------------------------------------

    def fail(self, method: str, status: int = 500) -> None:
        self.failures[method] = ApiError(method, status, ErrorKind.from_status(status), "boom")

    def add_cluster(
        self, cluster_id: str, name: str, state: ClusterState = ClusterState.READY, raw_state: str = ""
    ) -> Cluster:
        cluster = Cluster(cluster_id, name, state, f"https://api.{name}.example.com:6443", raw_state)
        self.clusters.append(cluster)
        return cluster

    def add_htpasswd_provider(self, cluster_id: str, usernames: list[str], name: str = "htpasswd") -> IdentityProvider:
        provider = IdentityProvider(f"idp-{len(self.providers.get(cluster_id, [])) + 1}", name, "HTPasswdIdentityProvider")
        self.providers.setdefault(cluster_id, []).append(provider)
        self.htpasswd[(cluster_id, provider.id)] = {u: "hash" for u in usernames}
        return provider

    def label_value(self, scope: LabelScope) -> str | None:
        return self.labels.get((scope.kind.value, scope.id, scope.label_key))

    def set_label(self, scope: LabelScope, value: str) -> None:
        self.labels[(scope.kind.value, scope.id, scope.label_key)] = value

    @property
    def mutations(self) -> list[tuple[str, tuple[Any, ...]]]:
        return [c for c in self.calls if c[0] in MUTATING]

    def _record(self, method: str, *args: Any) -> ApiError | None:
        self.calls.append((method, args))
        return self.failures.get(method)

    # --- ControlPlane --------------------------------------------------------

    def get_cluster(self, cluster_key: str) -> Result[Cluster | None, ApiError]:
        if error := self._record("get_cluster", cluster_key):
            return Err(error)
        for cluster in self.clusters:
            if cluster_key in (cluster.id, cluster.name):
                return Ok(cluster)
        return Ok(None)

    def create_user(self, cluster_id: str, group: str, user_id: str) -> Result[User, ApiError]:
        if error := self._record("create_user", cluster_id, group, user_id):
            return Err(error)
        users = self.group_users.setdefault((cluster_id, group), [])
        if user_id in users:
            return api_err("create_user", 409)
        users.append(user_id)
        return Ok(User(user_id))

    def delete_user(self, cluster_id: str, group: str, user_id: str) -> Result[None, ApiError]:
        if error := self._record("delete_user", cluster_id, group, user_id):
            return Err(error)
        users = self.group_users.get((cluster_id, group), [])
        if user_id not in users:
            return api_err("delete_user", 404)
        users.remove(user_id)
        return Ok(None)

    def get_identity_providers(self, cluster_id: str) -> Result[list[IdentityProvider], ApiError]:
        if error := self._record("get_identity_providers", cluster_id):
            return Err(error)
        return Ok(list(self.providers.get(cluster_id, [])))

    def get_htpasswd_users(self, cluster_id: str, provider_id: str) -> Result[list[HtpasswdUser], ApiError]:
        if error := self._record("get_htpasswd_users", cluster_id, provider_id):
            return Err(error)
        users = self.htpasswd.get((cluster_id, provider_id), {})
        return Ok([HtpasswdUser(f"u-{u}", u) for u in users])

    def create_identity_provider(
        self, cluster_id: str, spec: HtpasswdProviderSpec
    ) -> Result[IdentityProvider, ApiError]:
        if error := self._record("create_identity_provider", cluster_id, spec):
            return Err(error)
        provider = self.add_htpasswd_provider(cluster_id, [], name=spec.name)
        self.htpasswd[(cluster_id, provider.id)] = dict(spec.users)
        return Ok(provider)

    def add_htpasswd_user(
        self, username: str, password: str, cluster_id: str, provider_id: str
    ) -> Result[None, ApiError]:
        if error := self._record("add_htpasswd_user", username, password, cluster_id, provider_id):
            return Err(error)
        users = self.htpasswd.get((cluster_id, provider_id))
        if users is None:
            return api_err("add_htpasswd_user", 404)
        if username in users:
            return api_err("add_htpasswd_user", 409)
        users[username] = password
        return Ok(None)

    def get_label(self, scope: LabelScope, key: str) -> Result[Label, ApiError]:
        if error := self._record("get_label", scope, key):
            return Err(error)
        value = self.labels.get((scope.kind.value, scope.id, key))
        if value is None:
            return api_err("get_label", 404)
        return Ok(Label(key, value))

    def add_label(self, scope: LabelScope, key: str, value: str) -> Result[None, ApiError]:
        if error := self._record("add_label", scope, key, value):
            return Err(error)
        if (scope.kind.value, scope.id, key) in self.labels:
            return api_err("add_label", 409)
        self.labels[(scope.kind.value, scope.id, key)] = value
        return Ok(None)

    def update_label(self, scope: LabelScope, key: str, value: str) -> Result[None, ApiError]:
        if error := self._record("update_label", scope, key, value):
            return Err(error)
        if (scope.kind.value, scope.id, key) not in self.labels:
            return api_err("update_label", 404)
        self.labels[(scope.kind.value, scope.id, key)] = value
        return Ok(None)

    def delete_label(self, scope: LabelScope, key: str) -> Result[None, ApiError]:
        if error := self._record("delete_label", scope, key):
            return Err(error)
        if self.labels.pop((scope.kind.value, scope.id, key), None) is None:
            return api_err("delete_label", 404)
        return Ok(None)

    def get_current_account(self) -> Result[CurrentAccount, ApiError]:
        if error := self._record("get_current_account"):
            return Err(error)
        return Ok(self.current)


@pytest.fixture
def fake_ocm() -> FakeControlPlane:
    """Empty in-memory control plane."""
    return FakeControlPlane()


@pytest.fixture
def ready_cluster(fake_ocm: FakeControlPlane) -> Cluster:
    """A ready cluster called 'mycluster' with no identity providers."""
    return fake_ocm.add_cluster("2abc", "mycluster")


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
