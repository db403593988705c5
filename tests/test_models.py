"""Tests for models - Arn, clusters, credentials and label scopes."""

import pytest

from ocm_admin_cli.models import (
    AdminCredential,
    Arn,
    Cluster,
    ClusterState,
    CurrentAccount,
    IdentityProvider,
    LabelScope,
    ScopeKind,
    parse_role_arn,
)


class TestArn:
    """Tests for Arn class."""

    def test_role_arn_parts(self) -> None:
        arn = Arn("arn:aws:iam::123456789012:role/my-role")
        assert arn.account == "123456789012"
        assert arn.resource == "role/my-role"
        assert arn.resource_id == "my-role"

    def test_role_path_is_kept_in_resource_id(self) -> None:
        arn = Arn("arn:aws:iam::123456789012:role/service-role/my-role")
        assert arn.resource_id == "service-role/my-role"

    def test_arn_is_string(self) -> None:
        arn = Arn("arn:aws:iam::123456789012:role/my-role")
        assert isinstance(arn, str)
        assert arn == "arn:aws:iam::123456789012:role/my-role"

    def test_invalid_arn_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid ARN"):
            Arn("not-an-arn")

    def test_arn_missing_parts_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid ARN"):
            Arn("arn:aws:iam")

    def test_arn_missing_service_raises(self) -> None:
        with pytest.raises(ValueError, match="missing service"):
            Arn("arn:aws:::123456789012:role/r")


class TestParseRoleArn:
    """Tests for parse_role_arn."""

    def test_strips_whitespace(self) -> None:
        assert parse_role_arn("  arn:aws:iam::1:role/r ") == "arn:aws:iam::1:role/r"

    def test_requires_account(self) -> None:
        with pytest.raises(ValueError, match="missing account ID"):
            parse_role_arn("arn:aws:iam:::role/r")


class TestCluster:
    """Tests for Cluster.from_api."""

    def test_from_api(self) -> None:
        cluster = Cluster.from_api(
            {"id": "2abc", "name": "c", "state": "ready", "api": {"url": "https://api.c:6443"}}
        )
        assert cluster == Cluster("2abc", "c", ClusterState.READY, "https://api.c:6443", "ready")
        assert cluster.is_ready

    def test_unrecognised_state_keeps_server_value(self) -> None:
        cluster = Cluster.from_api({"id": "2abc", "state": "migrating"})
        assert cluster.state is ClusterState.UNKNOWN
        assert cluster.state_name == "migrating"

    def test_missing_fields_default(self) -> None:
        cluster = Cluster.from_api({"id": "2abc"})
        assert cluster.state is ClusterState.UNKNOWN
        assert cluster.api_url == ""
        assert cluster.state_name == "unknown"

    @pytest.mark.parametrize("state", ["installing", "hibernating", "error", "uninstalling"])
    def test_only_ready_is_ready(self, state: str) -> None:
        assert not Cluster.from_api({"id": "x", "state": state}).is_ready


class TestIdentityProvider:
    def test_is_htpasswd(self) -> None:
        assert IdentityProvider("1", "htpasswd", "HTPasswdIdentityProvider").is_htpasswd
        assert not IdentityProvider("2", "gh", "GithubIdentityProvider").is_htpasswd


class TestCurrentAccount:
    def test_missing_organization(self) -> None:
        account = CurrentAccount.from_api({"id": "acc-1"})
        assert account.organization_id == ""


class TestAdminCredential:
    """Tests for AdminCredential output."""

    def test_generated_password_is_printed(self) -> None:
        credential = AdminCredential("https://api.c:6443", "cluster-admin", "abcde-fghij")

        assert credential.to_output() == {
            "api_url": "https://api.c:6443",
            "username": "cluster-admin",
            "password": "abcde-fghij",
        }

    def test_supplied_password_is_omitted(self) -> None:
        credential = AdminCredential("https://api.c:6443", "cluster-admin", "secret", True)

        assert "password" not in credential.to_output()

    def test_password_not_in_repr(self) -> None:
        credential = AdminCredential("https://api.c:6443", "cluster-admin", "secret")

        assert "secret" not in repr(credential)

    def test_login_command(self) -> None:
        credential = AdminCredential("https://api.c:6443", "cluster-admin", "pw")

        assert credential.login_command == (
            "oc login https://api.c:6443 --username cluster-admin --password pw"
        )


class TestLabelScope:
    """Tests for LabelScope."""

    def test_account_scope(self) -> None:
        scope = LabelScope.account("acc-1")
        assert scope.kind is ScopeKind.ACCOUNT
        assert scope.label_key == "sts_user_role"
        assert scope.collection == "accounts"
        assert str(scope) == "account 'acc-1'"

    def test_organization_scope(self) -> None:
        scope = LabelScope.organization("org-1")
        assert scope.label_key == "sts_ocm_role"
        assert scope.collection == "organizations"
        assert str(scope) == "organization 'org-1'"

    def test_hashable(self) -> None:
        assert {LabelScope.account("a"), LabelScope.account("a")} == {LabelScope.account("a")}
