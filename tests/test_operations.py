"""Tests for operations - label storage and HTPasswd lookup."""

from ocm_admin_cli.lib.errors import ErrorKind
from ocm_admin_cli.lib.labelset import LabelSet
from ocm_admin_cli.lib.result import Err, Ok
from ocm_admin_cli.models import IdentityProvider, LabelScope
from ocm_admin_cli.operations import (
    HtpasswdLookup,
    StoredLabelSet,
    find_htpasswd_provider,
    read_label_set,
    write_label_set,
)

ORG = LabelScope.organization("org-1")


class TestReadLabelSet:
    """Tests for read_label_set."""

    def test_missing_label_is_empty_and_absent(self, fake_ocm) -> None:
        assert read_label_set(fake_ocm, ORG) == Ok(StoredLabelSet(ORG, LabelSet(), exists=False))

    def test_existing_label_is_decoded(self, fake_ocm) -> None:
        fake_ocm.set_label(ORG, "a,b")

        result = read_label_set(fake_ocm, ORG)

        assert result == Ok(StoredLabelSet(ORG, LabelSet.of(["a", "b"]), exists=True, raw="a,b"))

    def test_reads_the_scope_key(self, fake_ocm) -> None:
        read_label_set(fake_ocm, ORG)

        assert fake_ocm.calls == [("get_label", (ORG, "sts_ocm_role"))]

    def test_forbidden_propagates(self, fake_ocm) -> None:
        fake_ocm.fail("get_label", 403)

        result = read_label_set(fake_ocm, ORG)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.FORBIDDEN


class TestWriteLabelSet:
    """Tests for write_label_set."""

    def test_adds_when_absent(self, fake_ocm) -> None:
        stored = StoredLabelSet(ORG, LabelSet(), exists=False)

        assert write_label_set(fake_ocm, stored, LabelSet.of(["a"])) == Ok(None)

        assert [c[0] for c in fake_ocm.mutations] == ["add_label"]
        assert fake_ocm.label_value(ORG) == "a"

    def test_updates_when_present(self, fake_ocm) -> None:
        fake_ocm.set_label(ORG, "a")
        stored = StoredLabelSet(ORG, LabelSet.of(["a"]), exists=True, raw="a")

        write_label_set(fake_ocm, stored, LabelSet.of(["a", "b"]))

        assert [c[0] for c in fake_ocm.mutations] == ["update_label"]
        assert fake_ocm.label_value(ORG) == "a,b"

    def test_empty_deletes(self, fake_ocm) -> None:
        fake_ocm.set_label(ORG, "a")
        stored = StoredLabelSet(ORG, LabelSet.of(["a"]), exists=True, raw="a")

        write_label_set(fake_ocm, stored, LabelSet())

        assert [c[0] for c in fake_ocm.mutations] == ["delete_label"]
        assert fake_ocm.label_value(ORG) is None

    def test_empty_over_absent_is_noop(self, fake_ocm) -> None:
        stored = StoredLabelSet(ORG, LabelSet(), exists=False)

        assert write_label_set(fake_ocm, stored, LabelSet()) == Ok(None)
        assert fake_ocm.calls == []


class TestFindHtpasswdProvider:
    """Tests for find_htpasswd_provider."""

    def test_no_providers(self, fake_ocm) -> None:
        assert find_htpasswd_provider(fake_ocm, "2abc") == Ok(HtpasswdLookup(provider=None))

    def test_first_htpasswd_provider_is_chosen(self, fake_ocm) -> None:
        fake_ocm.providers["2abc"] = [IdentityProvider("gh", "github", "GithubIdentityProvider")]
        first = fake_ocm.add_htpasswd_provider("2abc", ["a"])
        fake_ocm.add_htpasswd_provider("2abc", ["b"], name="second")

        result = find_htpasswd_provider(fake_ocm, "2abc")

        assert isinstance(result, Ok)
        assert result.value.provider == first
        assert result.value.usernames == ("a", "b")
        assert result.value.has_user("b")
        assert not result.value.has_user("cluster-admin")

    def test_user_listing_failure(self, fake_ocm) -> None:
        fake_ocm.add_htpasswd_provider("2abc", ["a"])
        fake_ocm.fail("get_htpasswd_users", 500)

        result = find_htpasswd_provider(fake_ocm, "2abc")

        assert isinstance(result, Err)
        assert result.error.status == 500
