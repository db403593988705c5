"""OCM admin data models.

Pure data structures parsed from control-plane payloads. No transport coupling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Self

HTPASSWD_PROVIDER_TYPE = "HTPasswdIdentityProvider"


class Arn(str):
    """AWS ARN - a string subclass with parsed component access."""

    def __new__(cls, value: str) -> Self:
        parts = value.split(":")
        if len(parts) < 6 or parts[0] != "arn":
            raise ValueError(f"Invalid ARN: {value}")
        if not parts[2]:
            raise ValueError(f"Invalid ARN: {value} (missing service)")
        return super().__new__(cls, value)

    @property
    def account(self) -> str:
        return self.split(":")[4]

    @property
    def resource(self) -> str:
        return ":".join(self.split(":")[5:])

    @property
    def resource_id(self) -> str:
        """Everything after the resource type, including any IAM path."""
        res = self.resource
        if "/" in res:
            return "/".join(res.split("/")[1:])
        return res


def parse_role_arn(value: str) -> Arn:
    """Parse an IAM role ARN. Raises ValueError when malformed."""
    arn = Arn(value.strip())
    if not arn.account:
        raise ValueError(f"Invalid ARN: {value} (missing account ID)")
    return arn


# =============================================================================
# Clusters
# =============================================================================


class ClusterState(StrEnum):
    """Cluster lifecycle states reported by clusters_mgmt."""

    READY = "ready"
    INSTALLING = "installing"
    PENDING = "pending"
    VALIDATING = "validating"
    WAITING = "waiting"
    ERROR = "error"
    HIBERNATING = "hibernating"
    POWERING_DOWN = "powering_down"
    RESUMING = "resuming"
    UNINSTALLING = "uninstalling"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> ClusterState:
        try:
            return cls(value or "unknown")
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Cluster:
    """Managed cluster as seen by the admin workflow."""

    id: str
    name: str
    state: ClusterState
    api_url: str
    # State as reported by the server, kept when it is not a known ClusterState
    raw_state: str = ""

    @property
    def is_ready(self) -> bool:
        return self.state is ClusterState.READY

    @property
    def state_name(self) -> str:
        return self.raw_state or self.state.value

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            state=ClusterState.parse(data.get("state")),
            api_url=data.get("api", {}).get("url", ""),
            raw_state=data.get("state") or "",
        )


@dataclass(frozen=True)
class User:
    """Member of a cluster group."""

    id: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(id=data["id"])


@dataclass(frozen=True)
class IdentityProvider:
    """Cluster identity provider. Only the HTPasswd type is acted upon."""

    id: str
    name: str
    type: str

    @property
    def is_htpasswd(self) -> bool:
        return self.type == HTPASSWD_PROVIDER_TYPE

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(id=data["id"], name=data.get("name", ""), type=data.get("type", ""))


@dataclass(frozen=True)
class HtpasswdUser:
    """Entry of an HTPasswd identity provider. The hash never leaves the server."""

    id: str
    username: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(id=data.get("id", ""), username=data["username"])


@dataclass(frozen=True)
class HtpasswdProviderSpec:
    """Body of a new HTPasswd identity provider."""

    name: str
    users: tuple[tuple[str, str], ...]

    def to_api(self) -> dict[str, Any]:
        return {
            "type": HTPASSWD_PROVIDER_TYPE,
            "name": self.name,
            "htpasswd": {
                "users": {
                    "items": [
                        {"username": username, "password": password}
                        for username, password in self.users
                    ]
                }
            },
        }


@dataclass(frozen=True)
class AdminCredential:
    """Login details for the new cluster admin. Never persisted."""

    api_url: str
    username: str
    password: str = field(repr=False)
    password_supplied: bool = False

    def to_output(self) -> dict[str, str]:
        """Structured output; omits a password the caller already knows."""
        out = {"api_url": self.api_url, "username": self.username}
        if not self.password_supplied:
            out["password"] = self.password
        return out

    @property
    def login_command(self) -> str:
        return f"oc login {self.api_url} --username {self.username} --password {self.password}"


# =============================================================================
# Accounts, organizations, labels
# =============================================================================


class ScopeKind(StrEnum):
    """Owner of a role-link label."""

    ACCOUNT = "account"
    ORGANIZATION = "organization"


# Label keys holding the linked role ARNs
USER_ROLE_LABEL = "sts_user_role"
OCM_ROLE_LABEL = "sts_ocm_role"


@dataclass(frozen=True)
class LabelScope:
    """An account or organization whose label stores linked roles."""

    kind: ScopeKind
    id: str

    @classmethod
    def account(cls, account_id: str) -> Self:
        return cls(ScopeKind.ACCOUNT, account_id)

    @classmethod
    def organization(cls, org_id: str) -> Self:
        return cls(ScopeKind.ORGANIZATION, org_id)

    @property
    def label_key(self) -> str:
        match self.kind:
            case ScopeKind.ACCOUNT:
                return USER_ROLE_LABEL
            case ScopeKind.ORGANIZATION:
                return OCM_ROLE_LABEL

    @property
    def collection(self) -> str:
        """accounts_mgmt collection name."""
        match self.kind:
            case ScopeKind.ACCOUNT:
                return "accounts"
            case ScopeKind.ORGANIZATION:
                return "organizations"

    def __str__(self) -> str:
        return f"{self.kind.value} '{self.id}'"


@dataclass(frozen=True)
class Label:
    """Remote key/value annotation."""

    key: str
    value: str


@dataclass(frozen=True)
class CurrentAccount:
    """Account behind the OCM token."""

    id: str
    username: str
    organization_id: str
    organization_external_id: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        org = data.get("organization") or {}
        return cls(
            id=data["id"],
            username=data.get("username", ""),
            organization_id=org.get("id", ""),
            organization_external_id=org.get("external_id", ""),
        )


class LinkOutcome(StrEnum):
    LINKED = "linked"
    ALREADY_LINKED = "already-linked"


class UnlinkOutcome(StrEnum):
    UNLINKED = "unlinked"


@dataclass(frozen=True)
class AccountCheck:
    """Whether an AWS account already has a role linked to an organization.

    label_value is the raw stored value, matching_arn the linked role
    from that account (empty when none).
    """

    exists: bool
    label_value: str = ""
    matching_arn: str = ""


@dataclass(frozen=True)
class RoleCheck:
    """Whether linking role_name would conflict with the account's linked role."""

    conflict: bool
    existing_role_name: str = ""
    existing_arn: str = ""
