"""Error types for the OCM admin CLI.

All errors are frozen dataclasses - no exceptions in business logic.
Pattern match on these in the CLI layer to provide user-friendly messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# =============================================================================
# Remote (control-plane API) Errors
# =============================================================================


class ErrorKind(StrEnum):
    """Classification of a failed control-plane call."""

    FORBIDDEN = "forbidden"
    NOT_FOUND = "not-found"
    CONFLICT = "conflict"
    OTHER = "other"

    @classmethod
    def from_status(cls, status: int) -> ErrorKind:
        match status:
            case 401 | 403:
                return cls.FORBIDDEN
            case 404:
                return cls.NOT_FOUND
            case 409:
                return cls.CONFLICT
            case _:
                return cls.OTHER


@dataclass(frozen=True, slots=True)
class ApiError:
    """A control-plane request failed.

    operation names the call and the resource it targeted, e.g.
    "get label 'sts_ocm_role' of organization 'abc'". status is 0 when the
    request never got a response (connection error, timeout).
    """

    operation: str
    status: int
    kind: ErrorKind
    reason: str


# =============================================================================
# Validation Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class InvalidArnError:
    """Role ARN could not be parsed."""

    value: str
    reason: str


@dataclass(frozen=True, slots=True)
class InvalidClusterKeyError:
    """Cluster identifier contains characters that are not allowed."""

    cluster_key: str


@dataclass(frozen=True, slots=True)
class InvalidPasswordPolicyError:
    """Password policy cannot produce a password."""

    reason: str


# =============================================================================
# Cluster / Admin Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class ClusterNotFoundError:
    """No cluster matches the given id or name."""

    cluster_key: str


@dataclass(frozen=True, slots=True)
class ClusterNotReadyError:
    """Cluster exists but is not in the ready state."""

    cluster_key: str
    state: str


@dataclass(frozen=True, slots=True)
class AdminAlreadyExistsError:
    """The admin username is already present on the cluster."""

    cluster_key: str
    username: str


@dataclass(frozen=True, slots=True)
class PasswordGenerationError:
    """Random password could not be generated."""

    reason: str


@dataclass(frozen=True, slots=True)
class CompensationError:
    """Rolling back a completed step failed.

    Never returned on its own - always attached to the error that
    triggered the rollback.
    """

    cluster_key: str
    resource: str
    reason: str


@dataclass(frozen=True, slots=True)
class UserCreateError:
    """Admin user could not be added to the cluster."""

    cluster_key: str
    username: str
    group: str
    reason: str


@dataclass(frozen=True, slots=True)
class ProviderCreateError:
    """HTPasswd identity provider could not be created."""

    cluster_key: str
    provider_name: str
    reason: str
    compensation: CompensationError | None = None


@dataclass(frozen=True, slots=True)
class ProviderUpdateError:
    """Admin entry could not be added to an existing HTPasswd provider."""

    cluster_key: str
    provider_name: str
    username: str
    reason: str
    compensation: CompensationError | None = None


# =============================================================================
# Role Link Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class RoleLinkConflictError:
    """Another role from the same AWS account is already linked to the scope.

    existing_arn is None when the remote service rejected the write
    (a concurrent link won the race).
    """

    scope: str
    role_arn: str
    existing_arn: str | None = None


@dataclass(frozen=True, slots=True)
class RoleNotLinkedError:
    """Role ARN is not linked to the scope."""

    scope: str
    role_arn: str


# =============================================================================
# Type Aliases for Error Unions
# =============================================================================

type ProvisionError = (
    InvalidClusterKeyError
    | ClusterNotFoundError
    | ClusterNotReadyError
    | AdminAlreadyExistsError
    | PasswordGenerationError
    | UserCreateError
    | ProviderCreateError
    | ProviderUpdateError
    | ApiError
)
type LinkError = InvalidArnError | RoleLinkConflictError | ApiError
type UnlinkError = InvalidArnError | RoleNotLinkedError | ApiError
type LabelReadError = InvalidArnError | ApiError
