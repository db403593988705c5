"""Role link workflows - link, unlink, list and check IAM roles on OCM scopes.

Linked role ARNs live in one label per scope (sts_ocm_role on
organizations, sts_user_role on accounts). Every operation re-reads the
label, decides locally and writes at most once; there is nothing to roll
back. A scope may hold at most one role per AWS account.
"""

import logging

from ocm_admin_cli.lib.errors import (
    ApiError,
    ErrorKind,
    InvalidArnError,
    LabelReadError,
    LinkError,
    RoleLinkConflictError,
    RoleNotLinkedError,
    UnlinkError,
)
from ocm_admin_cli.lib.labelset import DELIMITER
from ocm_admin_cli.lib.ocm import ControlPlane
from ocm_admin_cli.lib.result import Err, Ok, Result, map_ok
from ocm_admin_cli.models import (
    AccountCheck,
    Arn,
    LabelScope,
    LinkOutcome,
    RoleCheck,
    ScopeKind,
    UnlinkOutcome,
    parse_role_arn,
)
from ocm_admin_cli.operations.labels import StoredLabelSet, read_label_set, write_label_set

logger = logging.getLogger(__name__)


def _parse_arn(value: str, context: str = "") -> Result[Arn, InvalidArnError]:
    # Labels store ARNs comma-joined, a comma would split this one in two
    if DELIMITER in value:
        return Err(InvalidArnError(value, f"role ARN must not contain '{DELIMITER}'"))
    try:
        return Ok(parse_role_arn(value))
    except ValueError as e:
        reason = f"{e} {context}".strip()
        return Err(InvalidArnError(value, reason))


def _linked_arns(stored: StoredLabelSet) -> Result[list[Arn], InvalidArnError]:
    arns: list[Arn] = []
    for value in stored.values:
        match _parse_arn(value, f"(stored in label '{stored.scope.label_key}' of {stored.scope})"):
            case Err() as e:
                return e
            case Ok(arn):
                arns.append(arn)
    return Ok(arns)


def resolve_scope(
    client: ControlPlane, kind: ScopeKind, scope_id: str | None = None
) -> Result[LabelScope, ApiError]:
    """Use scope_id, or fall back to the caller's own account/organization."""
    if scope_id:
        return Ok(LabelScope(kind, scope_id))

    match client.get_current_account():
        case Err() as e:
            return e
        case Ok(account):
            pass

    match kind:
        case ScopeKind.ACCOUNT:
            return Ok(LabelScope.account(account.id))
        case ScopeKind.ORGANIZATION:
            return Ok(LabelScope.organization(account.organization_id))


def link_role(client: ControlPlane, scope: LabelScope, role_arn: str) -> Result[LinkOutcome, LinkError]:
    """Link role_arn to scope.

    Linking an already linked role is a no-op. A different role from the
    same AWS account is rejected without writing anything.
    """
    match _parse_arn(role_arn):
        case Err() as e:
            return e
        case Ok(candidate):
            pass

    match read_label_set(client, scope):
        case Err() as e:
            return e
        case Ok(stored):
            pass

    if candidate in stored.values:
        logger.debug("Role '%s' is already linked to %s", candidate, scope)
        return Ok(LinkOutcome.ALREADY_LINKED)

    match _linked_arns(stored):
        case Err() as e:
            return e
        case Ok(linked):
            pass

    for existing in linked:
        if existing.account == candidate.account:
            return Err(RoleLinkConflictError(str(scope), candidate, existing))

    logger.debug("Linking role '%s' to %s", candidate, scope)
    match write_label_set(client, stored, stored.values.add(candidate)):
        case Err(ApiError(kind=ErrorKind.CONFLICT)):
            # Label was created by someone else between our read and write
            return Err(RoleLinkConflictError(str(scope), candidate))
        case Err() as e:
            return e
        case Ok(_):
            return Ok(LinkOutcome.LINKED)


def unlink_role(
    client: ControlPlane, scope: LabelScope, role_arn: str
) -> Result[UnlinkOutcome, UnlinkError]:
    """Remove role_arn from scope. Removing the last role deletes the label.

    Unlinking a role that is not linked is an error, not a no-op.
    """
    match _parse_arn(role_arn):
        case Err() as e:
            return e
        case Ok(candidate):
            pass

    match read_label_set(client, scope):
        case Err() as e:
            return e
        case Ok(stored):
            pass

    if candidate not in stored.values:
        return Err(RoleNotLinkedError(str(scope), candidate))

    logger.debug("Unlinking role '%s' from %s", candidate, scope)
    match write_label_set(client, stored, stored.values.remove(candidate)):
        case Err() as e:
            return e
        case Ok(_):
            return Ok(UnlinkOutcome.UNLINKED)


def list_linked_roles(client: ControlPlane, scope: LabelScope) -> Result[tuple[str, ...], ApiError]:
    """Role ARNs linked to scope, in stored order. Empty when there is no label."""
    return map_ok(read_label_set(client, scope), lambda stored: stored.values.tokens)


def check_account_exists(
    client: ControlPlane, org_id: str, aws_account_id: str
) -> Result[AccountCheck, LabelReadError]:
    """Find the role, if any, that aws_account_id already has linked to the organization."""
    match read_label_set(client, LabelScope.organization(org_id)):
        case Err() as e:
            return e
        case Ok(stored):
            pass

    match _linked_arns(stored):
        case Err() as e:
            return e
        case Ok(linked):
            pass

    for arn in linked:
        if arn.account == aws_account_id:
            return Ok(AccountCheck(exists=True, label_value=stored.raw, matching_arn=arn))
    return Ok(AccountCheck(exists=False, label_value=stored.raw))


def check_role_exists(
    client: ControlPlane, org_id: str, role_name: str, aws_account_id: str
) -> Result[RoleCheck, LabelReadError]:
    """Decide whether creating role_name in aws_account_id would break the one-role rule.

    Re-using the role that is already linked is fine, so that callers can
    re-run role creation to attach policies or link it again.
    """
    match check_account_exists(client, org_id, aws_account_id):
        case Err() as e:
            return e
        case Ok(check):
            pass

    if not check.exists:
        return Ok(RoleCheck(conflict=False))

    existing = Arn(check.matching_arn)
    if existing.resource_id == role_name:
        return Ok(RoleCheck(conflict=False))
    return Ok(
        RoleCheck(
            conflict=True,
            existing_role_name=existing.resource_id,
            existing_arn=check.matching_arn,
        )
    )
