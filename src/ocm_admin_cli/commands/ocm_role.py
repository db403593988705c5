"""OCM role commands - link IAM roles to the OCM organization."""

import click

from ocm_admin_cli.commands.common import (
    aws_options,
    echo_key_value,
    handle_result,
    json_option,
    make_aws_context,
    make_context,
    ocm_options,
    organization_option,
    to_json,
)
from ocm_admin_cli.models import LinkOutcome, ScopeKind
from ocm_admin_cli.workflows import (
    check_account_exists,
    check_role_exists,
    link_role,
    list_linked_roles,
    resolve_scope,
    unlink_role,
)


@click.group("ocm-role")
def ocm_role() -> None:
    """Manage IAM roles linked to the OCM organization."""
    pass


@ocm_role.command("link")
@click.argument("role_arn")
@organization_option
@ocm_options
def ocm_role_link(
    role_arn: str,
    organization_id: str | None,
    url: str,
    token: str | None,
    timeout: float,
) -> None:
    """Link an OCM role to an organization.

    Only one role per AWS account can be linked to an organization.

    \b
    Examples:
      ocm-admin ocm-role link arn:aws:iam::123456789012:role/ManagedOpenShift-OCM-Role
    """
    ctx = make_context(url, token, timeout)
    try:
        scope = handle_result(resolve_scope(ctx.client, ScopeKind.ORGANIZATION, organization_id))
        outcome = handle_result(link_role(ctx.client, scope, role_arn))
    finally:
        ctx.close()

    if outcome is LinkOutcome.ALREADY_LINKED:
        click.echo(f"Role-arn '{role_arn}' is already linked with {scope}.")
        return
    click.secho(f"Successfully linked role-arn '{role_arn}' with {scope}.", fg="green", bold=True)


@ocm_role.command("unlink")
@click.argument("role_arn")
@organization_option
@ocm_options
def ocm_role_unlink(
    role_arn: str,
    organization_id: str | None,
    url: str,
    token: str | None,
    timeout: float,
) -> None:
    """Unlink an OCM role from an organization."""
    ctx = make_context(url, token, timeout)
    try:
        scope = handle_result(resolve_scope(ctx.client, ScopeKind.ORGANIZATION, organization_id))
        handle_result(
            unlink_role(ctx.client, scope, role_arn),
            success_message=f"Successfully unlinked role-arn '{role_arn}' from {scope}.",
        )
    finally:
        ctx.close()


@ocm_role.command("list")
@organization_option
@ocm_options
@json_option
def ocm_role_list(
    organization_id: str | None,
    url: str,
    token: str | None,
    timeout: float,
    as_json: bool,
) -> None:
    """List OCM roles linked to an organization."""
    ctx = make_context(url, token, timeout)
    try:
        scope = handle_result(resolve_scope(ctx.client, ScopeKind.ORGANIZATION, organization_id))
        roles = handle_result(list_linked_roles(ctx.client, scope))
    finally:
        ctx.close()

    if as_json:
        click.echo(to_json(list(roles)))
        return

    if not roles:
        click.echo(f"No roles linked with {scope}")
        return
    click.echo(f"Roles linked with {scope}:")
    for arn in roles:
        click.echo(f"  {arn}")


@ocm_role.command("check")
@organization_option
@click.option(
    "--aws-account-id",
    default=None,
    help="AWS account ID (defaults to the account of the current AWS credentials)",
)
@click.option(
    "--role-name",
    default=None,
    help="Role about to be created; reports whether it conflicts with the linked role",
)
@ocm_options
@aws_options
@json_option
def ocm_role_check(
    organization_id: str | None,
    aws_account_id: str | None,
    role_name: str | None,
    url: str,
    token: str | None,
    timeout: float,
    region: str,
    profile: str | None,
    as_json: bool,
) -> None:
    """Show which role an AWS account has linked to the organization.

    \b
    Examples:
      ocm-admin ocm-role check
      ocm-admin ocm-role check --aws-account-id 123456789012 --role-name ManagedOpenShift-OCM-Role
    """
    if aws_account_id is None:
        aws_account_id = handle_result(make_aws_context(region, profile).caller_account_id())

    ctx = make_context(url, token, timeout)
    try:
        scope = handle_result(resolve_scope(ctx.client, ScopeKind.ORGANIZATION, organization_id))
        if role_name:
            result = handle_result(check_role_exists(ctx.client, scope.id, role_name, aws_account_id))
        else:
            result = handle_result(check_account_exists(ctx.client, scope.id, aws_account_id))
    finally:
        ctx.close()

    if as_json:
        click.echo(to_json(result))
        return

    echo_key_value("Organization", scope.id)
    echo_key_value("AWS account", aws_account_id)
    if role_name:
        if result.conflict:
            click.secho(
                f"Role '{result.existing_role_name}' ({result.existing_arn}) is already linked "
                f"for this account, '{role_name}' cannot be linked.",
                fg="yellow",
            )
        else:
            click.echo(f"Role '{role_name}' can be linked.")
        return
    if result.exists:
        echo_key_value("Linked role", result.matching_arn)
    else:
        click.echo("No role linked for this account.")
