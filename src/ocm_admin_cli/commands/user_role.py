"""User role commands - link IAM roles to the current OCM account."""

import click

from ocm_admin_cli.commands.common import (
    account_option,
    handle_result,
    json_option,
    make_context,
    ocm_options,
    to_json,
)
from ocm_admin_cli.models import LinkOutcome, ScopeKind
from ocm_admin_cli.workflows import link_role, list_linked_roles, resolve_scope, unlink_role


@click.group("user-role")
def user_role() -> None:
    """Manage IAM roles linked to an OCM account."""
    pass


@user_role.command("link")
@click.argument("role_arn")
@account_option
@ocm_options
def user_role_link(
    role_arn: str,
    account_id: str | None,
    url: str,
    token: str | None,
    timeout: float,
) -> None:
    """Link a user role to an OCM account."""
    ctx = make_context(url, token, timeout)
    try:
        scope = handle_result(resolve_scope(ctx.client, ScopeKind.ACCOUNT, account_id))
        outcome = handle_result(link_role(ctx.client, scope, role_arn))
    finally:
        ctx.close()

    if outcome is LinkOutcome.ALREADY_LINKED:
        click.echo(f"Role-arn '{role_arn}' is already linked with {scope}.")
        return
    click.secho(f"Successfully linked role-arn '{role_arn}' with {scope}.", fg="green", bold=True)


@user_role.command("unlink")
@click.argument("role_arn")
@account_option
@ocm_options
def user_role_unlink(
    role_arn: str,
    account_id: str | None,
    url: str,
    token: str | None,
    timeout: float,
) -> None:
    """Unlink a user role from an OCM account."""
    ctx = make_context(url, token, timeout)
    try:
        scope = handle_result(resolve_scope(ctx.client, ScopeKind.ACCOUNT, account_id))
        handle_result(
            unlink_role(ctx.client, scope, role_arn),
            success_message=f"Successfully unlinked role-arn '{role_arn}' from {scope}.",
        )
    finally:
        ctx.close()


@user_role.command("list")
@account_option
@ocm_options
@json_option
def user_role_list(
    account_id: str | None,
    url: str,
    token: str | None,
    timeout: float,
    as_json: bool,
) -> None:
    """List user roles linked to an OCM account."""
    ctx = make_context(url, token, timeout)
    try:
        scope = handle_result(resolve_scope(ctx.client, ScopeKind.ACCOUNT, account_id))
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
