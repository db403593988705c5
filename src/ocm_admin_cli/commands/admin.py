"""Admin commands - create the cluster-admin user."""

import click

from ocm_admin_cli.commands.common import (
    cluster_option,
    handle_result,
    json_option,
    make_context,
    ocm_options,
    to_json,
)
from ocm_admin_cli.workflows import provision_admin


@click.group()
def create() -> None:
    """Create a resource on a cluster."""
    pass


@create.command("admin")
@cluster_option
@click.option(
    "--password",
    "-p",
    default=None,
    help="Choice of password for admin user (generated when omitted)",
)
@ocm_options
@json_option
def create_admin(
    cluster_key: str,
    password: str | None,
    url: str,
    token: str | None,
    timeout: float,
    as_json: bool,
) -> None:
    """Create a cluster-admin user to login to the cluster.

    The user is added to the cluster-admins group and gets a password
    through the cluster's HTPasswd identity provider, which is created
    when the cluster has none.

    \b
    Examples:
      ocm-admin create admin -c mycluster
      ocm-admin create admin -c mycluster -p MasterKey123
      ocm-admin create admin -c mycluster --json
    """
    ctx = make_context(url, token, timeout)
    try:
        credential = handle_result(provision_admin(ctx.client, cluster_key, password))
    finally:
        ctx.close()

    if as_json:
        click.echo(to_json(credential.to_output()))
        return

    click.secho(f"Admin account has been added to cluster '{cluster_key}'.", fg="green", bold=True)
    if not credential.password_supplied:
        click.echo(
            "Please securely store this generated password. If you lose this password "
            "you can delete and recreate the cluster admin user."
        )
    click.echo("To login, run the following command:")
    click.echo()
    click.echo(f"   {credential.login_command}")
    click.echo()
    click.echo("It may take several minutes for this access to become active.")
