"""OCM admin CLI entry point."""

import logging

import click

from ocm_admin_cli import __version__
from ocm_admin_cli.commands import create, ocm_role, user_role


@click.group()
@click.version_option(version=__version__, prog_name="ocm-admin")
@click.option("--debug", is_flag=True, help="Log every API call and workflow step")
def cli(debug: bool) -> None:
    """OCM admin - cluster admin users and IAM role links for managed OpenShift."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO; keep it for --debug only
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


# Register subcommands
cli.add_command(create)
cli.add_command(ocm_role)
cli.add_command(user_role)


if __name__ == "__main__":
    cli()
