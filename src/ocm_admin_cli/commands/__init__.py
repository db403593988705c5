"""Commands layer - CLI facade over workflows."""

from ocm_admin_cli.commands.admin import create
from ocm_admin_cli.commands.ocm_role import ocm_role
from ocm_admin_cli.commands.user_role import user_role

__all__ = [
    "create",
    "ocm_role",
    "user_role",
]
