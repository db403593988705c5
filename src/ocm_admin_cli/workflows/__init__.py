"""Workflows layer - orchestrate operations into user intents."""

from ocm_admin_cli.workflows.admin import provision_admin
from ocm_admin_cli.workflows.role_link import (
    check_account_exists,
    check_role_exists,
    link_role,
    list_linked_roles,
    resolve_scope,
    unlink_role,
)

__all__ = [
    "provision_admin",
    "resolve_scope",
    "link_role",
    "unlink_role",
    "list_linked_roles",
    "check_account_exists",
    "check_role_exists",
]
