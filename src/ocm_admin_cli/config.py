"""Fixed identifiers and connection defaults.

Everything the workflows would otherwise hard-code lives here so callers
(and tests) can pass an alternative AdminConfig explicitly.
"""

from dataclasses import dataclass, field

from ocm_admin_cli.lib.password import PasswordPolicy

DEFAULT_OCM_URL = "https://api.openshift.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_REGION = "us-east-1"

CLUSTER_ADMIN_USERNAME = "cluster-admin"
CLUSTER_ADMINS_GROUP = "cluster-admins"
HTPASSWD_PROVIDER_NAME = "htpasswd"


@dataclass(frozen=True)
class AdminConfig:
    """Identifiers used when provisioning the cluster admin."""

    username: str = CLUSTER_ADMIN_USERNAME
    group: str = CLUSTER_ADMINS_GROUP
    provider_name: str = HTPASSWD_PROVIDER_NAME
    password_policy: PasswordPolicy = field(default_factory=PasswordPolicy)
