"""Identity provider operations - HTPasswd lookup."""

from dataclasses import dataclass

from ocm_admin_cli.lib.errors import ApiError
from ocm_admin_cli.lib.ocm import ControlPlane
from ocm_admin_cli.lib.result import Err, Ok, Result
from ocm_admin_cli.models import IdentityProvider


@dataclass(frozen=True, slots=True)
class HtpasswdLookup:
    """HTPasswd state of a cluster.

    provider is the first HTPasswd provider found (None when the cluster
    has none); usernames covers every HTPasswd provider.
    """

    provider: IdentityProvider | None
    usernames: tuple[str, ...] = ()

    def has_user(self, username: str) -> bool:
        return username in self.usernames


def find_htpasswd_provider(client: ControlPlane, cluster_id: str) -> Result[HtpasswdLookup, ApiError]:
    """Locate the HTPasswd provider and collect the users it already holds."""
    match client.get_identity_providers(cluster_id):
        case Err() as e:
            return e
        case Ok(providers):
            pass

    found: IdentityProvider | None = None
    usernames: list[str] = []
    for provider in providers:
        if not provider.is_htpasswd:
            continue
        if found is None:
            found = provider
        match client.get_htpasswd_users(cluster_id, provider.id):
            case Err() as e:
                return e
            case Ok(users):
                usernames.extend(u.username for u in users)

    return Ok(HtpasswdLookup(provider=found, usernames=tuple(usernames)))
