"""Admin workflow - provision the cluster-admin user and its HTPasswd login."""

import logging

from ocm_admin_cli.config import AdminConfig
from ocm_admin_cli.lib.errors import (
    AdminAlreadyExistsError,
    ApiError,
    ClusterNotFoundError,
    ClusterNotReadyError,
    CompensationError,
    ErrorKind,
    InvalidClusterKeyError,
    ProviderCreateError,
    ProviderUpdateError,
    ProvisionError,
    UserCreateError,
)
from ocm_admin_cli.lib.ocm import ControlPlane
from ocm_admin_cli.lib.password import generate_password
from ocm_admin_cli.lib.result import Err, Ok, Result
from ocm_admin_cli.lib.saga import CompensationFailure, Saga, SagaState
from ocm_admin_cli.lib.validators import is_valid_cluster_key
from ocm_admin_cli.models import AdminCredential, HtpasswdProviderSpec
from ocm_admin_cli.operations.idp import find_htpasswd_provider

logger = logging.getLogger(__name__)


def _describe(error: ApiError) -> str:
    if error.status:
        return f"{error.reason} (HTTP {error.status})"
    return error.reason


def _compensation_error(
    cluster_key: str, failures: list[CompensationFailure]
) -> CompensationError | None:
    if not failures:
        return None
    return CompensationError(
        cluster_key=cluster_key,
        resource=", ".join(f.resource for f in failures),
        reason="; ".join(
            _describe(f.error) if isinstance(f.error, ApiError) else str(f.error)
            for f in failures
        ),
    )


def provision_admin(
    client: ControlPlane,
    cluster_key: str,
    password: str | None = None,
    config: AdminConfig | None = None,
) -> Result[AdminCredential, ProvisionError]:
    """Create the cluster admin user with an HTPasswd password.

    1. Resolve the cluster, require it to be ready
    2. Look up HTPasswd providers, fail if the admin already exists
    3. Resolve the password (supplied or generated)
    4. Create the user in the admins group
    5. Create an HTPasswd provider holding only the admin, or add the
       admin to the existing one

    Steps 1-3 change nothing remotely. If step 5 fails the user from
    step 4 is deleted again; a failed delete is attached to the returned
    error as its compensation.
    """
    config = config or AdminConfig()

    if not is_valid_cluster_key(cluster_key):
        return Err(InvalidClusterKeyError(cluster_key))

    match client.get_cluster(cluster_key):
        case Err() as e:
            return e
        case Ok(None):
            return Err(ClusterNotFoundError(cluster_key))
        case Ok(cluster):
            pass

    if not cluster.is_ready:
        return Err(ClusterNotReadyError(cluster_key, cluster.state_name))

    saga = Saga(f"create admin on cluster '{cluster_key}'")

    # Find an existing HTPasswd provider and check for the admin user
    match find_htpasswd_provider(client, cluster.id):
        case Err() as e:
            return e
        case Ok(lookup):
            pass

    if lookup.has_user(config.username):
        return Err(AdminAlreadyExistsError(cluster_key, config.username))
    saga.advance(SagaState.CHECKED)

    password_supplied = bool(password)
    if password:
        logger.debug("Using user provided password")
    else:
        logger.debug("Generating random password")
        match generate_password(config.password_policy):
            case Err() as e:
                return e
            case Ok(password):
                pass

    # Add admin user to the admins group
    logger.debug("Adding '%s' user to cluster '%s'", config.username, cluster_key)
    match client.create_user(cluster.id, config.group, config.username):
        case Err(ApiError(kind=ErrorKind.CONFLICT)):
            # Lost a race with a concurrent invocation
            return Err(AdminAlreadyExistsError(cluster_key, config.username))
        case Err(error):
            return Err(UserCreateError(cluster_key, config.username, config.group, _describe(error)))
        case Ok(user):
            pass

    saga.push(
        f"user '{user.id}' in group '{config.group}'",
        lambda: client.delete_user(cluster.id, config.group, user.id),
    )
    saga.advance(SagaState.USER_CREATED)

    if lookup.provider is None:
        logger.debug("Adding '%s' idp to cluster '%s'", config.provider_name, cluster_key)
        spec = HtpasswdProviderSpec(
            name=config.provider_name,
            users=((config.username, password),),
        )
        match client.create_identity_provider(cluster.id, spec):
            case Err(error):
                return Err(
                    ProviderCreateError(
                        cluster_key,
                        config.provider_name,
                        _describe(error),
                        _compensation_error(cluster_key, saga.rollback()),
                    )
                )
            case Ok(_):
                pass
    else:
        provider = lookup.provider
        logger.debug(
            "Cluster has an HTPasswd IDP '%s', will add '%s' to it", provider.name, config.username
        )
        match client.add_htpasswd_user(config.username, password, cluster.id, provider.id):
            case Err(error):
                return Err(
                    ProviderUpdateError(
                        cluster_key,
                        provider.name,
                        config.username,
                        _describe(error),
                        _compensation_error(cluster_key, saga.rollback()),
                    )
                )
            case Ok(_):
                pass

    saga.advance(SagaState.PROVIDER_ENSURED)
    return Ok(
        AdminCredential(
            api_url=cluster.api_url,
            username=config.username,
            password=password,
            password_supplied=password_supplied,
        )
    )
