"""Shared CLI utilities.

Common options, context creation, error handling, output formatting.
"""

import json
import sys
from collections.abc import Callable
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, ParamSpec, TypeVar

import click

from ocm_admin_cli.config import DEFAULT_OCM_URL, DEFAULT_REGION, DEFAULT_TIMEOUT
from ocm_admin_cli.lib.aws import AwsContext
from ocm_admin_cli.lib.errors import (
    AdminAlreadyExistsError,
    ApiError,
    ClusterNotFoundError,
    ClusterNotReadyError,
    CompensationError,
    ErrorKind,
    InvalidArnError,
    InvalidClusterKeyError,
    PasswordGenerationError,
    ProviderCreateError,
    ProviderUpdateError,
    RoleLinkConflictError,
    RoleNotLinkedError,
    UserCreateError,
)
from ocm_admin_cli.lib.ocm import OcmContext
from ocm_admin_cli.lib.result import Err, Ok, Result

# Type variables for decorators
P = ParamSpec("P")
T = TypeVar("T")


# Common CLI options as decorators
def ocm_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --url, --token and --timeout options for the OCM API."""
    fn = click.option(
        "--timeout",
        default=DEFAULT_TIMEOUT,
        show_default=True,
        type=float,
        help="OCM API request timeout in seconds",
    )(fn)
    fn = click.option(
        "--token",
        envvar="OCM_TOKEN",
        default=None,
        help="OCM access token [env: OCM_TOKEN]",
    )(fn)
    fn = click.option(
        "--url",
        envvar="OCM_URL",
        default=DEFAULT_OCM_URL,
        show_default=True,
        help="OCM API URL [env: OCM_URL]",
    )(fn)
    return fn


def cluster_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --cluster/-c option."""
    return click.option(
        "--cluster",
        "-c",
        "cluster_key",
        envvar="OCM_CLUSTER",
        required=True,
        help="Name or ID of the cluster",
    )(fn)


def region_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --region/-r option."""
    return click.option(
        "--region",
        "-r",
        default=DEFAULT_REGION,
        show_default=True,
        help="AWS region",
    )(fn)


def profile_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --profile option."""
    return click.option(
        "--profile",
        default=None,
        help="AWS profile",
    )(fn)


def json_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --json flag for JSON output."""
    return click.option(
        "--json",
        "as_json",
        is_flag=True,
        help="Output as JSON",
    )(fn)


def organization_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --organization-id option."""
    return click.option(
        "--organization-id",
        default=None,
        help="OCM organization ID (defaults to the current organization)",
    )(fn)


def account_option(fn: Callable[P, T]) -> Callable[P, T]:
    """Add --account-id option."""
    return click.option(
        "--account-id",
        default=None,
        help="OCM account ID (defaults to the current account)",
    )(fn)


def aws_options(fn: Callable[P, T]) -> Callable[P, T]:
    """Add all AWS-related options (region, profile)."""
    fn = region_option(fn)
    fn = profile_option(fn)
    return fn


def make_context(url: str, token: str | None, timeout: float = DEFAULT_TIMEOUT) -> OcmContext:
    """Create OcmContext from CLI options."""
    return OcmContext(url=url, token=token, timeout=timeout)


def make_aws_context(region: str, profile: str | None) -> AwsContext:
    """Create AwsContext from CLI options."""
    return AwsContext(region=region, profile=profile)


def handle_result(result: Result[T, Any], success_message: str | None = None) -> T:
    """Handle a Result, exiting on error with appropriate message.

    On Ok: returns the value, optionally prints success message
    On Err: prints error and exits with code 1
    """
    match result:
        case Ok(value):
            if success_message:
                click.secho(success_message, fg="green", bold=True)
            return value
        case Err(error):
            handle_error(error)
            sys.exit(1)  # Should never reach here, but for type checker


def handle_error(error: Any) -> None:
    """Print error message (and any failed rollback) and exit."""
    message = _format_error(error)
    click.secho(f"Error: {message}", fg="red", err=True)

    compensation = getattr(error, "compensation", None)
    if compensation is not None:
        click.secho(f"Warning: {_format_error(compensation)}", fg="yellow", err=True)
    sys.exit(1)


def _rollback_note(compensation: CompensationError | None) -> str:
    if compensation is None:
        return " The admin user was removed again, the cluster is unchanged."
    return ""


def _format_error(error: Any) -> str:
    """Format error for display."""
    match error:
        case ApiError(operation, status, ErrorKind.FORBIDDEN, reason):
            return f"Permission denied to {operation} (HTTP {status}): {reason}"

        case ApiError(operation, 0, _, reason):
            return f"Failed to {operation}: {reason}"

        case ApiError(operation, status, _, reason):
            return f"Failed to {operation} (HTTP {status}): {reason}"

        case InvalidArnError(value, reason):
            return f"Invalid role ARN '{value}': {reason}"

        case InvalidClusterKeyError(cluster_key):
            return (
                f"Cluster name or identifier '{cluster_key}' isn't valid: it must contain "
                "only letters, digits, dashes and underscores."
            )

        case ClusterNotFoundError(cluster_key):
            return f"There is no cluster with identifier or name '{cluster_key}'."

        case ClusterNotReadyError(cluster_key, state):
            return f"Cluster '{cluster_key}' is not yet ready (state: {state})."

        case AdminAlreadyExistsError(cluster_key, username):
            return f"Cluster '{cluster_key}' already has an admin user '{username}'."

        case PasswordGenerationError(reason):
            return f"Failed to generate a random password: {reason}"

        case UserCreateError(cluster_key, username, group, reason):
            return f"Failed to add user '{username}' to group '{group}' of cluster '{cluster_key}': {reason}"

        case ProviderCreateError(cluster_key, provider_name, reason, compensation):
            return (
                f"Failed to add '{provider_name}' identity provider to cluster '{cluster_key}' "
                f"as part of admin flow. Please try again: {reason}.{_rollback_note(compensation)}"
            )

        case ProviderUpdateError(cluster_key, provider_name, username, reason, compensation):
            return (
                f"Failed to add user '{username}' to the HTPasswd identity provider "
                f"'{provider_name}' of cluster '{cluster_key}': {reason}.{_rollback_note(compensation)}"
            )

        case CompensationError(cluster_key, resource, reason):
            return (
                f"Failed to roll back {resource} on cluster '{cluster_key}': {reason}. "
                "Delete it manually before running this command again."
            )

        case RoleLinkConflictError(scope, role_arn, None):
            return (
                f"Could not link role-arn '{role_arn}': the roles linked to {scope} "
                "changed while linking. Check them with 'list' and try again."
            )

        case RoleLinkConflictError(scope, role_arn, existing_arn):
            return (
                f"{scope.capitalize()} already has role-arn '{existing_arn}' linked. "
                f"Only one role can be linked per AWS account, cannot link '{role_arn}'."
            )

        case RoleNotLinkedError(scope, role_arn):
            return f"Role ARN '{role_arn}' is not linked with {scope}."

        case _:
            return str(error)


def to_json(obj: Any) -> str:
    """Convert object to JSON string."""
    return json.dumps(_to_serializable(obj), indent=2)


def _to_serializable(obj: Any) -> Any:
    """Convert object to JSON-serializable form."""
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, dict):
        return {k: _to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_serializable(v) for v in obj]
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_serializable(asdict(obj))
    return str(obj)


def echo_key_value(key: str, value: Any, indent: int = 0) -> None:
    """Print a key-value pair with optional indentation."""
    prefix = "  " * indent
    click.echo(f"{prefix}{key}: {value}")
