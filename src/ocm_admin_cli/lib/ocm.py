"""OCM control-plane client.

OcmContext is created once at CLI entry and passed to all workflows.
OcmClient wraps an httpx.Client: one method per remote call, no retries,
every failure classified into an ApiError. Workflows depend only on the
ControlPlane protocol so tests can substitute an in-memory fake.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Protocol

import httpx

from ocm_admin_cli import __version__
from ocm_admin_cli.lib.errors import ApiError, ErrorKind
from ocm_admin_cli.lib.result import Err, Ok, Result
from ocm_admin_cli.models import (
    Cluster,
    CurrentAccount,
    HtpasswdProviderSpec,
    HtpasswdUser,
    IdentityProvider,
    Label,
    LabelScope,
    User,
)

logger = logging.getLogger(__name__)

CLUSTERS_MGMT = "/api/clusters_mgmt/v1"
ACCOUNTS_MGMT = "/api/accounts_mgmt/v1"

TERMS_REQUIRED_CODE = "CLUSTERS-MGMT-451"
TERMS_REQUIRED_MESSAGE = (
    "You must accept the Terms and Conditions in order to continue.\n"
    "Go to https://www.redhat.com/wapps/tnc/ackrequired?site=ocm&event=register\n"
    "Once you accept the terms, you will need to retry the action that was blocked."
)


class ControlPlane(Protocol):
    """Remote operations used by the admin and role-link workflows."""

    def get_cluster(self, cluster_key: str) -> Result[Cluster | None, ApiError]: ...

    def create_user(self, cluster_id: str, group: str, user_id: str) -> Result[User, ApiError]: ...

    def delete_user(self, cluster_id: str, group: str, user_id: str) -> Result[None, ApiError]: ...

    def get_identity_providers(
        self, cluster_id: str
    ) -> Result[list[IdentityProvider], ApiError]: ...

    def get_htpasswd_users(
        self, cluster_id: str, provider_id: str
    ) -> Result[list[HtpasswdUser], ApiError]: ...

    def create_identity_provider(
        self, cluster_id: str, spec: HtpasswdProviderSpec
    ) -> Result[IdentityProvider, ApiError]: ...

    def add_htpasswd_user(
        self, username: str, password: str, cluster_id: str, provider_id: str
    ) -> Result[None, ApiError]: ...

    def get_label(self, scope: LabelScope, key: str) -> Result[Label, ApiError]: ...

    def add_label(self, scope: LabelScope, key: str, value: str) -> Result[None, ApiError]: ...

    def update_label(self, scope: LabelScope, key: str, value: str) -> Result[None, ApiError]: ...

    def delete_label(self, scope: LabelScope, key: str) -> Result[None, ApiError]: ...

    def get_current_account(self) -> Result[CurrentAccount, ApiError]: ...


def _error_reason(response: httpx.Response) -> str:
    """Pull the human-readable reason out of an OCM error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if not isinstance(body, dict):
        return response.reason_phrase
    if body.get("code") == TERMS_REQUIRED_CODE:
        return TERMS_REQUIRED_MESSAGE
    return body.get("reason") or response.reason_phrase


def api_error(operation: str, response: httpx.Response) -> ApiError:
    return ApiError(
        operation=operation,
        status=response.status_code,
        kind=ErrorKind.from_status(response.status_code),
        reason=_error_reason(response),
    )


class OcmClient:
    """Synchronous client for the clusters_mgmt and accounts_mgmt APIs."""

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Result[httpx.Response, ApiError]:
        # Bodies may carry passwords - only the path is logged
        logger.debug("%s %s", method, path)
        try:
            response = self._http.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            return Err(ApiError(operation, 0, ErrorKind.OTHER, str(e)))

        if response.is_error:
            error = api_error(operation, response)
            logger.debug("%s %s -> %d: %s", method, path, response.status_code, error.reason)
            return Err(error)
        return Ok(response)

    # -------------------------------------------------------------------------
    # Clusters
    # -------------------------------------------------------------------------

    def get_cluster(self, cluster_key: str) -> Result[Cluster | None, ApiError]:
        """Find a cluster by id or name. Ok(None) when nothing matches.

        cluster_key must already be validated, it is interpolated into the
        search expression.
        """
        match self._request(
            "GET",
            f"{CLUSTERS_MGMT}/clusters",
            f"get cluster '{cluster_key}'",
            params={"search": f"id = '{cluster_key}' or name = '{cluster_key}'", "size": 1},
        ):
            case Err() as e:
                return e
            case Ok(response):
                items = response.json().get("items") or []
                return Ok(Cluster.from_api(items[0]) if items else None)

    def create_user(self, cluster_id: str, group: str, user_id: str) -> Result[User, ApiError]:
        match self._request(
            "POST",
            f"{CLUSTERS_MGMT}/clusters/{cluster_id}/groups/{group}/users",
            f"add user '{user_id}' to group '{group}' of cluster '{cluster_id}'",
            json={"id": user_id},
        ):
            case Err() as e:
                return e
            case Ok(response):
                return Ok(User.from_api(response.json()))

    def delete_user(self, cluster_id: str, group: str, user_id: str) -> Result[None, ApiError]:
        match self._request(
            "DELETE",
            f"{CLUSTERS_MGMT}/clusters/{cluster_id}/groups/{group}/users/{user_id}",
            f"delete user '{user_id}' from group '{group}' of cluster '{cluster_id}'",
        ):
            case Err() as e:
                return e
            case Ok(_):
                return Ok(None)

    # -------------------------------------------------------------------------
    # Identity providers
    # -------------------------------------------------------------------------

    def get_identity_providers(self, cluster_id: str) -> Result[list[IdentityProvider], ApiError]:
        match self._request(
            "GET",
            f"{CLUSTERS_MGMT}/clusters/{cluster_id}/identity_providers",
            f"list identity providers of cluster '{cluster_id}'",
        ):
            case Err() as e:
                return e
            case Ok(response):
                items = response.json().get("items") or []
                return Ok([IdentityProvider.from_api(item) for item in items])

    def get_htpasswd_users(
        self, cluster_id: str, provider_id: str
    ) -> Result[list[HtpasswdUser], ApiError]:
        match self._request(
            "GET",
            f"{CLUSTERS_MGMT}/clusters/{cluster_id}/identity_providers/{provider_id}/htpasswd_users",
            f"list users of identity provider '{provider_id}' of cluster '{cluster_id}'",
        ):
            case Err() as e:
                return e
            case Ok(response):
                items = response.json().get("items") or []
                return Ok([HtpasswdUser.from_api(item) for item in items])

    def create_identity_provider(
        self, cluster_id: str, spec: HtpasswdProviderSpec
    ) -> Result[IdentityProvider, ApiError]:
        match self._request(
            "POST",
            f"{CLUSTERS_MGMT}/clusters/{cluster_id}/identity_providers",
            f"create identity provider '{spec.name}' on cluster '{cluster_id}'",
            json=spec.to_api(),
        ):
            case Err() as e:
                return e
            case Ok(response):
                return Ok(IdentityProvider.from_api(response.json()))

    def add_htpasswd_user(
        self, username: str, password: str, cluster_id: str, provider_id: str
    ) -> Result[None, ApiError]:
        match self._request(
            "POST",
            f"{CLUSTERS_MGMT}/clusters/{cluster_id}/identity_providers/{provider_id}/htpasswd_users",
            f"add user '{username}' to identity provider '{provider_id}' of cluster '{cluster_id}'",
            json={"username": username, "password": password},
        ):
            case Err() as e:
                return e
            case Ok(_):
                return Ok(None)

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------

    def _labels_path(self, scope: LabelScope) -> str:
        return f"{ACCOUNTS_MGMT}/{scope.collection}/{scope.id}/labels"

    def get_label(self, scope: LabelScope, key: str) -> Result[Label, ApiError]:
        """Fetch a label. A missing label is Err with kind NOT_FOUND."""
        match self._request(
            "GET",
            f"{self._labels_path(scope)}/{key}",
            f"get label '{key}' of {scope}",
        ):
            case Err() as e:
                return e
            case Ok(response):
                body = response.json()
                return Ok(Label(key=body.get("key", key), value=body.get("value") or ""))

    def add_label(self, scope: LabelScope, key: str, value: str) -> Result[None, ApiError]:
        match self._request(
            "POST",
            self._labels_path(scope),
            f"add label '{key}' to {scope}",
            json={"key": key, "value": value},
        ):
            case Err() as e:
                return e
            case Ok(_):
                return Ok(None)

    def update_label(self, scope: LabelScope, key: str, value: str) -> Result[None, ApiError]:
        match self._request(
            "PATCH",
            f"{self._labels_path(scope)}/{key}",
            f"update label '{key}' of {scope}",
            json={"key": key, "value": value},
        ):
            case Err() as e:
                return e
            case Ok(_):
                return Ok(None)

    def delete_label(self, scope: LabelScope, key: str) -> Result[None, ApiError]:
        match self._request(
            "DELETE",
            f"{self._labels_path(scope)}/{key}",
            f"delete label '{key}' of {scope}",
        ):
            case Err() as e:
                return e
            case Ok(_):
                return Ok(None)

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def get_current_account(self) -> Result[CurrentAccount, ApiError]:
        match self._request("GET", f"{ACCOUNTS_MGMT}/current_account", "get current account"):
            case Err() as e:
                return e
            case Ok(response):
                return Ok(CurrentAccount.from_api(response.json()))


@dataclass
class OcmContext:
    """OCM connection. Created once at CLI entry.

    The HTTP client is lazily initialized on first access via cached_property.

    Example:
        ctx = OcmContext(url="https://api.openshift.com", token=token)
        ctx.client.get_cluster("mycluster")
    """

    url: str
    token: str | None = None
    timeout: float = 30.0

    @cached_property
    def http(self) -> httpx.Client:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"ocm-admin/{__version__}",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return httpx.Client(base_url=self.url, headers=headers, timeout=self.timeout)

    @cached_property
    def client(self) -> OcmClient:
        return OcmClient(self.http)

    def close(self) -> None:
        if "http" in self.__dict__:
            self.http.close()
