"""Label operations - read and write a LabelSet on an account or organization."""

from dataclasses import dataclass

from ocm_admin_cli.lib.errors import ApiError, ErrorKind
from ocm_admin_cli.lib.labelset import LabelSet
from ocm_admin_cli.lib.ocm import ControlPlane
from ocm_admin_cli.lib.result import Err, Ok, Result
from ocm_admin_cli.models import LabelScope


@dataclass(frozen=True, slots=True)
class StoredLabelSet:
    """Label contents as read, plus whether the label exists remotely."""

    scope: LabelScope
    values: LabelSet
    exists: bool
    raw: str = ""


def read_label_set(client: ControlPlane, scope: LabelScope) -> Result[StoredLabelSet, ApiError]:
    """Fetch and decode the scope's role label. A missing label is an empty set."""
    match client.get_label(scope, scope.label_key):
        case Err(ApiError(kind=ErrorKind.NOT_FOUND)):
            return Ok(StoredLabelSet(scope, LabelSet(), exists=False))
        case Err() as e:
            return e
        case Ok(label):
            return Ok(
                StoredLabelSet(scope, LabelSet.decode(label.value), exists=True, raw=label.value)
            )


def write_label_set(
    client: ControlPlane, stored: StoredLabelSet, values: LabelSet
) -> Result[None, ApiError]:
    """Persist values over what was read.

    Empty sets delete the label rather than store an empty value. Updating
    or deleting a label that vanished since the read fails with NOT_FOUND.
    """
    scope = stored.scope
    encoded = values.encode()
    if encoded is None:
        if not stored.exists:
            return Ok(None)
        return client.delete_label(scope, scope.label_key)
    if stored.exists:
        return client.update_label(scope, scope.label_key, encoded)
    return client.add_label(scope, scope.label_key, encoded)
