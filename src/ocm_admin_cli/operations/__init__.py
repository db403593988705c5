"""Operations layer - single remote reads/writes that return Result types."""

from ocm_admin_cli.operations.idp import HtpasswdLookup, find_htpasswd_provider
from ocm_admin_cli.operations.labels import StoredLabelSet, read_label_set, write_label_set

__all__ = [
    # idp
    "HtpasswdLookup",
    "find_htpasswd_provider",
    # labels
    "StoredLabelSet",
    "read_label_set",
    "write_label_set",
]
