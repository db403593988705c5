"""Input validators for cluster-facing commands.

Pure functions. Predicates return bool; count validators return an error
message, or None when the input is acceptable.
"""

import re

# Identifier or name given by the user; interpolated into search queries
CLUSTER_KEY_RE = re.compile(r"^(\w|-)+$")

# DNS-1035 label: lower case alphanumerics or '-', starts with a letter
CLUSTER_NAME_RE = re.compile(r"^[a-z]([-a-z0-9]{0,13}[a-z0-9])?$")

BAD_USERNAME_RE = re.compile(r"^(~|\.?\.|.*[:/%].*)$")

BYO_VPC_SINGLE_AZ_SUBNETS = 2
BYO_VPC_MULTI_AZ_SUBNETS = 6
PRIVATE_LINK_SINGLE_AZ_SUBNETS = 1
PRIVATE_LINK_MULTI_AZ_SUBNETS = 3

SINGLE_AZ_COUNT = 1
MULTI_AZ_COUNT = 3


def is_valid_cluster_key(cluster_key: str) -> bool:
    return bool(CLUSTER_KEY_RE.match(cluster_key))


def is_valid_cluster_name(name: str) -> bool:
    return bool(CLUSTER_NAME_RE.match(name))


def is_valid_username(username: str) -> bool:
    return bool(username) and not BAD_USERNAME_RE.match(username)


def validate_subnets_count(multi_az: bool, private_link: bool, count: int) -> str | None:
    """Check the number of subnets supplied for a BYO-VPC cluster."""
    if private_link:
        expected = PRIVATE_LINK_MULTI_AZ_SUBNETS if multi_az else PRIVATE_LINK_SINGLE_AZ_SUBNETS
        kind = "multi-AZ private link" if multi_az else "single AZ private link"
    else:
        expected = BYO_VPC_MULTI_AZ_SUBNETS if multi_az else BYO_VPC_SINGLE_AZ_SUBNETS
        kind = "multi-AZ" if multi_az else "single AZ"

    if count != expected:
        return (
            f"The number of subnets for a {kind} cluster should be {expected}, "
            f"instead received: {count}"
        )
    return None


def validate_availability_zones_count(multi_az: bool, count: int) -> str | None:
    expected = MULTI_AZ_COUNT if multi_az else SINGLE_AZ_COUNT
    if count != expected:
        kind = "multi AZ" if multi_az else "single AZ"
        return (
            f"The number of availability zones for a {kind} cluster should be {expected}, "
            f"instead received: {count}"
        )
    return None
