"""AWS session management.

AwsContext is only needed to find the AWS account behind the caller's
credentials when linking or checking roles without an explicit account ID.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ocm_admin_cli.lib.errors import ApiError, ErrorKind
from ocm_admin_cli.lib.result import Err, Ok, Result

if TYPE_CHECKING:
    from mypy_boto3_sts import STSClient


@dataclass
class AwsContext:
    """AWS session and clients. Created once at CLI entry.

    Clients are lazily initialized on first access via cached_property.

    Example:
        ctx = AwsContext(region="us-east-1", profile="dev")
        ctx.caller_account_id()
    """

    region: str
    profile: str | None = None

    @cached_property
    def session(self) -> boto3.Session:
        """Boto3 session configured with region and profile."""
        return boto3.Session(region_name=self.region, profile_name=self.profile)

    @cached_property
    def sts(self) -> STSClient:
        return self.session.client("sts")

    def caller_account_id(self) -> Result[str, ApiError]:
        """AWS account ID for the current credentials."""
        try:
            return Ok(self.sts.get_caller_identity()["Account"])
        except ClientError as e:
            code = e.response["Error"]["Code"]
            kind = ErrorKind.FORBIDDEN if code in ("AccessDenied", "ExpiredToken") else ErrorKind.OTHER
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
            return Err(ApiError("get AWS caller identity", status, kind, str(e)))
        except BotoCoreError as e:
            return Err(ApiError("get AWS caller identity", 0, ErrorKind.OTHER, str(e)))
