"""OCM admin CLI - cluster admin provisioning and IAM role links."""

__version__ = "0.1.0"
