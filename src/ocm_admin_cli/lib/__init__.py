"""Shared building blocks: results, errors, remote clients."""
