"""Utility functions for brokerledger."""

from brokerledger.utils.timestamps import local_to_utc, resolve_timezone

__all__ = ["local_to_utc", "resolve_timezone"]
