"""Utility functions for fan-identity."""

from .validation import validate_identity_data

__all__ = ["validate_identity_data"]
