"""
Shared utilities for the item picker API.

This module contains logging, error types and request validation used
across multiple API endpoints.
"""
from .errors import ApiError, ErrorCode
from .validation import coerce_id, require_id_list

__all__ = [
    "ApiError",
    "ErrorCode",
    "coerce_id",
    "require_id_list",
]
