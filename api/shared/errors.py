"""
API error types for the item picker backend.

Validation helpers raise ApiError; main.py renders it as
``{"error": message, "code": code, ...extra}``.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException


class ErrorCode(str, Enum):
    """Machine-readable error codes returned to clients."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_IDS = "INVALID_IDS"
    INVALID_SELECTED_IDS = "INVALID_SELECTED_IDS"
    INVALID_ORDER = "INVALID_ORDER"
    INVALID_ORDER_IDS = "INVALID_ORDER_IDS"
    EMPTY_ARRAY = "EMPTY_ARRAY"
    INVALID_OFFSET = "INVALID_OFFSET"
    INVALID_LIMIT = "INVALID_LIMIT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ApiError(HTTPException):
    """HTTP error carrying an error code and optional extra payload fields."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 400,
        extra: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.extra = extra or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.detail, "code": self.code.value, **self.extra}
