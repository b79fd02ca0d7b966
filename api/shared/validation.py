"""
Request validation helpers.

Request bodies arrive as loosely typed JSON. These helpers turn them into
plain ``List[int]`` values before anything reaches the store, raising
ApiError with the endpoint-specific code otherwise.
"""

import json
import math
from typing import Any, List, Optional

from .errors import ApiError, ErrorCode


def coerce_id(value: Any) -> Optional[int]:
    """Return value as an int id, or None if it is not one.

    Integral floats are accepted (JSON clients may send ``3.0``); booleans
    and strings are not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def require_id_list(
    value: Any,
    field_name: str,
    shape_code: ErrorCode = ErrorCode.INVALID_INPUT,
    entry_code: ErrorCode = ErrorCode.INVALID_IDS,
    allow_empty: bool = True,
) -> List[int]:
    """Validate a JSON array of ids.

    Args:
        value: Raw body field
        field_name: Name used in error messages
        shape_code: Code raised when value is not an array
        entry_code: Code raised when an entry is not an integer
        allow_empty: Whether an empty array is accepted

    Raises:
        ApiError: On any violation
    """
    if not isinstance(value, list):
        raise ApiError(shape_code, f"{field_name} must be an array")

    if not value and not allow_empty:
        raise ApiError(ErrorCode.EMPTY_ARRAY, f"{field_name} array cannot be empty")

    ids = []
    invalid = []
    for entry in value:
        item_id = coerce_id(entry)
        if item_id is None:
            invalid.append(entry)
        else:
            ids.append(item_id)

    if invalid:
        raise ApiError(
            entry_code,
            f"All {field_name} must be valid integers",
            extra={"invalidIds": invalid},
        )
    return ids


def parse_int_param(raw: Optional[str], default: int, code: ErrorCode, message: str) -> int:
    """Parse an integer query parameter, raising ApiError with code on failure.

    A missing parameter gives ``default``; one sent empty reads as 0.
    """
    if raw is None:
        return default
    if raw.strip() == "":
        return 0
    try:
        number = float(raw)
    except ValueError:
        raise ApiError(code, message) from None
    if not math.isfinite(number) or not number.is_integer():
        raise ApiError(code, message)
    return int(number)


def parse_filter_id(raw: Optional[str]) -> Optional[str]:
    """Normalize the filterId query parameter.

    Empty, non-numeric and zero values disable filtering. Numeric values are
    reduced to their decimal form (``"012"`` filters on ``"12"``); infinite
    values filter on ``"Infinity"`` and match nothing.
    """
    if raw is None or raw.strip() == "":
        return None
    try:
        number = float(raw)
    except ValueError:
        return None
    if math.isinf(number):
        unsigned = raw.strip().lstrip("+-")
        if unsigned.lower() in ("inf", "infinity") and unsigned != "Infinity":
            return None
        return "Infinity" if number > 0 else "-Infinity"
    if math.isnan(number) or number == 0:
        return None
    if number.is_integer():
        return str(int(number))
    return str(number)


def parse_exclude_ids(values: List[str]) -> List[int]:
    """Parse excludeSelectedIds from repeated values or a JSON array string.

    Entries that are not integers are dropped.
    """
    if not values:
        return []

    raw_entries: List[Any]
    if len(values) == 1:
        try:
            decoded = json.loads(values[0])
        except ValueError:
            decoded = values[0]
        raw_entries = decoded if isinstance(decoded, list) else [decoded]
    else:
        raw_entries = list(values)

    ids = []
    for entry in raw_entries:
        if isinstance(entry, str):
            try:
                entry = float(entry)
            except ValueError:
                continue
        item_id = coerce_id(entry)
        if item_id is not None:
            ids.append(item_id)
    return ids
