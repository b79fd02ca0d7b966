"""Tests for request validation helpers."""

import pytest

from api.shared.errors import ApiError, ErrorCode
from api.shared.validation import (
    coerce_id,
    parse_exclude_ids,
    parse_filter_id,
    parse_int_param,
    require_id_list,
)


class TestCoerceId:
    @pytest.mark.parametrize("value,expected", [(3, 3), (-2, -2), (4.0, 4)])
    def test_valid(self, value, expected):
        assert coerce_id(value) == expected

    @pytest.mark.parametrize("value", [True, False, "3", None, 2.5, float("nan"), [1]])
    def test_invalid(self, value):
        assert coerce_id(value) is None


class TestRequireIdList:
    def test_returns_ints(self):
        assert require_id_list([1, 2.0, 3], "ids") == [1, 2, 3]

    def test_shape_code(self):
        with pytest.raises(ApiError) as exc_info:
            require_id_list({"a": 1}, "order", shape_code=ErrorCode.INVALID_ORDER)
        assert exc_info.value.code is ErrorCode.INVALID_ORDER
        assert exc_info.value.status_code == 400

    def test_empty_rejected_when_required(self):
        with pytest.raises(ApiError) as exc_info:
            require_id_list([], "ids", allow_empty=False)
        assert exc_info.value.code is ErrorCode.EMPTY_ARRAY

    def test_invalid_entries_are_reported(self):
        with pytest.raises(ApiError) as exc_info:
            require_id_list([1, "a", None], "ids")
        assert exc_info.value.to_dict() == {
            "error": "All ids must be valid integers",
            "code": "INVALID_IDS",
            "invalidIds": ["a", None],
        }


class TestQueryParsing:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, None),
            ("", None),
            ("0", None),
            ("abc", None),
            ("12", "12"),
            ("012", "12"),
            ("Infinity", "Infinity"),
            ("-Infinity", "-Infinity"),
            ("inf", None),
            ("NaN", None),
        ],
    )
    def test_filter_id(self, raw, expected):
        assert parse_filter_id(raw) == expected

    def test_exclude_ids_json(self):
        assert parse_exclude_ids(["[1, 2, \"x\"]"]) == [1, 2]

    def test_exclude_ids_single_value(self):
        assert parse_exclude_ids(["7"]) == [7]

    def test_exclude_ids_repeated(self):
        assert parse_exclude_ids(["1", "oops", "3"]) == [1, 3]

    def test_exclude_ids_empty(self):
        assert parse_exclude_ids([]) == []

    def test_missing_int_param_uses_default(self):
        assert parse_int_param(None, 50, ErrorCode.INVALID_LIMIT, "bad limit") == 50

    def test_empty_int_param_reads_as_zero(self):
        assert parse_int_param("", 50, ErrorCode.INVALID_LIMIT, "bad limit") == 0
