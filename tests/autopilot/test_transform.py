"""Tests for payload key helpers."""

from __future__ import annotations

import pytest

from autopilot.transform import add_prefix_to_keys, rename_fields, snake_case_keys, to_snake_case


class TestToSnakeCase:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("OrganizationUnitId", "organization_unit_id"),
            ("instanceId", "instance_id"),
            ("HTTPStatus", "http_status"),
            ("already_snake", "already_snake"),
            ("Id", "id"),
            ("", ""),
        ],
    )
    def test_conversion(self, name, expected):
        assert to_snake_case(name) == expected


def test_snake_case_keys_recursive():
    data = {"Outer": {"InnerKey": [{"LeafValue": 1}]}, "Plain": "CamelValue"}
    assert snake_case_keys(data) == {
        "outer": {"inner_key": [{"leaf_value": 1}]},
        "plain": "CamelValue",
    }


def test_rename_fields():
    assert rename_fields({"limit": 10, "prefix": "/"}, {"limit": "takeHint"}) == {
        "takeHint": 10,
        "prefix": "/",
    }


def test_add_prefix_to_keys():
    result = add_prefix_to_keys(
        {"filter": "x", "$top": 5, "expansionLevel": 1}, "$", ["filter", "$top"]
    )
    assert result == {"$filter": "x", "$top": 5, "expansionLevel": 1}
