"""Tests for specform.commands.picker."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from specform.commands.picker import (
    filter_operations,
    find_operation,
    is_selectable,
    pick_operation,
    selectable_operations,
)
from specform.exceptions import InvalidUsageError
from specform.models import HTTPMethod, ParsedSpec


class TestSelectable:
    def test_by_capability_not_method(self, users_spec: ParsedSpec) -> None:
        labels = [op.label for op in selectable_operations(users_spec.operations)]
        assert labels == [
            "POST    /users",
            "PUT     /users/{userId}",
            "DELETE  /users/{userId}",
            "POST    /events",
            "POST    /logout",
        ]

    def test_multipart_excluded(self, users_spec: ParsedSpec) -> None:
        avatar = next(op for op in users_spec.operations if op.path == "/avatars")
        assert is_selectable(avatar) is False

    def test_bodyless_get_excluded(self, users_spec: ParsedSpec) -> None:
        list_users = find_operation(users_spec.operations, "GET /users")
        assert list_users.request_body is None
        assert is_selectable(list_users) is False

    def test_bodyless_post_offered(self, users_spec: ParsedSpec) -> None:
        logout = find_operation(users_spec.operations, "POST /logout")
        assert logout.request_body is None
        assert is_selectable(logout) is True


class TestFindOperation:
    def test_method_and_path(self, users_spec: ParsedSpec) -> None:
        op = find_operation(users_spec.operations, "post /users")
        assert (op.method, op.path) == (HTTPMethod.POST, "/users")

    def test_bare_path_unique(self, users_spec: ParsedSpec) -> None:
        assert find_operation(users_spec.operations, "/events").method == HTTPMethod.POST

    def test_bare_path_ambiguous(self, users_spec: ParsedSpec) -> None:
        with pytest.raises(InvalidUsageError, match="ambiguous \\(GET, POST\\)"):
            find_operation(users_spec.operations, "/users")

    def test_unknown_method(self, users_spec: ParsedSpec) -> None:
        with pytest.raises(InvalidUsageError, match="Unknown HTTP method 'FETCH'"):
            find_operation(users_spec.operations, "FETCH /users")

    def test_no_match(self, users_spec: ParsedSpec) -> None:
        with pytest.raises(InvalidUsageError, match="No operation matches"):
            find_operation(users_spec.operations, "PATCH /users")


class TestFilterOperations:
    def test_empty_query_keeps_order(self, users_spec: ParsedSpec) -> None:
        assert filter_operations(users_spec.operations, "  ") == users_spec.operations

    def test_subsequence_match(self, users_spec: ParsedSpec) -> None:
        labels = [op.label for op in filter_operations(users_spec.operations, "evnt")]
        assert labels == ["POST    /events"]

    def test_tighter_match_first(self, users_spec: ParsedSpec) -> None:
        ops = filter_operations(users_spec.operations, "put")
        assert ops[0].method == HTTPMethod.PUT

    def test_case_and_whitespace_ignored(self, users_spec: ParsedSpec) -> None:
        ops = filter_operations(users_spec.operations, "DEL ETE")
        assert [op.method for op in ops] == [HTTPMethod.DELETE]

    def test_no_match(self, users_spec: ParsedSpec) -> None:
        assert filter_operations(users_spec.operations, "zzz") == []


class TestPickOperation:
    def test_single_operation_needs_no_prompt(self, users_spec: ParsedSpec) -> None:
        op = users_spec.operations[0]
        with patch("specform.commands.picker.typer.prompt") as prompt:
            assert pick_operation([op]) is op
        prompt.assert_not_called()

    def test_numbered_choice(self, users_spec: ParsedSpec, quiet_output) -> None:
        ops = users_spec.operations[:3]
        with patch("specform.commands.picker.typer.prompt", side_effect=[9, 2]) as prompt:
            assert pick_operation(ops) is ops[1]
        assert prompt.call_count == 2

    def test_empty(self) -> None:
        with pytest.raises(InvalidUsageError):
            pick_operation([])
