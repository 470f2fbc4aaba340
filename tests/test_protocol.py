"""Tests for wire types and operation variants."""

from __future__ import annotations

import json

import pytest

from gated_filesystem.exceptions import MissingFieldError, RequestFormatError
from gated_filesystem.protocol import (
    SEND_OPERATIONS,
    CreateDir,
    DeleteDir,
    DeleteFile,
    EditFile,
    ListFiles,
    OperationKind,
    OperationRequest,
    OperationResult,
    ReadFile,
    WriteFile,
)


class TestOperationKind:
    """Tests for OperationKind."""

    def test_wire_names(self):
        assert {k.value for k in OperationKind} == {
            "read-file",
            "list-files",
            "write-file",
            "create-dir",
            "delete-dir",
            "delete-file",
            "edit-file",
        }

    def test_unknown_name(self):
        assert OperationKind.from_name("move-file") is None

    def test_send_operations_are_mutating_subset(self):
        assert SEND_OPERATIONS == {
            OperationKind.WRITE_FILE,
            OperationKind.CREATE_DIR,
            OperationKind.DELETE_FILE,
            OperationKind.DELETE_DIR,
        }


class TestOperationRequest:
    """Tests for decoding requests."""

    def test_from_bytes_minimal(self):
        request = OperationRequest.from_bytes(b'{"operation": "read-file", "path": "/a"}')
        assert request == OperationRequest(operation="read-file", path="/a")

    def test_from_bytes_all_fields(self):
        request = OperationRequest.from_bytes(
            json.dumps(
                {"operation": "edit-file", "path": "/a", "content": None, "old_text": "x", "new_text": "y"}
            ).encode()
        )
        assert request.old_text == "x"
        assert request.new_text == "y"
        assert request.content is None

    def test_missing_field_detail(self):
        with pytest.raises(RequestFormatError) as exc_info:
            OperationRequest.from_bytes(b'{"operation": "read-file"}')
        assert "path" in str(exc_info.value)

    def test_wrong_type_detail(self):
        with pytest.raises(RequestFormatError) as exc_info:
            OperationRequest.from_dict({"operation": "write-file", "path": "/a", "content": ["x"]})
        assert "content" in str(exc_info.value)

    @pytest.mark.parametrize("field", ["path", "content", "old_text", "new_text"])
    def test_lone_surrogate_rejected(self, field):
        data = {"operation": "edit-file", "path": "/a", field: "ok\udc80"}
        with pytest.raises(RequestFormatError) as exc_info:
            OperationRequest.from_dict(data)
        assert field in str(exc_info.value)

    def test_surrogate_pair_accepted(self):
        request = OperationRequest.from_bytes(b'{"operation": "write-file", "path": "/a", "content": "\\ud83d\\ude00"}')
        assert request.content == "\U0001f600"

    def test_deep_nesting(self):
        with pytest.raises(RequestFormatError):
            OperationRequest.from_bytes(b"[" * 100_000 + b"]" * 100_000)

    def test_not_json(self):
        with pytest.raises(RequestFormatError):
            OperationRequest.from_bytes(b"{")

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ({"operation": "read-file", "path": "/a"}, ReadFile("/a")),
            ({"operation": "list-files", "path": "/"}, ListFiles("/")),
            ({"operation": "write-file", "path": "/a", "content": "c"}, WriteFile("/a", "c")),
            ({"operation": "create-dir", "path": "/d"}, CreateDir("/d")),
            ({"operation": "delete-dir", "path": "/d"}, DeleteDir("/d")),
            ({"operation": "delete-file", "path": "/a"}, DeleteFile("/a")),
            (
                {"operation": "edit-file", "path": "/a", "old_text": "o", "new_text": "n"},
                EditFile("/a", "o", "n"),
            ),
        ],
    )
    def test_to_operation(self, data, expected):
        operation = OperationRequest.from_dict(data).to_operation()
        assert operation == expected
        assert operation.kind.value == data["operation"]

    def test_to_operation_ignores_irrelevant_fields(self):
        """Fields another operation needs are dropped from the variant."""
        operation = OperationRequest(operation="read-file", path="/a", content="ignored").to_operation()
        assert operation == ReadFile("/a")

    def test_write_requires_content(self):
        with pytest.raises(MissingFieldError) as exc_info:
            OperationRequest(operation="write-file", path="/a").to_operation()
        assert exc_info.value.message == "Content not provided"
        assert exc_info.value.fields == ("content",)

    def test_edit_requires_both_texts(self):
        with pytest.raises(MissingFieldError) as exc_info:
            OperationRequest(operation="edit-file", path="/a", old_text="x").to_operation()
        assert exc_info.value.message == "Both old_text and new_text must be provided"

    def test_unknown_operation(self):
        with pytest.raises(RequestFormatError):
            OperationRequest(operation="chmod", path="/a").to_operation()


class TestOperationResult:
    """Tests for OperationResult."""

    def test_ok(self):
        assert OperationResult.ok(["a"]).to_dict() == {"success": True, "data": ["a"], "error": None}

    def test_fail(self):
        assert OperationResult.fail("nope").to_dict() == {"success": False, "data": None, "error": "nope"}

    def test_success_cannot_carry_error(self):
        with pytest.raises(ValueError):
            OperationResult(success=True, error="bad")

    def test_failure_cannot_carry_data(self):
        with pytest.raises(ValueError):
            OperationResult(success=False, data="x", error="bad")

    def test_to_bytes_always_has_all_keys(self):
        assert json.loads(OperationResult.ok().to_bytes()) == {"success": True, "data": None, "error": None}

    def test_from_bytes(self):
        result = OperationResult.from_bytes(b'{"success": false, "data": null, "error": "x"}')
        assert result == OperationResult.fail("x")
