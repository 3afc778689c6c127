"""Tests for ServiceResult, ServiceError and Issue."""

import json

import pytest
from pydantic import ValidationError

from pbxwrite.services.result import ENCODE_FAILED, Issue, ServiceError, ServiceResult


def _issue(message: str, severity: str = "warning") -> Issue:
    return Issue(category="root_object", severity=severity, message=message)  # type: ignore[arg-type]


class TestServiceResult:
    def test_success(self) -> None:
        result = ServiceResult.success("render", {"length": 3})
        assert result.ok is True
        assert result.op == "render"
        assert result.data == {"length": 3}
        assert result.issues == []
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure(self) -> None:
        error = ServiceError(code=ENCODE_FAILED, message="nope", value_type="list")
        result = ServiceResult.failure("render", error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "ENCODE_FAILED"
        assert result.data == {}

    def test_warnings_are_issue_messages_in_order(self) -> None:
        result = ServiceResult.success(
            "render", issues=[_issue("first"), _issue("second", severity="error")]
        )
        assert result.warnings == ["first", "second"]

    def test_json_serialization(self) -> None:
        result = ServiceResult.success("check", {"count": 1}, issues=[_issue("No root object set")])
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["count"] == 1
        assert parsed["issues"][0]["message"] == "No root object set"
        assert parsed["issues"][0]["object_id"] is None

    def test_frozen(self) -> None:
        result = ServiceResult.success("test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestIssue:
    def test_reference_fields_default_to_none(self) -> None:
        issue = _issue("x")
        assert (issue.object_id, issue.field, issue.target_id) == (None, None, None)

    def test_unknown_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _issue("x", severity="fatal")


class TestServiceError:
    def test_value_type_optional(self) -> None:
        assert ServiceError(code="E", message="bad").value_type is None
