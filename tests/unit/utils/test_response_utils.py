"""
响应工具函数单元测试
"""

import re
from typing import Any

import pytest
from flask import Flask
from werkzeug.exceptions import NotFound

from formloom.constants.system_constants import ErrorCategory, ErrorSeverity, SuccessMessages
from formloom.errors import (
    DuplicateNameError,
    InvalidEnumError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from formloom.utils.logging.error_adapter import get_error_suggestions
from formloom.utils.response_utils import (
    jsonify_unified_error,
    jsonify_unified_success,
    unified_error_response,
    unified_success_response,
)


@pytest.fixture
def flask_app() -> Any:
    """构造临时 Flask 应用，供 jsonify 系列函数使用"""
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.mark.unit
def test_unified_success_response_default():
    """默认成功响应结构包含必要字段"""
    payload, status = unified_success_response()

    assert status == 200
    assert payload["success"] is True
    assert payload["error"] is False
    assert payload["message"] == SuccessMessages.OPERATION_SUCCESS
    assert re.match(r"\d{4}-\d{2}-\d{2}T", payload["timestamp"])
    assert "data" not in payload


@pytest.mark.unit
def test_unified_success_response_with_data():
    """成功响应包含 data 与 meta"""
    payload, status = unified_success_response(data=["crm"], meta={"total": 1}, message="操作完成", status=201)

    assert status == 201
    assert payload["data"] == ["crm"]
    assert payload["meta"] == {"total": 1}
    assert payload["message"] == "操作完成"


@pytest.mark.unit
def test_jsonify_unified_success(flask_app: Any):
    """jsonify 版本的成功响应可直接返回 HTTP Response"""
    with flask_app.app_context():
        response, status = jsonify_unified_success(data={"key": "value"})

        assert status == 200
        assert response.get_json()["data"] == {"key": "value"}


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "expected_status", "expected_code"),
    [
        (ValidationError("参数错误"), 400, "VALIDATION_ERROR"),
        (InvalidEnumError("layoutType 非法", extra={"field": "layoutType"}), 400, "INVALID_ENUM"),
        (NotFoundError("模板不存在"), 404, "RESOURCE_NOT_FOUND"),
        (DuplicateNameError("模板名称已存在: Address"), 409, "DUPLICATE_NAME"),
        (StorageUnavailableError(), 503, "STORAGE_UNAVAILABLE"),
    ],
)
def test_unified_error_response_maps_taxonomy(error, expected_status: int, expected_code: str):
    """错误分类映射到 HTTP 状态码与 message_code"""
    payload, status = unified_error_response(error)

    assert status == expected_status
    assert payload["success"] is False
    assert payload["error"] is True
    assert payload["message_code"] == expected_code


@pytest.mark.unit
def test_unified_error_response_carries_field_in_extra():
    """出错字段通过 extra.field 暴露"""
    payload, _ = unified_error_response(ValidationError("参数错误", extra={"field": "fields.0.options"}))

    assert payload["category"] == ErrorCategory.VALIDATION.value
    assert payload["severity"] == ErrorSeverity.LOW.value
    assert payload["recoverable"] is True
    assert payload["extra"] == {"field": "fields.0.options"}


@pytest.mark.unit
def test_jsonify_unified_error_keeps_http_exception_code(flask_app: Any):
    """werkzeug HTTPException 保留自身状态码"""
    with flask_app.test_request_context("/api/v1/missing"):
        response, status = jsonify_unified_error(NotFound())

        assert status == 404
        assert response.get_json()["error"] is True


@pytest.mark.unit
def test_error_categories_are_the_ones_errors_can_carry():
    """错误分类只保留异常实际会使用的取值, 且每个分类都有对应建议"""
    assert {category.value for category in ErrorCategory} == {"validation", "business", "database", "system"}
    for category in ErrorCategory:
        assert get_error_suggestions(category)
