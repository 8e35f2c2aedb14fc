"""API v1 query 参数解析工具.

约束:
- 仅用于 API 层的 query params(`request.args`)
- 通过 `flask_restx.reqparse.RequestParser` 统一解析并配合 `@ns.expect(parser)`
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Final

from flask_restx import reqparse

_DEFAULT_BUNDLE_ERRORS: Final[bool] = True
_TRUTHY: Final[frozenset[str]] = frozenset({"true", "1", "yes", "on"})
_FALSEY: Final[frozenset[str]] = frozenset({"false", "0", "no", "off"})


def new_parser(*, bundle_errors: bool = _DEFAULT_BUNDLE_ERRORS) -> reqparse.RequestParser:
    """构造统一配置的 RequestParser."""
    return reqparse.RequestParser(bundle_errors=bundle_errors)


def bool_with_default(default: bool) -> Callable[[Any], bool]:
    """构造布尔解析器,兼容常见 truthy/falsey 字符串."""

    def _convert(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in _TRUTHY:
            return True
        if normalized in _FALSEY:
            return False
        return default

    return _convert


def present_args(parsed: Mapping[str, Any]) -> dict[str, Any]:
    """丢弃未提供(None)的参数, 便于交给 service 层 schema 校验."""
    return {key: value for key, value in parsed.items() if value is not None}


def definition_list_parser(*names: str) -> reqparse.RequestParser:
    """定义列表的筛选参数(category/search/type/collection 的子集)."""
    descriptions = {
        "category": "分类(精确匹配)",
        "search": "名称关键字(不区分大小写)",
        "type": "布局类型",
        "collection": "集合名称",
    }
    parser = new_parser()
    for name in names:
        parser.add_argument(name, type=str, location="args", required=False, help=descriptions[name])
    return parser
