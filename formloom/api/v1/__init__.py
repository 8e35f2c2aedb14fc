"""API v1 (Flask-RESTX).

该包仅承载对外 JSON API 的路由层与 OpenAPI 文档能力.
业务编排与数据访问复用 services/repositories.
"""

from __future__ import annotations

from typing import cast

from flask import Blueprint, Response, jsonify

from formloom.api.v1.api import FormLoomApi
from formloom.api.v1.namespaces.collections import ns as collections_ns
from formloom.api.v1.namespaces.custom_fields import ns as custom_fields_ns
from formloom.api.v1.namespaces.form_layouts import ns as form_layouts_ns
from formloom.api.v1.namespaces.forms import ns as forms_ns
from formloom.api.v1.namespaces.submissions import ns as submissions_ns
from formloom.api.v1.namespaces.templates import ns as templates_ns
from formloom.settings import Settings


def create_api_v1_blueprint(settings: Settings) -> Blueprint:
    """创建并配置 `/api/v1` Blueprint.

    - Swagger UI: `/api/v1/docs`(可配置关闭)
    - OpenAPI JSON: `/api/v1/openapi.json`
    """
    blueprint = Blueprint("api_v1", __name__)

    docs_path = "/docs" if settings.api_v1_docs_enabled else cast(str, False)
    api = FormLoomApi(
        blueprint,
        title=settings.app_name,
        version=settings.app_version,
        doc=docs_path,
    )

    api.add_namespace(custom_fields_ns, path="/custom-fields")
    api.add_namespace(form_layouts_ns, path="/form-layouts")
    api.add_namespace(templates_ns, path="/templates")
    api.add_namespace(forms_ns, path="/forms")
    api.add_namespace(collections_ns, path="/collections")
    api.add_namespace(submissions_ns, path="/submissions")

    @blueprint.get("/openapi.json")
    def openapi_json() -> tuple[Response, int]:
        return jsonify(api.__schema__), 200

    return blueprint
