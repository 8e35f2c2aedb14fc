"""Custom fields namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from formloom.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from formloom.api.v1.resources.base import BaseResource, parse_json_payload
from formloom.api.v1.resources.query_parsers import definition_list_parser, present_args
from formloom.constants import DefinitionKind, HttpStatus
from formloom.services.definitions.definition_query_service import DefinitionQueryService
from formloom.services.definitions.definition_write_service import DefinitionWriteService

ns = Namespace("custom_fields", description="自定义字段管理")

ErrorEnvelope = get_error_envelope_model(ns)

LovItemModel = ns.model(
    "LovItem",
    {
        "code": fields.String(required=True, description="选项值", example="A"),
        "shortName": fields.String(required=True, description="选项展示名", example="Alpha"),
        "description": fields.String(required=False, description="描述"),
        "seamlessMapping": fields.String(required=False, description="外部映射值"),
        "status": fields.String(required=False, description="Active/Inactive", example="Active"),
    },
)

CustomFieldWritePayload = ns.model(
    "CustomFieldWritePayload",
    {
        "fieldName": fields.String(required=True, description="字段名(唯一)", example="status"),
        "fieldLabel": fields.String(required=True, description="字段标签", example="状态"),
        "dataType": fields.String(required=True, description="字段种类", example="dropdown"),
        "category": fields.String(required=True, description="分类", example="general"),
        "className": fields.String(required=False, description="样式类名"),
        "lovType": fields.String(required=False, description="user-defined/api", example="user-defined"),
        "lovItems": fields.List(fields.Nested(LovItemModel), required=False, description="LOV 条目"),
    },
)

CustomFieldSuccessEnvelope = make_success_envelope_model(ns, "CustomFieldSuccessEnvelope")
CustomFieldCategoriesSuccessEnvelope = make_success_envelope_model(ns, "CustomFieldCategoriesSuccessEnvelope")

_list_parser = definition_list_parser("category", "search")

_KIND = DefinitionKind.CUSTOM_FIELD


@ns.route("")
class CustomFieldsResource(BaseResource):
    """自定义字段列表资源."""

    @ns.expect(_list_parser)
    @ns.response(200, "OK", CustomFieldSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(503, "Service Unavailable", ErrorEnvelope)
    def get(self):
        """获取自定义字段列表(最新创建的在前)."""
        filters = present_args(_list_parser.parse_args())

        def _execute():
            records = DefinitionQueryService().filter_definitions(_KIND, filters)
            return self.success(data=[record.to_dict() for record in records])

        return self.safe_call(
            _execute,
            module="custom_fields",
            action="list_custom_fields",
            public_error="获取自定义字段列表失败",
            context=dict(filters),
        )

    @ns.expect(CustomFieldWritePayload, validate=False)
    @ns.response(201, "Created", CustomFieldSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    @ns.response(503, "Service Unavailable", ErrorEnvelope)
    def post(self):
        """创建自定义字段."""

        def _execute():
            record = DefinitionWriteService().create(_KIND, parse_json_payload())
            return self.success(data=record.to_dict(), message="自定义字段创建成功", status=HttpStatus.CREATED)

        return self.safe_call(
            _execute,
            module="custom_fields",
            action="create_custom_field",
            public_error="自定义字段创建失败",
            commit=True,
        )


@ns.route("/categories")
class CustomFieldCategoriesResource(BaseResource):
    """自定义字段分类资源."""

    @ns.response(200, "OK", CustomFieldCategoriesSuccessEnvelope)
    @ns.response(503, "Service Unavailable", ErrorEnvelope)
    def get(self):
        """获取自定义字段分类(升序)."""

        def _execute():
            return self.success(data=DefinitionQueryService().list_categories(_KIND))

        return self.safe_call(
            _execute,
            module="custom_fields",
            action="list_custom_field_categories",
            public_error="获取自定义字段分类失败",
        )


@ns.route("/<int:field_id>")
class CustomFieldDetailResource(BaseResource):
    """自定义字段详情资源."""

    @ns.response(200, "OK", CustomFieldSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, field_id: int):
        """获取自定义字段详情."""

        def _execute():
            record = DefinitionQueryService().get_definition(_KIND, field_id)
            return self.success(data=record.to_dict())

        return self.safe_call(
            _execute,
            module="custom_fields",
            action="get_custom_field",
            public_error="获取自定义字段失败",
            context={"field_id": field_id},
        )

    @ns.expect(CustomFieldWritePayload, validate=False)
    @ns.response(200, "OK", CustomFieldSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def put(self, field_id: int):
        """更新自定义字段: payload 中出现的已知键全部覆盖."""

        def _execute():
            record = DefinitionWriteService().update(_KIND, field_id, parse_json_payload())
            return self.success(data=record.to_dict(), message="自定义字段更新成功")

        return self.safe_call(
            _execute,
            module="custom_fields",
            action="update_custom_field",
            public_error="自定义字段更新失败",
            context={"field_id": field_id},
            commit=True,
        )

    @ns.response(200, "OK", CustomFieldSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def delete(self, field_id: int):
        """删除自定义字段."""

        def _execute():
            DefinitionWriteService().delete(_KIND, field_id)
            return self.success(data={"id": field_id}, message="自定义字段删除成功")

        return self.safe_call(
            _execute,
            module="custom_fields",
            action="delete_custom_field",
            public_error="自定义字段删除失败",
            context={"field_id": field_id},
            commit=True,
        )
