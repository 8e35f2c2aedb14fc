"""Templates namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from formloom.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from formloom.api.v1.resources.base import BaseResource, parse_json_payload
from formloom.api.v1.resources.query_parsers import definition_list_parser, present_args
from formloom.constants import DefinitionKind, HttpStatus
from formloom.services.definitions.definition_query_service import DefinitionQueryService
from formloom.services.definitions.definition_write_service import DefinitionWriteService

ns = Namespace("templates", description="模板管理")

ErrorEnvelope = get_error_envelope_model(ns)

TemplateWritePayload = ns.model(
    "TemplateWritePayload",
    {
        "name": fields.String(required=True, description="模板名称(唯一)", example="Address"),
        "description": fields.String(required=False, description="描述"),
        "category": fields.String(required=True, description="分类", example="common"),
        "fields": fields.List(fields.Raw, required=False, description="字段定义列表"),
    },
)

TemplateSuccessEnvelope = make_success_envelope_model(ns, "TemplateSuccessEnvelope")

_list_parser = definition_list_parser("category", "search")

_KIND = DefinitionKind.TEMPLATE


@ns.route("")
class TemplatesResource(BaseResource):
    """模板列表资源."""

    @ns.expect(_list_parser)
    @ns.response(200, "OK", TemplateSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    def get(self):
        """获取模板列表."""
        filters = present_args(_list_parser.parse_args())

        def _execute():
            records = DefinitionQueryService().filter_definitions(_KIND, filters)
            return self.success(data=[record.to_dict() for record in records])

        return self.safe_call(
            _execute,
            module="templates",
            action="list_templates",
            public_error="获取模板列表失败",
            context=dict(filters),
        )

    @ns.expect(TemplateWritePayload, validate=False)
    @ns.response(201, "Created", TemplateSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def post(self):
        """创建模板."""

        def _execute():
            record = DefinitionWriteService().create(_KIND, parse_json_payload())
            return self.success(data=record.to_dict(), message="模板创建成功", status=HttpStatus.CREATED)

        return self.safe_call(
            _execute,
            module="templates",
            action="create_template",
            public_error="模板创建失败",
            commit=True,
        )


@ns.route("/categories")
class TemplateCategoriesResource(BaseResource):
    """模板分类资源."""

    @ns.response(200, "OK", TemplateSuccessEnvelope)
    def get(self):
        """获取模板分类(升序)."""

        def _execute():
            return self.success(data=DefinitionQueryService().list_categories(_KIND))

        return self.safe_call(
            _execute,
            module="templates",
            action="list_template_categories",
            public_error="获取模板分类失败",
        )


@ns.route("/<int:template_id>")
class TemplateDetailResource(BaseResource):
    """模板详情资源."""

    @ns.response(200, "OK", TemplateSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, template_id: int):
        """获取模板详情."""

        def _execute():
            record = DefinitionQueryService().get_definition(_KIND, template_id)
            return self.success(data=record.to_dict())

        return self.safe_call(
            _execute,
            module="templates",
            action="get_template",
            public_error="获取模板失败",
            context={"template_id": template_id},
        )

    @ns.expect(TemplateWritePayload, validate=False)
    @ns.response(200, "OK", TemplateSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def put(self, template_id: int):
        """更新模板: 仅 name/description/category/fields 生效."""

        def _execute():
            record = DefinitionWriteService().update(_KIND, template_id, parse_json_payload())
            return self.success(data=record.to_dict(), message="模板更新成功")

        return self.safe_call(
            _execute,
            module="templates",
            action="update_template",
            public_error="模板更新失败",
            context={"template_id": template_id},
            commit=True,
        )

    @ns.response(200, "OK", TemplateSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def delete(self, template_id: int):
        """删除模板."""

        def _execute():
            DefinitionWriteService().delete(_KIND, template_id)
            return self.success(data={"id": template_id}, message="模板删除成功")

        return self.safe_call(
            _execute,
            module="templates",
            action="delete_template",
            public_error="模板删除失败",
            context={"template_id": template_id},
            commit=True,
        )
