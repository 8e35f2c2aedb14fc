"""Form layouts namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from formloom.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from formloom.api.v1.resources.base import BaseResource, parse_json_payload
from formloom.api.v1.resources.query_parsers import definition_list_parser, present_args
from formloom.constants import DefinitionKind, HttpStatus
from formloom.services.definitions.definition_query_service import DefinitionQueryService
from formloom.services.definitions.definition_write_service import DefinitionWriteService

ns = Namespace("form_layouts", description="表单布局管理")

ErrorEnvelope = get_error_envelope_model(ns)

FormLayoutWritePayload = ns.model(
    "FormLayoutWritePayload",
    {
        "layoutName": fields.String(required=True, description="布局名称(唯一)", example="Contact"),
        "layoutType": fields.String(required=True, description="form-group/box-layout", example="form-group"),
        "category": fields.String(required=False, description="分类(可选)"),
        "fields": fields.List(fields.Raw, required=False, description="字段定义列表"),
        "layoutConfig": fields.Raw(required=False, description="布局配置(原样保存)"),
    },
)

FormLayoutSuccessEnvelope = make_success_envelope_model(ns, "FormLayoutSuccessEnvelope")

_list_parser = definition_list_parser("type", "category")

_KIND = DefinitionKind.FORM_LAYOUT


@ns.route("")
class FormLayoutsResource(BaseResource):
    """表单布局列表资源."""

    @ns.expect(_list_parser)
    @ns.response(200, "OK", FormLayoutSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(503, "Service Unavailable", ErrorEnvelope)
    def get(self):
        """获取表单布局列表(包含未分类的布局)."""
        filters = present_args(_list_parser.parse_args())

        def _execute():
            records = DefinitionQueryService().filter_definitions(_KIND, filters)
            return self.success(data=[record.to_dict() for record in records])

        return self.safe_call(
            _execute,
            module="form_layouts",
            action="list_form_layouts",
            public_error="获取表单布局列表失败",
            context=dict(filters),
        )

    @ns.expect(FormLayoutWritePayload, validate=False)
    @ns.response(201, "Created", FormLayoutSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def post(self):
        """创建表单布局."""

        def _execute():
            record = DefinitionWriteService().create(_KIND, parse_json_payload())
            return self.success(data=record.to_dict(), message="表单布局创建成功", status=HttpStatus.CREATED)

        return self.safe_call(
            _execute,
            module="form_layouts",
            action="create_form_layout",
            public_error="表单布局创建失败",
            commit=True,
        )


@ns.route("/categories")
class FormLayoutCategoriesResource(BaseResource):
    """表单布局分类资源."""

    @ns.response(200, "OK", FormLayoutSuccessEnvelope)
    def get(self):
        """获取表单布局分类(剔除空分类, 升序)."""

        def _execute():
            return self.success(data=DefinitionQueryService().list_categories(_KIND))

        return self.safe_call(
            _execute,
            module="form_layouts",
            action="list_form_layout_categories",
            public_error="获取表单布局分类失败",
        )


@ns.route("/<int:layout_id>")
class FormLayoutDetailResource(BaseResource):
    """表单布局详情资源."""

    @ns.response(200, "OK", FormLayoutSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, layout_id: int):
        """获取表单布局详情."""

        def _execute():
            record = DefinitionQueryService().get_definition(_KIND, layout_id)
            return self.success(data=record.to_dict())

        return self.safe_call(
            _execute,
            module="form_layouts",
            action="get_form_layout",
            public_error="获取表单布局失败",
            context={"layout_id": layout_id},
        )

    @ns.expect(FormLayoutWritePayload, validate=False)
    @ns.response(200, "OK", FormLayoutSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def put(self, layout_id: int):
        """更新表单布局: 仅 layoutName/category/fields/layoutConfig 生效."""

        def _execute():
            record = DefinitionWriteService().update(_KIND, layout_id, parse_json_payload())
            return self.success(data=record.to_dict(), message="表单布局更新成功")

        return self.safe_call(
            _execute,
            module="form_layouts",
            action="update_form_layout",
            public_error="表单布局更新失败",
            context={"layout_id": layout_id},
            commit=True,
        )

    @ns.response(200, "OK", FormLayoutSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def delete(self, layout_id: int):
        """删除表单布局."""

        def _execute():
            DefinitionWriteService().delete(_KIND, layout_id)
            return self.success(data={"id": layout_id}, message="表单布局删除成功")

        return self.safe_call(
            _execute,
            module="form_layouts",
            action="delete_form_layout",
            public_error="表单布局删除失败",
            context={"layout_id": layout_id},
            commit=True,
        )
