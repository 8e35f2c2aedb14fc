"""Forms namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from formloom.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from formloom.api.v1.resources.base import BaseResource, parse_json_payload
from formloom.api.v1.resources.query_parsers import (
    bool_with_default,
    definition_list_parser,
    new_parser,
    present_args,
)
from formloom.constants import DefinitionKind, HttpStatus
from formloom.services.definitions.definition_query_service import DefinitionQueryService
from formloom.services.definitions.definition_write_service import DefinitionWriteService
from formloom.services.lov.lov_resolution_service import LovResolutionService

ns = Namespace("forms", description="表单管理")

ErrorEnvelope = get_error_envelope_model(ns)

FormWritePayload = ns.model(
    "FormWritePayload",
    {
        "collectionName": fields.String(required=True, description="集合名称", example="contacts"),
        "formName": fields.String(required=True, description="表单名称(保存为大写, 唯一)", example="CONTACT US"),
        "fields": fields.List(fields.Raw, required=False, description="字段定义列表"),
        "styles": fields.Raw(required=False, description="主题样式"),
        "formJson": fields.Raw(required=False, description="编辑器导出的 {fields, styles} 包装"),
        "surveyJson": fields.Raw(required=False, description="第三方问卷 JSON"),
    },
)

FormListSuccessEnvelope = make_success_envelope_model(ns, "FormListSuccessEnvelope")
FormSuccessEnvelope = make_success_envelope_model(ns, "FormSuccessEnvelope")
FormOptionsSuccessEnvelope = make_success_envelope_model(ns, "FormOptionsSuccessEnvelope")

_list_parser = definition_list_parser("collection", "search")

_options_parser = new_parser()
_options_parser.add_argument(
    "includeInactive",
    type=bool_with_default(False),
    location="args",
    required=False,
    default=False,
    help="是否包含 Inactive 的 LOV 条目",
)

_KIND = DefinitionKind.FORM


@ns.route("")
class FormsResource(BaseResource):
    """表单列表资源."""

    @ns.expect(_list_parser)
    @ns.response(200, "OK", FormListSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    def get(self):
        """获取表单摘要列表(最新创建的在前)."""
        filters = present_args(_list_parser.parse_args())

        def _execute():
            records = DefinitionQueryService().filter_definitions(_KIND, filters)
            return self.success(data=[record.to_summary_dict() for record in records])

        return self.safe_call(
            _execute,
            module="forms",
            action="list_forms",
            public_error="获取表单列表失败",
            context=dict(filters),
        )

    @ns.expect(FormWritePayload, validate=False)
    @ns.response(201, "Created", FormSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def post(self):
        """创建表单."""

        def _execute():
            record = DefinitionWriteService().create(_KIND, parse_json_payload())
            return self.success(data=record.to_dict(), message="表单创建成功", status=HttpStatus.CREATED)

        return self.safe_call(
            _execute,
            module="forms",
            action="create_form",
            public_error="表单创建失败",
            commit=True,
        )


@ns.route("/<int:form_id>")
class FormDetailResource(BaseResource):
    """表单详情资源."""

    @ns.response(200, "OK", FormSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, form_id: int):
        """获取表单详情."""

        def _execute():
            record = DefinitionQueryService().get_definition(_KIND, form_id)
            return self.success(data=record.to_dict())

        return self.safe_call(
            _execute,
            module="forms",
            action="get_form",
            public_error="获取表单失败",
            context={"form_id": form_id},
        )

    @ns.expect(FormWritePayload, validate=False)
    @ns.response(200, "OK", FormSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def put(self, form_id: int):
        """更新表单."""

        def _execute():
            record = DefinitionWriteService().update(_KIND, form_id, parse_json_payload())
            return self.success(data=record.to_dict(), message="表单更新成功")

        return self.safe_call(
            _execute,
            module="forms",
            action="update_form",
            public_error="表单更新失败",
            context={"form_id": form_id},
            commit=True,
        )

    @ns.response(200, "OK", FormSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def delete(self, form_id: int):
        """删除表单(已有提交记录保留)."""

        def _execute():
            DefinitionWriteService().delete(_KIND, form_id)
            return self.success(data={"id": form_id}, message="表单删除成功")

        return self.safe_call(
            _execute,
            module="forms",
            action="delete_form",
            public_error="表单删除失败",
            context={"form_id": form_id},
            commit=True,
        )


@ns.route("/<int:form_id>/options")
class FormOptionsResource(BaseResource):
    """表单选择类字段的选项解析资源."""

    @ns.expect(_options_parser)
    @ns.response(200, "OK", FormOptionsSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, form_id: int):
        """按字段 id 返回解析后的选项, 表格列以 `<tableId>.<columnId>` 为键."""
        include_inactive = bool(_options_parser.parse_args().get("includeInactive"))

        def _execute():
            record = DefinitionQueryService().get_definition(_KIND, form_id)
            options = LovResolutionService().resolve_stored_fields(record.fields, include_inactive=include_inactive)
            return self.success(data=options)

        return self.safe_call(
            _execute,
            module="forms",
            action="resolve_form_options",
            public_error="解析表单选项失败",
            context={"form_id": form_id, "include_inactive": include_inactive},
        )
