"""Submissions namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from formloom.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from formloom.api.v1.resources.base import BaseResource, parse_json_payload
from formloom.api.v1.resources.query_parsers import new_parser, present_args
from formloom.constants import HttpStatus
from formloom.services.submissions.submission_service import SubmissionService

ns = Namespace("submissions", description="表单提交记录")

ErrorEnvelope = get_error_envelope_model(ns)

SubmissionWritePayload = ns.model(
    "SubmissionWritePayload",
    {
        "formId": fields.Integer(required=True, description="表单 ID", example=1),
        "collectionName": fields.String(required=True, description="集合名称(快照)", example="contacts"),
        "formName": fields.String(required=True, description="表单名称(快照)", example="CONTACT US"),
        "data": fields.Raw(required=False, description="提交的数据", example={"email": "a@example.com"}),
    },
)

SubmissionSuccessEnvelope = make_success_envelope_model(ns, "SubmissionSuccessEnvelope")

_list_parser = new_parser()
_list_parser.add_argument("formId", type=str, location="args", required=False, help="表单 ID")
_list_parser.add_argument("collection", type=str, location="args", required=False, help="集合名称")


@ns.route("")
class SubmissionsResource(BaseResource):
    """提交记录资源."""

    @ns.expect(_list_parser)
    @ns.response(200, "OK", SubmissionSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    def get(self):
        """获取最近的提交记录(按 formId/collection 筛选)."""
        params = present_args(_list_parser.parse_args())

        def _execute():
            submissions = SubmissionService().list_submissions(params)
            return self.success(data=[submission.to_dict() for submission in submissions])

        return self.safe_call(
            _execute,
            module="submissions",
            action="list_submissions",
            public_error="获取提交记录失败",
            context=dict(params),
        )

    @ns.expect(SubmissionWritePayload, validate=False)
    @ns.response(201, "Created", SubmissionSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    def post(self):
        """保存表单提交."""

        def _execute():
            submission = SubmissionService().create(parse_json_payload())
            return self.success(data=submission.to_dict(), message="提交成功", status=HttpStatus.CREATED)

        return self.safe_call(
            _execute,
            module="submissions",
            action="create_submission",
            public_error="保存提交失败",
            commit=True,
        )
