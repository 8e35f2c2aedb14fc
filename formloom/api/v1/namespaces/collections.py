"""Collections namespace."""

from __future__ import annotations

from dataclasses import asdict

from flask_restx import Namespace, fields

from formloom.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from formloom.api.v1.resources.base import BaseResource, parse_json_payload
from formloom.constants import DefinitionKind, HttpStatus
from formloom.services.collections.namespace_provisioner import NamespaceProvisioner
from formloom.services.definitions.definition_query_service import DefinitionQueryService
from formloom.services.definitions.definition_write_service import DefinitionWriteService

ns = Namespace("collections", description="集合管理")

ErrorEnvelope = get_error_envelope_model(ns)

CollectionWritePayload = ns.model(
    "CollectionWritePayload",
    {
        "name": fields.String(required=True, description="集合名称(唯一)", example="contacts"),
        "description": fields.String(required=False, description="描述"),
    },
)

CollectionSuccessEnvelope = make_success_envelope_model(ns, "CollectionSuccessEnvelope")

_KIND = DefinitionKind.COLLECTION


@ns.route("")
class CollectionsResource(BaseResource):
    """集合列表资源."""

    @ns.response(200, "OK", CollectionSuccessEnvelope)
    def get(self):
        """获取集合列表(最新创建的在前)."""

        def _execute():
            records = DefinitionQueryService().filter_definitions(_KIND)
            return self.success(data=[record.to_dict() for record in records])

        return self.safe_call(
            _execute,
            module="collections",
            action="list_collections",
            public_error="获取集合列表失败",
        )

    @ns.expect(CollectionWritePayload, validate=False)
    @ns.response(201, "Created", CollectionSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def post(self):
        """创建集合, 提交后尽力开辟物理命名空间."""

        def _execute():
            return DefinitionWriteService().create(_KIND, parse_json_payload())

        record = self.safe_call(
            _execute,
            module="collections",
            action="create_collection",
            public_error="集合创建失败",
            commit=True,
        )

        # 命名空间失败不影响集合本身
        outcome = NamespaceProvisioner().create_namespace(record.name)
        data = record.to_dict()
        data["namespace"] = asdict(outcome)
        return self.success(data=data, message="集合创建成功", status=HttpStatus.CREATED)


@ns.route("/<int:collection_id>")
class CollectionDetailResource(BaseResource):
    """集合详情资源."""

    @ns.response(200, "OK", CollectionSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def get(self, collection_id: int):
        """获取集合详情."""

        def _execute():
            record = DefinitionQueryService().get_definition(_KIND, collection_id)
            return self.success(data=record.to_dict())

        return self.safe_call(
            _execute,
            module="collections",
            action="get_collection",
            public_error="获取集合失败",
            context={"collection_id": collection_id},
        )

    @ns.expect(CollectionWritePayload, validate=False)
    @ns.response(200, "OK", CollectionSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    def put(self, collection_id: int):
        """更新集合: 仅 name/description 生效."""

        def _execute():
            record = DefinitionWriteService().update(_KIND, collection_id, parse_json_payload())
            return self.success(data=record.to_dict(), message="集合更新成功")

        return self.safe_call(
            _execute,
            module="collections",
            action="update_collection",
            public_error="集合更新失败",
            context={"collection_id": collection_id},
            commit=True,
        )

    @ns.response(200, "OK", CollectionSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    def delete(self, collection_id: int):
        """删除集合(物理命名空间保留)."""

        def _execute():
            DefinitionWriteService().delete(_KIND, collection_id)
            return self.success(data={"id": collection_id}, message="集合删除成功")

        return self.safe_call(
            _execute,
            module="collections",
            action="delete_collection",
            public_error="集合删除失败",
            context={"collection_id": collection_id},
            commit=True,
        )
