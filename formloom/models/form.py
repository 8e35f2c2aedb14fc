"""FormLoom - 表单模型."""

from typing import Any

from formloom import db
from formloom.models.document import DocumentMixin
from formloom.utils.time_utils import time_utils


class Form(DocumentMixin, db.Model):
    """表单模型.

    Attributes:
        collection_name: 所属集合名称(分组键, 不唯一).
        form_name: 表单名称, 写入时已大写, 唯一.
        fields: 字段定义列表.
        styles: 主题样式.
        survey_json: 第三方问卷 JSON, 原样透传.
    """

    __tablename__ = "forms"

    DOCUMENT_COLUMNS = {
        "collectionName": "collection_name",
        "formName": "form_name",
        "fields": "fields",
        "styles": "styles",
        "surveyJson": "survey_json",
    }

    id = db.Column(db.Integer, primary_key=True)
    collection_name = db.Column(db.String(255), nullable=False, index=True)
    form_name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    fields = db.Column(db.JSON, nullable=False, default=list)
    styles = db.Column(db.JSON, nullable=False, default=dict)
    survey_json = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def to_summary_dict(self) -> dict[str, Any]:
        """列表视图只返回摘要字段."""
        payload = self.to_dict()
        return {key: payload[key] for key in ("id", "collectionName", "formName", "createdAt", "updatedAt")}

    def __repr__(self) -> str:
        return f"<Form {self.form_name}>"
