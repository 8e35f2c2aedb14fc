"""FormLoom - 表单布局模型."""

from formloom import db
from formloom.models.document import DocumentMixin
from formloom.utils.time_utils import time_utils


class FormLayout(DocumentMixin, db.Model):
    """表单布局模型.

    layout_type 历史数据中可能出现 grid-layout, 读取时原样返回.
    """

    __tablename__ = "form_layouts"

    DOCUMENT_COLUMNS = {
        "layoutName": "layout_name",
        "layoutType": "layout_type",
        "category": "category",
        "fields": "fields",
        "layoutConfig": "layout_config",
    }

    id = db.Column(db.Integer, primary_key=True)
    layout_name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    layout_type = db.Column(db.String(32), nullable=False, index=True)
    category = db.Column(db.String(255), nullable=True, index=True)
    fields = db.Column(db.JSON, nullable=False, default=list)
    layout_config = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def __repr__(self) -> str:
        return f"<FormLayout {self.layout_name}>"
