"""FormLoom - 自定义字段模型."""

from formloom import db
from formloom.models.document import DocumentMixin
from formloom.utils.time_utils import time_utils


class CustomField(DocumentMixin, db.Model):
    """自定义字段模型.

    `field_name` 是全局唯一的引用键, 选择类字段的 customFieldId 指向它.
    `lov_items` 以 JSON 数组保存, 顺序即展示顺序.

    Attributes:
        id: 主键.
        field_name: 字段名称(引用键), 唯一.
        field_label: 展示标签.
        data_type: 字段种类.
        category: 分类(自由文本).
        class_name: 可选的样式类名.
        lov_type: LOV 来源(user-defined/api).
        lov_items: LOV 条目列表.
    """

    __tablename__ = "custom_fields"

    DOCUMENT_COLUMNS = {
        "fieldName": "field_name",
        "fieldLabel": "field_label",
        "dataType": "data_type",
        "category": "category",
        "className": "class_name",
        "lovType": "lov_type",
        "lovItems": "lov_items",
    }

    id = db.Column(db.Integer, primary_key=True)
    field_name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    field_label = db.Column(db.String(255), nullable=False)
    data_type = db.Column(db.String(32), nullable=False)
    category = db.Column(db.String(255), nullable=False, index=True)
    class_name = db.Column(db.String(255), nullable=True)
    lov_type = db.Column(db.String(32), nullable=True)
    lov_items = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def __repr__(self) -> str:
        return f"<CustomField {self.field_name}>"
