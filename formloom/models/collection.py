"""FormLoom - 集合模型."""

from formloom import db
from formloom.models.document import DocumentMixin
from formloom.utils.time_utils import time_utils


class Collection(DocumentMixin, db.Model):
    """集合模型.

    集合是提交数据的分组键, 创建时会尽力为其开辟一个物理存储命名空间.

    Attributes:
        id: 主键.
        name: 集合名称, 唯一.
        description: 描述.
        created_at: 创建时间.
        updated_at: 更新时间.
    """

    __tablename__ = "collections"

    DOCUMENT_COLUMNS = {"name": "name", "description": "description"}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def __repr__(self) -> str:
        return f"<Collection {self.name}>"
