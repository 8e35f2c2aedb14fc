"""FormLoom - 模板模型."""

from formloom import db
from formloom.models.document import DocumentMixin
from formloom.utils.time_utils import time_utils


class Template(DocumentMixin, db.Model):
    """模板模型: 一组可复用的字段定义."""

    __tablename__ = "templates"

    DOCUMENT_COLUMNS = {
        "name": "name",
        "description": "description",
        "category": "category",
        "fields": "fields",
    }

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(255), nullable=False, index=True)
    fields = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def __repr__(self) -> str:
        return f"<Template {self.name}>"
