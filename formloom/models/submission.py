"""FormLoom - 表单提交模型."""

from formloom import db
from formloom.models.document import DocumentMixin
from formloom.utils.time_utils import time_utils


class Submission(DocumentMixin, db.Model):
    """表单提交记录.

    form_id 仅按标识引用表单(不建外键, 删除表单不级联);
    collection_name/form_name 为提交时的快照.
    """

    __tablename__ = "submissions"

    DOCUMENT_COLUMNS = {
        "formId": "form_id",
        "collectionName": "collection_name",
        "formName": "form_name",
        "data": "data",
    }

    id = db.Column(db.Integer, primary_key=True)
    form_id = db.Column(db.Integer, nullable=False, index=True)
    collection_name = db.Column(db.String(255), nullable=False, index=True)
    form_name = db.Column(db.String(255), nullable=False)
    data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now)

    def __repr__(self) -> str:
        return f"<Submission {self.id} form={self.form_id}>"
