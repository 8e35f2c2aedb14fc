"""数据模型模块.

主要模型:
- Collection: 集合(提交数据的分组命名空间)
- CustomField: 自定义字段(含 LOV 条目)
- FormLayout: 表单布局
- Template: 模板
- Form: 表单
- Submission: 表单提交记录
"""

__all__ = [
    "Collection",
    "CustomField",
    "Form",
    "FormLayout",
    "Submission",
    "Template",
]

from .collection import Collection
from .custom_field import CustomField
from .form import Form
from .form_layout import FormLayout
from .submission import Submission
from .template import Template
