"""
通用Pydantic模型
用于标准化API响应
"""

from typing import Optional, Any, List
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class StandardResponse(BaseModel):
    """标准化响应模型"""
    status: str = "success"
    message: str = ""
    data: Optional[Any] = None


class ModelInfo(BaseModel):
    """当前配置的AI模型信息"""
    capability: str
    provider: str
    model: str
    available_providers: List[str] = []

    model_config = {
        "protected_namespaces": ()
    }


# 请求和响应统一使用camelCase字段名，Python侧使用snake_case
CAMEL_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}
