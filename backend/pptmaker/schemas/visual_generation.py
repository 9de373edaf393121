"""
配图生成相关的Pydantic验证模型
"""

from typing import Optional
from pydantic import BaseModel, Field

from .common import CAMEL_MODEL_CONFIG


class VisualGenerationRequest(BaseModel):
    """配图生成请求模型"""
    prompt_text: str = Field(
        ...,
        min_length=1,
        description='需要可视化的文字描述或数据，例如 "bar chart showing sales data"'
    )
    template_details: Optional[str] = Field(
        None,
        description="演示文稿模板信息（配色、风格），用于影响配图风格"
    )

    model_config = CAMEL_MODEL_CONFIG


class VisualGenerationResult(BaseModel):
    """配图生成结果"""
    visual_data_uri: str = Field(..., description='生成的图片，格式 "data:image/png;base64,..."')

    model_config = CAMEL_MODEL_CONFIG
