"""
单张幻灯片重新生成相关的Pydantic验证模型
"""

from typing import Literal
from pydantic import BaseModel, Field

from .common import CAMEL_MODEL_CONFIG


class RegenerateSlideRequest(BaseModel):
    """幻灯片重新生成请求模型"""
    slide_content: str = Field(..., min_length=1, description="需要重新生成的幻灯片内容")
    template_details: str = Field("Modern", description="演示文稿模板信息")
    smart_art_density: Literal["low", "medium", "high"] = Field("medium", description="智能图形密度")
    data_visualization_preference: str = Field("charts", description="数据可视化偏好（charts, graphs, infographics）")
    content_to_visual_ratio: str = Field("balanced", description="内容与视觉元素的比例")
    tone_and_style: str = Field("professional", description="语气与风格（professional, casual, bold等）")

    model_config = CAMEL_MODEL_CONFIG


class RegenerateSlideResult(BaseModel):
    """幻灯片重新生成结果"""
    regenerated_slide: str = Field(..., description="按新参数重新生成的幻灯片内容")

    model_config = CAMEL_MODEL_CONFIG
