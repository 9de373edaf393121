"""
演示文稿生成相关的Pydantic验证模型

幻灯片的视觉需求用显式的标签联合类型表示：
PromptVisual（等待生成或用于网络搜索的提示词）、ErrorVisual（生成失败）或None。
对外JSON仍输出单个 visualPrompt 字段，另附 visualStatus 标明其含义。
"""

from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field, computed_field

from .common import CAMEL_MODEL_CONFIG
from .document_analysis import DocumentAnalysis

# 生成失败时写入 visualPrompt 的错误文本前缀
VISUAL_ERROR_PREFIX = "Error generating AI visual"

ERROR_SLIDE_ID = 0
ERROR_SLIDE_TITLE = "Error Generating Presentation"


class PresentationParameters(BaseModel):
    """用户选择的演示文稿参数"""
    num_slides: Optional[int] = Field(None, gt=0, description="目标幻灯片数量，为空时由模型决定")
    template: str = Field("Modern", description="模板名称（Modern, Corporate, Creative, Minimal）")
    smart_art_density: Literal["low", "medium", "high"] = Field("medium", description="智能图形密度")
    data_viz_preference: str = Field(
        "charts",
        description="数据可视化偏好（charts, graphs, infographics, web-images）"
    )
    content_visual_ratio: str = Field("balanced", description="内容与视觉元素比例（text-heavy, balanced, visual-heavy）")
    tone_style: str = Field("professional", description="语气与风格（professional, casual, bold, informative）")

    model_config = CAMEL_MODEL_CONFIG


class PresentationRequest(PresentationParameters):
    """演示文稿生成请求模型"""
    analysis_data: DocumentAnalysis = Field(..., description="文档分析结果")


class PromptVisual(BaseModel):
    """尚未生成的视觉元素：生成提示词或网络搜索查询"""
    kind: Literal["prompt"] = "prompt"
    text: str


class ErrorVisual(BaseModel):
    """视觉元素生成失败"""
    kind: Literal["error"] = "error"
    prompt: str
    message: str

    @property
    def description(self) -> str:
        return f'{VISUAL_ERROR_PREFIX} from prompt "{self.prompt}": {self.message}'


SlideVisual = Annotated[Union[PromptVisual, ErrorVisual], Field(discriminator="kind")]


class Slide(BaseModel):
    """单张幻灯片"""
    id: int = Field(..., description="幻灯片ID，在演示文稿内唯一")
    title: str = Field(..., description="幻灯片标题")
    content: str = Field(..., description="幻灯片正文")
    visual: Optional[SlideVisual] = Field(None, exclude=True, description="视觉需求")
    visual_data_uri: Optional[str] = Field(
        None,
        description="网络图片的http(s)链接或生成图片的data URI"
    )

    model_config = CAMEL_MODEL_CONFIG

    @computed_field(alias="visualPrompt")
    @property
    def visual_prompt(self) -> Optional[str]:
        """提示词文本；生成失败时为以固定前缀开头的错误描述"""
        if isinstance(self.visual, ErrorVisual):
            return self.visual.description
        if isinstance(self.visual, PromptVisual):
            return self.visual.text
        return None

    @computed_field(alias="visualStatus")
    @property
    def visual_status(self) -> Optional[str]:
        return self.visual.kind if self.visual is not None else None


class PresentationMetadata(BaseModel):
    """演示文稿元数据"""
    template: str
    tone_style: str

    model_config = CAMEL_MODEL_CONFIG


class Presentation(BaseModel):
    """演示文稿生成结果"""
    slides: List[Slide]
    metadata: PresentationMetadata

    model_config = CAMEL_MODEL_CONFIG

    @property
    def is_error(self) -> bool:
        return len(self.slides) == 1 and self.slides[0].id == ERROR_SLIDE_ID \
            and self.slides[0].title == ERROR_SLIDE_TITLE


# ==================== 模型原始输出 ====================

class StructureSlide(BaseModel):
    """结构生成阶段模型返回的单张幻灯片"""
    id: int
    title: str
    content: str
    visual_prompt: Optional[str] = None
    visual_data_uri: Optional[str] = None

    model_config = CAMEL_MODEL_CONFIG


class PresentationStructure(BaseModel):
    """结构生成阶段模型返回的整体结构"""
    slides: List[StructureSlide] = Field(default_factory=list)

    model_config = CAMEL_MODEL_CONFIG
