"""
AI生成API端点
负责演示文稿生成、单张幻灯片重新生成和配图生成
"""

from fastapi import APIRouter, Depends

from pptmaker.core.log_utils import get_logger
from pptmaker.schemas.common import StandardResponse
from pptmaker.schemas.presentation import PresentationRequest
from pptmaker.schemas.slide_regeneration import RegenerateSlideRequest
from pptmaker.schemas.visual_generation import VisualGenerationRequest
from pptmaker.services.generation.presentation.handler import PresentationGenerationHandler
from pptmaker.services.generation.slide_regeneration.handler import SlideRegenerationHandler
from pptmaker.services.image.visualizer_handler import VisualizerHandler

logger = get_logger(__name__)

router = APIRouter(tags=["AI生成"])


def get_presentation_handler() -> PresentationGenerationHandler:
    return PresentationGenerationHandler()


def get_slide_regeneration_handler() -> SlideRegenerationHandler:
    return SlideRegenerationHandler()


def get_visualizer_handler() -> VisualizerHandler:
    return VisualizerHandler()


@router.post(
    "/presentation",
    response_model=StandardResponse,
    summary="生成演示文稿",
    description="根据文档分析结果和用户偏好生成幻灯片结构与配图"
)
async def generate_presentation(
    request: PresentationRequest,
    handler: PresentationGenerationHandler = Depends(get_presentation_handler)
) -> StandardResponse:
    """
    生成演示文稿

    模型调用失败时仍返回200，data中只包含一张id为0的错误幻灯片，status为error

    Args:
        request: 文档分析结果与演示文稿参数
        handler: 演示文稿生成处理器

    Returns:
        StandardResponse: data为 {slides, metadata}
    """
    presentation = await handler.handle_generate_presentation(request)

    if presentation.is_error:
        return StandardResponse(
            status="error",
            message=presentation.slides[0].content,
            data=presentation.model_dump(by_alias=True, exclude_none=True)
        )

    return StandardResponse(
        status="success",
        message=f"演示文稿生成成功，共{len(presentation.slides)}张幻灯片",
        data=presentation.model_dump(by_alias=True, exclude_none=True)
    )


@router.post(
    "/slide/regenerate",
    response_model=StandardResponse,
    summary="重新生成幻灯片",
    description="按新的风格参数重写单张幻灯片的文字内容"
)
async def regenerate_slide(
    request: RegenerateSlideRequest,
    handler: SlideRegenerationHandler = Depends(get_slide_regeneration_handler)
) -> StandardResponse:
    result = await handler.handle_regenerate_slide(request)
    return StandardResponse(
        status="success",
        message="幻灯片重新生成成功",
        data=result.model_dump(by_alias=True)
    )


@router.post(
    "/visual",
    response_model=StandardResponse,
    summary="生成配图",
    description="根据文字描述生成单张图片，返回图片Data URI"
)
async def generate_visual(
    request: VisualGenerationRequest,
    handler: VisualizerHandler = Depends(get_visualizer_handler)
) -> StandardResponse:
    result = await handler.handle_generate_visual(request)
    return StandardResponse(
        status="success",
        message="配图生成成功",
        data=result.model_dump(by_alias=True)
    )
