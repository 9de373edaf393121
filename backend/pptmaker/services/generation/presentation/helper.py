"""
演示文稿生成辅助函数
负责模型输出转换、字段规整和错误幻灯片构造
"""

import asyncio
from typing import List, Optional

from pydantic import ValidationError

from pptmaker.core.ai.exceptions import EmptyStructureError, ModelOutputError, ModelTimeoutError
from pptmaker.core.log_utils import get_logger
from pptmaker.schemas.presentation import (
    ERROR_SLIDE_ID,
    ERROR_SLIDE_TITLE,
    ErrorVisual,
    Presentation,
    PresentationMetadata,
    PromptVisual,
    Slide,
    StructureSlide,
)
from pptmaker.utils.data_uri import is_http_url, is_image_data_uri

logger = get_logger(__name__)

ERROR_MESSAGE_PREFIX = "Failed to generate presentation"

SCHEMA_ERROR_MESSAGE = (
    f"{ERROR_MESSAGE_PREFIX}: The AI model did not return data in the expected format. "
    "Check server logs for details. Details: {details}"
)

TIMEOUT_ERROR_MESSAGE = (
    f"{ERROR_MESSAGE_PREFIX}: The request timed out. This might be due to a complex request "
    "or network issues. Please try again."
)


def _clean(value: Optional[str]) -> Optional[str]:
    """去除首尾空白，空字符串视为缺失"""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def slide_from_structure(raw: StructureSlide) -> Slide:
    """把模型返回的幻灯片转换为内部模型，非空的visualPrompt成为PromptVisual"""
    prompt_text = _clean(raw.visual_prompt)
    return Slide(
        id=raw.id,
        title=raw.title,
        content=raw.content,
        visual=PromptVisual(text=prompt_text) if prompt_text else None,
        visual_data_uri=raw.visual_data_uri,
    )


def normalize_slide(slide: Slide) -> Slide:
    """规整单张幻灯片，返回新对象"""
    visual = slide.visual
    if isinstance(visual, PromptVisual):
        text = _clean(visual.text)
        visual = PromptVisual(text=text) if text else None

    return slide.model_copy(update={
        "title": slide.title.strip(),
        "content": slide.content.strip(),
        "visual": visual,
        "visual_data_uri": _clean(slide.visual_data_uri),
    })


def normalize_slides(slides: List[Slide]) -> List[Slide]:
    """
    规整幻灯片列表

    去除文本首尾空白，空的提示词和空的图片地址统一表示为None。
    不会删除幻灯片，重复执行结果不变。
    """
    return [normalize_slide(slide) for slide in slides]


def needs_generated_visual(slide: Slide) -> bool:
    """有提示词但还没有图片的幻灯片需要调用配图生成"""
    return isinstance(slide.visual, PromptVisual) and not slide.visual_data_uri


def apply_visual_result(slide: Slide, result) -> Slide:
    """
    合并单张幻灯片的配图生成结果

    Args:
        slide: 原幻灯片
        result: 生成的Data URI，或 gather 收集到的异常对象
    """
    if isinstance(result, BaseException):
        message = getattr(result, "message", None) or str(result) or "Visual generation failed"
        return slide.model_copy(update={
            "visual": ErrorVisual(prompt=slide.visual.text, message=message),
            "visual_data_uri": None,
        })
    return slide.model_copy(update={"visual_data_uri": result})


def check_slide_ids(slides: List[Slide]) -> None:
    """ID重复只记录告警，不修改幻灯片"""
    seen = set()
    duplicates = set()
    for slide in slides:
        if slide.id in seen:
            duplicates.add(slide.id)
        seen.add(slide.id)
    if duplicates:
        logger.warning(
            "模型返回的幻灯片ID存在重复",
            operation="check_slide_ids",
            duplicate_ids=sorted(duplicates)
        )


def log_final_visuals(slides: List[Slide]) -> None:
    """逐张记录最终的视觉元素状态，地址既不是data:image也不是http(s)时告警"""
    for index, slide in enumerate(slides, start=1):
        if slide.visual_data_uri:
            if is_image_data_uri(slide.visual_data_uri):
                visual_type = "generated"
            elif is_http_url(slide.visual_data_uri):
                visual_type = "web"
            else:
                visual_type = "unknown"
                logger.warning(
                    "幻灯片的图片地址既不是data URI也不是http(s)链接",
                    operation="suspicious_visual_uri",
                    slide_index=index,
                    slide_id=slide.id,
                    uri_preview=slide.visual_data_uri[:100]
                )
            logger.debug(
                "幻灯片包含图片",
                operation="slide_visual_summary",
                slide_index=index,
                visual_type=visual_type
            )
        elif isinstance(slide.visual, ErrorVisual):
            logger.warning(
                "幻灯片配图生成失败",
                operation="slide_visual_summary",
                slide_index=index,
                slide_id=slide.id,
                error=slide.visual.message
            )


def is_timeout_error(exception: BaseException) -> bool:
    if isinstance(exception, (ModelTimeoutError, asyncio.TimeoutError, TimeoutError)):
        return True
    text = str(exception).lower()
    return "deadline" in text or "timed out" in text


def is_schema_error(exception: BaseException) -> bool:
    # 没有幻灯片不属于结构校验失败
    if isinstance(exception, EmptyStructureError):
        return False
    if isinstance(exception, (ModelOutputError, ValidationError)):
        return True
    return "Schema validation failed" in str(exception)


def describe_generation_error(exception: BaseException) -> str:
    """
    根据异常类型生成展示给用户的错误说明

    结构校验错误优先于超时判断，其余错误直接附上原始消息
    """
    message = getattr(exception, "message", None) or str(exception)
    if is_schema_error(exception):
        return SCHEMA_ERROR_MESSAGE.format(details=message)
    if is_timeout_error(exception):
        return TIMEOUT_ERROR_MESSAGE
    return f"{ERROR_MESSAGE_PREFIX}: {message}"


def build_error_presentation(exception: BaseException, template: str, tone_style: str) -> Presentation:
    """构造只包含一张错误幻灯片的演示文稿"""
    return Presentation(
        slides=[
            Slide(
                id=ERROR_SLIDE_ID,
                title=ERROR_SLIDE_TITLE,
                content=describe_generation_error(exception),
            )
        ],
        metadata=PresentationMetadata(template=template, tone_style=tone_style),
    )
