"""
演示文稿生成Service
编排结构生成、配图并发生成和结果规整
"""

import asyncio
import json
import time
from typing import List, Optional

from pptmaker.core.ai.exceptions import EmptyStructureError
from pptmaker.core.config import settings
from pptmaker.core.llm.client import AIClient, get_ai_client
from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages
from pptmaker.core.search.tool import build_web_search_tool, create_search_provider
from pptmaker.core.search.providers.base import BaseSearchProvider
from pptmaker.prompts import get_prompt_manager
from pptmaker.prompts.utils import PromptHelper
from pptmaker.schemas.presentation import (
    Presentation,
    PresentationMetadata,
    PresentationRequest,
    PresentationStructure,
    Slide,
)
from pptmaker.services.image.visualizer_service import VisualizerService
from .helper import (
    apply_visual_result,
    build_error_presentation,
    check_slide_ids,
    log_final_visuals,
    needs_generated_visual,
    normalize_slides,
    slide_from_structure,
)

logger = get_logger(__name__)

EMPTY_STRUCTURE_MESSAGE = "Failed to generate presentation structure. LLM response was empty or invalid."


class PresentationGenerationService:
    """演示文稿生成服务"""

    def __init__(
        self,
        ai_client: Optional[AIClient] = None,
        visualizer: Optional[VisualizerService] = None,
        search_provider: Optional[BaseSearchProvider] = None,
    ):
        self.ai_client = ai_client or get_ai_client()
        self.visualizer = visualizer or VisualizerService(self.ai_client)
        self.search_provider = search_provider
        self.prompt_manager = get_prompt_manager()
        self.prompt_helper = PromptHelper(self.prompt_manager)

    async def generate_presentation(self, request: PresentationRequest) -> Presentation:
        """
        生成完整的演示文稿

        任何阶段失败都不会向外抛出异常，而是返回只包含一张错误幻灯片的演示文稿。

        Args:
            request: 文档分析结果与用户选择的参数

        Returns:
            Presentation: 幻灯片列表与元数据
        """
        start_time = time.time()

        try:
            slides = await self.generate_structure(request)
            slides = normalize_slides(slides)

            slides = await self.generate_visuals(slides, request.template, request.tone_style)
            slides = normalize_slides(slides)

            log_final_visuals(slides)

            logger.info(
                log_messages.OPERATION_SUCCESS,
                operation_name="演示文稿生成",
                slide_count=len(slides),
                duration_ms=int((time.time() - start_time) * 1000)
            )

            return Presentation(
                slides=slides,
                metadata=PresentationMetadata(template=request.template, tone_style=request.tone_style),
            )

        except Exception as e:
            logger.error(
                log_messages.PRESENTATION_FALLBACK,
                exception=e,
                operation="generate_presentation",
                error_type=type(e).__name__,
                duration_ms=int((time.time() - start_time) * 1000)
            )
            return build_error_presentation(e, request.template, request.tone_style)

    def _get_search_provider(self) -> BaseSearchProvider:
        if self.search_provider is None:
            self.search_provider = create_search_provider()
        return self.search_provider

    async def generate_structure(self, request: PresentationRequest) -> List[Slide]:
        """
        调用对话模型生成演示文稿结构

        Raises:
            ModelOutputError: 模型输出不符合结构
            EmptyStructureError: 模型没有返回幻灯片
        """
        web_search_enabled = settings.enable_web_search

        logger.info(
            log_messages.PRESENTATION_STRUCTURE_START,
            operation="generate_structure",
            num_slides=request.num_slides,
            template=request.template,
            web_search_enabled=web_search_enabled
        )

        system_prompt, user_prompt, temperature, max_tokens = self.prompt_helper.prepare_prompts(
            category="presentation",
            template_name="presentation_structure",
            user_prompt_params={
                "analysis": request.analysis_data.model_dump(),
                "parameters": request.model_dump(exclude={"analysis_data"}),
                "web_search_enabled": web_search_enabled
            },
            system_prompt_params={
                "web_search_enabled": web_search_enabled,
                "output_schema": json.dumps(PresentationStructure.model_json_schema(by_alias=True))
            }
        )

        tools = [build_web_search_tool(self._get_search_provider())] if web_search_enabled else None

        structure = await self.ai_client.structured_call(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            output_model=PresentationStructure,
            temperature=temperature,
            max_tokens=max_tokens,
            tools=tools
        )

        if not structure.slides:
            raise EmptyStructureError(EMPTY_STRUCTURE_MESSAGE)

        slides = [slide_from_structure(raw) for raw in structure.slides]
        check_slide_ids(slides)

        logger.info(
            log_messages.PRESENTATION_STRUCTURE_SUCCESS,
            operation="generate_structure",
            slide_count=len(slides),
            web_image_count=sum(1 for slide in slides if slide.visual_data_uri)
        )
        return slides

    async def generate_visuals(self, slides: List[Slide], template: str, tone_style: str) -> List[Slide]:
        """
        为需要配图的幻灯片并发生成图片

        单张失败只影响该幻灯片，失败信息记录在其视觉元素中。
        """
        targets = [index for index, slide in enumerate(slides) if needs_generated_visual(slide)]
        if not targets:
            logger.info(
                "没有需要生成配图的幻灯片",
                operation="generate_visuals",
                slide_count=len(slides)
            )
            return slides

        template_details = f"Template: {template}, Style: {tone_style}"

        logger.info(
            log_messages.PRESENTATION_VISUALS_START,
            operation="generate_visuals",
            visual_count=len(targets),
            template_details=template_details
        )

        results = await asyncio.gather(
            *[
                self.visualizer.generate_visual(slides[index].visual.text, template_details)
                for index in targets
            ],
            return_exceptions=True
        )

        merged = list(slides)
        failed = 0
        for index, result in zip(targets, results):
            if isinstance(result, BaseException):
                failed += 1
                logger.error(
                    log_messages.VISUAL_GENERATION_FAILED,
                    exception=result,
                    operation="generate_visuals",
                    slide_id=slides[index].id
                )
            merged[index] = apply_visual_result(slides[index], result)

        logger.info(
            log_messages.PRESENTATION_VISUALS_DONE,
            operation="generate_visuals",
            succeeded=len(targets) - failed,
            failed=failed
        )
        return merged
