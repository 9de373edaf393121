"""
单张幻灯片重新生成Service
只重写幻灯片文字，不重新生成配图
"""

import json
from typing import Optional

from pptmaker.core.llm.client import AIClient, get_ai_client
from pptmaker.core.log_utils import get_logger
from pptmaker.prompts import get_prompt_manager
from pptmaker.prompts.utils import PromptHelper
from pptmaker.schemas.slide_regeneration import RegenerateSlideRequest, RegenerateSlideResult

logger = get_logger(__name__)


class SlideRegenerationService:
    """幻灯片重新生成服务"""

    def __init__(self, ai_client: Optional[AIClient] = None):
        self.ai_client = ai_client or get_ai_client()
        self.prompt_manager = get_prompt_manager()
        self.prompt_helper = PromptHelper(self.prompt_manager)

    async def regenerate_slide(self, request: RegenerateSlideRequest) -> RegenerateSlideResult:
        """
        按新的风格参数重新生成幻灯片内容

        Args:
            request: 幻灯片内容、模板信息和四个风格参数

        Returns:
            RegenerateSlideResult: 重新生成的幻灯片文字

        Raises:
            ModelOutputError: 模型输出为空或不符合结构
        """
        logger.info(
            "开始重新生成幻灯片",
            operation="regenerate_slide",
            content_length=len(request.slide_content),
            template_details=request.template_details,
            smart_art_density=request.smart_art_density,
            tone_and_style=request.tone_and_style
        )

        system_prompt, user_prompt, temperature, max_tokens = self.prompt_helper.prepare_prompts(
            category="presentation",
            template_name="slide_regeneration",
            user_prompt_params=request.model_dump(),
            system_prompt_params={
                "output_schema": json.dumps(RegenerateSlideResult.model_json_schema(by_alias=True))
            }
        )

        return await self.ai_client.structured_call(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            output_model=RegenerateSlideResult,
            temperature=temperature,
            max_tokens=max_tokens
        )
