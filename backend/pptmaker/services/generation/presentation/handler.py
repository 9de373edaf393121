"""
演示文稿生成Handler
"""

import time
from typing import Optional

from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages
from pptmaker.schemas.presentation import Presentation, PresentationRequest
from pptmaker.services.generation.presentation.service import PresentationGenerationService
from pptmaker.services.handler_utils import to_http_exception

logger = get_logger(__name__)


class PresentationGenerationHandler:
    """演示文稿生成处理器"""

    def __init__(self, service: Optional[PresentationGenerationService] = None):
        self.service = service or PresentationGenerationService()

    async def handle_generate_presentation(self, request: PresentationRequest) -> Presentation:
        """
        处理演示文稿生成请求

        模型调用失败由Service转换为错误幻灯片，这里不会因此返回5xx
        """
        start_time = time.time()

        try:
            logger.info(
                log_messages.START_OPERATION,
                operation_name="演示文稿生成",
                num_slides=request.num_slides,
                template=request.template,
                tone_style=request.tone_style
            )

            presentation = await self.service.generate_presentation(request)

            if presentation.is_error:
                logger.warning(
                    "演示文稿生成返回错误幻灯片",
                    operation="generate_presentation_fallback",
                    error_content=presentation.slides[0].content
                )
            else:
                logger.info(
                    log_messages.OPERATION_SUCCESS,
                    operation_name="演示文稿生成",
                    slide_count=len(presentation.slides),
                    duration_ms=int((time.time() - start_time) * 1000)
                )
            return presentation

        except Exception as e:
            raise to_http_exception(e, "演示文稿生成", time.time() - start_time) from e
