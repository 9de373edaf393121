"""
配图生成Handler
"""

import time
from typing import Optional

from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages
from pptmaker.schemas.visual_generation import VisualGenerationRequest, VisualGenerationResult
from pptmaker.services.handler_utils import to_http_exception
from pptmaker.services.image.visualizer_service import VisualizerService

logger = get_logger(__name__)


class VisualizerHandler:
    """配图生成处理器"""

    def __init__(self, service: Optional[VisualizerService] = None):
        self.service = service or VisualizerService()

    async def handle_generate_visual(self, request: VisualGenerationRequest) -> VisualGenerationResult:
        start_time = time.time()

        try:
            logger.info(log_messages.START_OPERATION, operation_name="配图生成")

            visual_data_uri = await self.service.generate_visual(
                prompt_text=request.prompt_text,
                template_details=request.template_details
            )

            logger.info(
                log_messages.OPERATION_SUCCESS,
                operation_name="配图生成",
                duration_ms=int((time.time() - start_time) * 1000)
            )
            return VisualGenerationResult(visual_data_uri=visual_data_uri)

        except Exception as e:
            raise to_http_exception(e, "配图生成", time.time() - start_time) from e
