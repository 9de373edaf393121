"""
单张幻灯片重新生成Handler
"""

import time
from typing import Optional

from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages
from pptmaker.schemas.slide_regeneration import RegenerateSlideRequest, RegenerateSlideResult
from pptmaker.services.generation.slide_regeneration.service import SlideRegenerationService
from pptmaker.services.handler_utils import to_http_exception

logger = get_logger(__name__)


class SlideRegenerationHandler:
    """幻灯片重新生成处理器"""

    def __init__(self, service: Optional[SlideRegenerationService] = None):
        self.service = service or SlideRegenerationService()

    async def handle_regenerate_slide(self, request: RegenerateSlideRequest) -> RegenerateSlideResult:
        start_time = time.time()

        try:
            logger.info(log_messages.START_OPERATION, operation_name="幻灯片重新生成")

            result = await self.service.regenerate_slide(request)

            logger.info(
                log_messages.OPERATION_SUCCESS,
                operation_name="幻灯片重新生成",
                duration_ms=int((time.time() - start_time) * 1000),
                result_length=len(result.regenerated_slide)
            )
            return result

        except Exception as e:
            raise to_http_exception(e, "幻灯片重新生成", time.time() - start_time) from e
