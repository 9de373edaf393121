"""
Handler公共工具
把业务异常映射为HTTP异常
"""

from fastapi import HTTPException, status

from pptmaker.core.ai.exceptions import (
    AIServiceError,
    ModelOutputError,
    ModelTimeoutError,
    ProviderNotAvailableError,
    VisualGenerationError,
)
from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages

logger = get_logger(__name__)


def to_http_exception(exception: Exception, operation_name: str, duration: float) -> HTTPException:
    """
    将业务异常转换为HTTP异常并记录日志

    Args:
        exception: 原始异常
        operation_name: 操作名称（用于日志和错误信息）
        duration: 已耗时（秒）

    Returns:
        HTTPException
    """
    if isinstance(exception, ValueError):
        logger.warning(
            f"{operation_name}验证失败",
            operation="request_validation_failed",
            operation_label=operation_name,
            error=str(exception)
        )
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exception))

    logger.error(
        log_messages.OPERATION_FAILED,
        exception=exception,
        operation_name=operation_name,
        duration_ms=int(duration * 1000),
        error_type=type(exception).__name__
    )

    if isinstance(exception, ModelTimeoutError):
        status_code = status.HTTP_504_GATEWAY_TIMEOUT
    elif isinstance(exception, (ModelOutputError, VisualGenerationError)):
        status_code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(exception, ProviderNotAvailableError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exception, AIServiceError):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    message = getattr(exception, "message", None) or str(exception)
    return HTTPException(status_code=status_code, detail=f"{operation_name}失败：{message}")
