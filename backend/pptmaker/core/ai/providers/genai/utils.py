"""
Google GenAI Provider工具函数
"""

import asyncio
from typing import Any, Dict, Optional

from google import genai
from google.genai import errors as genai_errors

from pptmaker.core.ai.exceptions import AIServiceError, ModelTimeoutError
from pptmaker.core.log_utils import get_logger

logger = get_logger(__name__)

_TIMEOUT_MARKERS = ("timed out", "timeout", "deadline")


def create_genai_client(model_config) -> genai.Client:
    """
    创建Google GenAI客户端

    Args:
        model_config: 模型配置对象，使用其中的 api_key / base_url / timeout

    Returns:
        genai.Client实例
    """
    http_options: Dict[str, Any] = {}
    if model_config.base_url:
        http_options["base_url"] = model_config.base_url
    if model_config.timeout:
        # HttpOptions.timeout 单位为毫秒
        http_options["timeout"] = int(model_config.timeout * 1000)

    return genai.Client(
        api_key=model_config.api_key,
        http_options=http_options or None
    )


def is_timeout_error(exception: BaseException) -> bool:
    """判断异常是否为超时类错误"""
    if isinstance(exception, (asyncio.TimeoutError, TimeoutError)):
        return True
    if isinstance(exception, genai_errors.APIError) and exception.code in (408, 504):
        return True
    text = str(exception).lower()
    return any(marker in text for marker in _TIMEOUT_MARKERS)


def translate_genai_exception(exception: BaseException, model_name: Optional[str] = None) -> AIServiceError:
    """
    将GenAI SDK异常转换为统一的AI服务异常

    Args:
        exception: 原始异常
        model_name: 模型名称（写入details）

    Returns:
        AIServiceError或其子类
    """
    details = {"model": model_name, "error_type": type(exception).__name__}
    if is_timeout_error(exception):
        return ModelTimeoutError(f"GenAI请求超时: {exception}", details=details)
    if isinstance(exception, genai_errors.APIError):
        details["status_code"] = exception.code
        return AIServiceError(f"GenAI API调用失败 (状态码: {exception.code}): {exception.message}", "GENAI_API_ERROR", details)
    return AIServiceError(f"GenAI调用失败 ({type(exception).__name__}): {exception}", "GENAI_API_ERROR", details)
