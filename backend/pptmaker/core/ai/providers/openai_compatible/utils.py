"""
OpenAI兼容Provider工具函数

提供所有OpenAI兼容Provider共享的工具函数
"""

from typing import Dict, Any, Optional
import openai

from pptmaker.core.ai.exceptions import AIServiceError, ModelTimeoutError
from pptmaker.core.log_utils import get_logger

logger = get_logger(__name__)


def create_openai_client(model_config) -> openai.AsyncOpenAI:
    """创建OpenAI异步客户端

    Args:
        model_config: 模型配置对象，使用其中的 api_key / base_url / timeout / max_retries

    Returns:
        OpenAI异步客户端实例
    """
    kwargs: Dict[str, Any] = {
        "api_key": model_config.api_key,
        "base_url": model_config.base_url,
        "max_retries": model_config.max_retries,
    }
    if model_config.timeout:
        kwargs["timeout"] = float(model_config.timeout)
    return openai.AsyncOpenAI(**kwargs)


def format_usage(response) -> Dict[str, Any]:
    """格式化OpenAI API响应中的用量信息"""
    if not getattr(response, "usage", None):
        return {}
    return {
        "prompt_tokens": response.usage.prompt_tokens,
        "completion_tokens": response.usage.completion_tokens,
        "total_tokens": response.usage.total_tokens
    }


def handle_openai_exception(exception, base_url: Optional[str] = None) -> str:
    """统一处理OpenAI异常

    Args:
        exception: 异常对象
        base_url: API基础URL (可选)

    Returns:
        格式化的错误消息
    """
    # 子类需要先于父类判断
    if isinstance(exception, openai.APITimeoutError):
        return f"API请求超时: {str(exception)}"

    if isinstance(exception, openai.AuthenticationError):
        return f"API认证失败，请检查API密钥: {str(exception)}"

    if isinstance(exception, openai.RateLimitError):
        return f"API速率限制: {str(exception)}"

    if isinstance(exception, openai.APIConnectionError):
        connection_info = f" ({base_url})" if base_url else ""
        return f"无法连接到API{connection_info}: {str(exception)}"

    if isinstance(exception, openai.APIStatusError):
        return f"API调用失败 (状态码: {exception.status_code}): {str(exception)}"

    return f"API调用失败 ({type(exception).__name__}): {str(exception)}"


def translate_openai_exception(exception, model_name: str, base_url: Optional[str] = None) -> AIServiceError:
    """将OpenAI SDK异常转换为统一的AI服务异常"""
    message = handle_openai_exception(exception, base_url)
    details = {"model": model_name, "error_type": type(exception).__name__}
    logger.error(
        "OpenAI兼容接口调用失败",
        operation="openai_compatible_error",
        error=str(exception),
        error_type=type(exception).__name__
    )
    if isinstance(exception, openai.APITimeoutError):
        return ModelTimeoutError(message, details=details)
    return AIServiceError(message, "OPENAI_API_ERROR", details)


def get_trace_inputs(model_name: str, base_url: Optional[str], messages, temperature: float, max_tokens: int) -> Dict[str, Any]:
    """获取用于MLflow追踪的输入数据"""
    return {
        "model": model_name,
        "base_url": base_url,
        "message_count": len(messages),
        "temperature": temperature,
        "max_tokens": max_tokens
    }
