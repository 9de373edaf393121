"""
AI Provider注册中心
管理所有Provider的注册
"""

from pptmaker.core.log_utils import get_logger
from .factory import AIProviderFactory
from .models import ModelCapability

logger = get_logger(__name__)


def register_all_providers():
    """注册所有Provider（按提供商组织）"""

    logger.info("开始注册所有AI Provider")

    # ===== Google GenAI =====
    from .providers.genai.chat import GenAIChatProvider
    from .providers.genai.image import GenAIImageProvider

    AIProviderFactory.register(ModelCapability.CHAT, "genai", GenAIChatProvider)
    AIProviderFactory.register(ModelCapability.IMAGE_GEN, "genai", GenAIImageProvider)

    logger.info("GenAI Provider注册完成")

    # ===== OpenAI兼容（跨提供商） =====
    from .providers.openai_compatible.chat import OpenAICompatibleChatProvider
    from .providers.openai_compatible.image import OpenAICompatibleImageProvider

    AIProviderFactory.register(ModelCapability.CHAT, "openai_compatible", OpenAICompatibleChatProvider)
    AIProviderFactory.register(ModelCapability.IMAGE_GEN, "openai_compatible", OpenAICompatibleImageProvider)

    logger.info("OpenAI兼容 Provider注册完成")

    logger.info(
        "所有AI Provider注册完成",
        operation="register_all_providers_complete",
        total_capabilities=len(AIProviderFactory._providers)
    )
