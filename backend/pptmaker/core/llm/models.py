"""
AI模型管理器
根据应用配置为每种能力构建模型配置并缓存Provider实例
"""

from typing import Dict, List, Optional

from pptmaker.core.ai import (
    AIProviderFactory,
    BaseAIProvider,
    ModelCapability,
    ModelConfig,
    ProviderNotAvailableError,
    register_all_providers,
)
from pptmaker.core.config import Settings, settings as app_settings
from pptmaker.core.log_utils import get_logger

logger = get_logger(__name__)


class ModelManager:
    """AI模型管理器"""

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or app_settings
        self._providers: Dict[ModelCapability, BaseAIProvider] = {}
        if not AIProviderFactory.get_available_providers(ModelCapability.CHAT):
            register_all_providers()

    def build_model_config(self, capability: ModelCapability) -> ModelConfig:
        """
        根据配置构建指定能力的模型配置

        Args:
            capability: 模型能力

        Returns:
            ModelConfig实例
        """
        if capability == ModelCapability.CHAT:
            provider = self.settings.text_model_provider
            model_name = self.settings.text_model_name
            api_key = self.settings.text_model_api_key
            base_url = self.settings.text_model_base_url
            parameters = {}
        elif capability == ModelCapability.IMAGE_GEN:
            provider = self.settings.image_model_provider
            model_name = self.settings.image_model_name
            api_key = self.settings.image_model_api_key
            base_url = self.settings.image_model_base_url
            parameters = {
                "width": self.settings.image_default_width,
                "height": self.settings.image_default_height,
            }
        else:
            raise ProviderNotAvailableError(f"不支持的能力: {capability.value}")

        return ModelConfig(
            model_id=f"{provider}:{model_name}",
            model_name=model_name,
            api_key=api_key,
            base_url=base_url,
            capabilities=[capability.value],
            provider_mapping={capability.value: provider},
            parameters=parameters,
            max_tokens=self.settings.ai_default_max_tokens,
            timeout=self.settings.ai_default_timeout,
            max_retries=self.settings.ai_max_retries,
        )

    def get_provider(self, capability: ModelCapability) -> BaseAIProvider:
        """获取（必要时创建）指定能力的Provider实例"""
        if capability not in self._providers:
            model_config = self.build_model_config(capability)
            self._providers[capability] = AIProviderFactory.create(model_config, capability)
        return self._providers[capability]

    def describe(self) -> List[Dict[str, str]]:
        """返回各能力当前配置的Provider与模型"""
        descriptions = []
        for capability in (ModelCapability.CHAT, ModelCapability.IMAGE_GEN):
            model_config = self.build_model_config(capability)
            descriptions.append({
                "capability": capability.value,
                "provider": model_config.get_provider_for_capability(capability),
                "model": model_config.model_name,
                "available_providers": AIProviderFactory.get_available_providers(capability),
            })
        return descriptions

    async def close(self):
        """关闭所有已创建的Provider"""
        for provider in self._providers.values():
            await provider.close()
        self._providers.clear()
