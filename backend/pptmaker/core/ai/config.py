"""
AI模型配置管理
"""

from typing import Optional, Dict, Any, List
from .models import ModelCapability


class ModelConfig:
    """AI模型配置类"""

    def __init__(
        self,
        model_id: str,
        model_name: str,
        api_key: str,
        base_url: Optional[str] = None,
        capabilities: Optional[List[str]] = None,
        provider_mapping: Optional[Dict[str, str]] = None,
        parameters: Optional[Dict[str, Any]] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[int] = None,
        max_retries: int = 0
    ):
        """
        初始化模型配置

        Args:
            model_id: 模型ID
            model_name: 模型名称（如 "gemini-2.0-flash"）
            api_key: API密钥
            base_url: API基础URL
            capabilities: 支持的能力列表
            provider_mapping: Provider映射（如 {"chat": "genai"}）
            parameters: 其他参数
            max_tokens: 最大Token数
            timeout: 请求超时（秒）
            max_retries: SDK层面的重试次数
        """
        self.model_id = model_id
        self.model_name = model_name
        self.api_key = api_key
        self.base_url = base_url
        self.capabilities = capabilities or []
        self.provider_mapping = provider_mapping or {}
        self.parameters = parameters or {}
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries

    def get_provider_for_capability(self, capability: ModelCapability) -> Optional[str]:
        """获取某个能力对应的Provider名称，未配置则返回None"""
        return self.provider_mapping.get(capability.value)
