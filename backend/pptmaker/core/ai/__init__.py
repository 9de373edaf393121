"""
AI模型交互统一模块
提供统一的AI Provider接口和多种提供商实现
"""

from .base import BaseAIProvider
from .models import ModelCapability, ImageGenerationResult, ChatAttachment, ToolDefinition
from .config import ModelConfig
from .factory import AIProviderFactory
from .registry import register_all_providers
from .exceptions import (
    AIServiceError,
    ModelOutputError,
    ModelTimeoutError,
    VisualGenerationError,
    ProviderNotAvailableError,
    EmptyStructureError,
)

__all__ = [
    "BaseAIProvider",
    "ModelCapability",
    "ImageGenerationResult",
    "ChatAttachment",
    "ToolDefinition",
    "ModelConfig",
    "AIProviderFactory",
    "register_all_providers",
    "AIServiceError",
    "ModelOutputError",
    "ModelTimeoutError",
    "VisualGenerationError",
    "ProviderNotAvailableError",
    "EmptyStructureError",
]
