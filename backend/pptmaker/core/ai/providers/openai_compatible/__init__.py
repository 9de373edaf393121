"""
OpenAI兼容Provider（支持DeepSeek、智谱AI、OpenRouter等）
"""

from .chat import OpenAICompatibleChatProvider
from .image import OpenAICompatibleImageProvider

__all__ = [
    "OpenAICompatibleChatProvider",
    "OpenAICompatibleImageProvider",
]
