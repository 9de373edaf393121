"""
Google GenAI Provider（Gemini系列模型）
"""

from .chat import GenAIChatProvider
from .image import GenAIImageProvider

__all__ = [
    "GenAIChatProvider",
    "GenAIImageProvider",
]
