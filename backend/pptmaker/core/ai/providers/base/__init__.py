"""
AI能力基类定义
"""

from .chat import BaseChatProvider
from .image_gen import BaseImageGenProvider

__all__ = [
    "BaseChatProvider",
    "BaseImageGenProvider",
]
