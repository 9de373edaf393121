"""
AI模型交互的数据模型
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Callable, Awaitable


class ModelCapability(str, Enum):
    """模型能力枚举"""
    CHAT = "chat"
    IMAGE_GEN = "image_gen"


@dataclass
class ImageGenerationResult:
    """图片生成结果"""
    success: bool
    image_url: Optional[str] = None
    text: Optional[str] = None  # 模型随图片一起返回的文字
    error_message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ChatAttachment:
    """随对话一起发送给模型的内联文件"""
    mime_type: str
    data: bytes

    @property
    def is_text(self) -> bool:
        return self.mime_type.startswith("text/")


@dataclass
class ToolDefinition:
    """
    可供模型调用的工具

    parameters 为JSON Schema对象；handler 接收模型给出的参数字典，
    返回可JSON序列化的结果
    """
    name: str
    description: str
    parameters: Dict[str, Any]
    handler: Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]
    metadata: Dict[str, Any] = field(default_factory=dict)
