"""
对话能力Provider基类
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Set

from pptmaker.core.ai.base import BaseAIProvider
from pptmaker.core.ai.models import ModelCapability, ChatAttachment, ToolDefinition


class BaseChatProvider(BaseAIProvider):
    """对话Provider基类"""

    def get_capabilities(self) -> Set[ModelCapability]:
        """获取支持的能力"""
        return {ModelCapability.CHAT}

    @abstractmethod
    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 2048,
        attachments: Optional[List[ChatAttachment]] = None,
        tools: Optional[List[ToolDefinition]] = None,
        json_mode: bool = False,
        max_tool_rounds: int = 5,
        **kwargs
    ) -> Dict[str, Any]:
        """
        对话接口

        Args:
            messages: 对话消息列表，格式为 [{"role": "system"|"user", "content": "..."}]
            temperature: 温度参数，控制输出的随机性
            max_tokens: 最大生成token数
            attachments: 附加到最后一条用户消息的内联文件
            tools: 模型可调用的工具，调用由Provider在本地执行并回传结果
            json_mode: 是否要求模型只输出JSON
            max_tool_rounds: 工具调用的最大轮数，超过后禁止继续调用工具
            **kwargs: 其他参数

        Returns:
            {"content": str, "model": str, "usage": dict, "tool_rounds": int}
        """
        pass

    @staticmethod
    def split_system_prompt(messages: List[Dict[str, str]]):
        """拆分出system消息，返回 (system_prompt, 其余消息)"""
        system_parts = [m["content"] for m in messages if m.get("role") == "system"]
        others = [m for m in messages if m.get("role") != "system"]
        return "\n\n".join(system_parts) or None, others
