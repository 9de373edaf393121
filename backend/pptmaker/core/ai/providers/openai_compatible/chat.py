"""
OpenAI兼容对话Provider（支持DeepSeek、智谱AI、OpenRouter等）
"""

import json
from typing import Any, Dict, List, Optional

from pptmaker.core.ai.exceptions import AIServiceError
from pptmaker.core.ai.models import ChatAttachment, ToolDefinition
from pptmaker.core.ai.providers.base.chat import BaseChatProvider
from pptmaker.core.ai.tracker import MLflowTracingMixin
from pptmaker.core.log_utils import get_logger
from pptmaker.utils.data_uri import build_data_uri
from .utils import (
    create_openai_client,
    format_usage,
    translate_openai_exception,
    get_trace_inputs
)

logger = get_logger(__name__)


class OpenAICompatibleChatProvider(BaseChatProvider, MLflowTracingMixin):
    """OpenAI兼容对话Provider

    支持所有兼容OpenAI Chat Completions API的提供商
    """

    def __init__(self, model_config):
        """初始化Provider"""
        BaseChatProvider.__init__(self, model_config)
        self._initialize_mlflow()

        self.client = create_openai_client(model_config)

        logger.info(
            "OpenAI兼容客户端初始化完成",
            operation="openai_compatible_init",
            base_url=model_config.base_url,
            model=model_config.model_name
        )

    def get_provider_name(self) -> str:
        """获取Provider名称"""
        return "openai_compatible"

    async def close(self):
        """关闭 OpenAI 客户端"""
        await self.client.close()

    @staticmethod
    def _attachment_parts(attachments: List[ChatAttachment]) -> List[Dict[str, Any]]:
        """文本附件直接内联，图片走image_url，其余文件走file内容块"""
        parts = []
        for index, attachment in enumerate(attachments):
            if attachment.is_text:
                parts.append({
                    "type": "text",
                    "text": attachment.data.decode("utf-8", errors="replace")
                })
            elif attachment.mime_type.startswith("image/"):
                parts.append({
                    "type": "image_url",
                    "image_url": {"url": build_data_uri(attachment.data, attachment.mime_type)}
                })
            else:
                parts.append({
                    "type": "file",
                    "file": {
                        "filename": f"document-{index + 1}",
                        "file_data": build_data_uri(attachment.data, attachment.mime_type)
                    }
                })
        return parts

    def _build_messages(
        self,
        messages: List[Dict[str, str]],
        attachments: Optional[List[ChatAttachment]]
    ) -> List[Dict[str, Any]]:
        built = [dict(message) for message in messages]
        if attachments and built:
            last = built[-1]
            last["content"] = self._attachment_parts(attachments) + [
                {"type": "text", "text": last["content"]}
            ]
        return built

    @staticmethod
    def _build_tools(tools: List[ToolDefinition]) -> List[Dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.parameters
                }
            }
            for tool in tools
        ]

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
        OpenAI兼容对话接口

        Returns:
            {"content": str, "model": str, "usage": dict, "tool_rounds": int}
        """
        logger.info(
            "OpenAI兼容对话请求",
            operation="openai_compatible_chat",
            model=self.model_config.model_name,
            base_url=self.model_config.base_url,
            message_count=len(messages),
            attachment_count=len(attachments or []),
            tool_count=len(tools or []),
            temperature=temperature,
            max_tokens=max_tokens
        )

        conversation = self._build_messages(messages, attachments)
        handlers = {tool.name: tool.handler for tool in tools or []}

        async def call_api():
            tool_rounds = 0
            while True:
                allow_tools = bool(handlers) and tool_rounds < max_tool_rounds
                request: Dict[str, Any] = {
                    "model": self.model_config.model_name,
                    "messages": conversation,
                    "temperature": temperature,
                    "max_tokens": max_tokens,
                }
                if json_mode:
                    request["response_format"] = {"type": "json_object"}
                if handlers:
                    request["tools"] = self._build_tools(tools)
                    request["tool_choice"] = "auto" if allow_tools else "none"
                request.update(kwargs)

                try:
                    response = await self.client.chat.completions.create(**request)
                except Exception as e:
                    raise translate_openai_exception(
                        e, self.model_config.model_name, self.model_config.base_url
                    ) from e

                message = response.choices[0].message
                tool_calls = message.tool_calls or []
                if not tool_calls or not allow_tools:
                    return {
                        "content": message.content,
                        "model": response.model,
                        "usage": format_usage(response),
                        "tool_rounds": tool_rounds
                    }

                tool_rounds += 1
                conversation.append({
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [call.model_dump() for call in tool_calls]
                })
                for call in tool_calls:
                    handler = handlers.get(call.function.name)
                    if handler is None:
                        raise AIServiceError(
                            f"模型请求了未注册的工具: {call.function.name}",
                            "UNKNOWN_TOOL",
                            {"tool": call.function.name}
                        )
                    try:
                        arguments = json.loads(call.function.arguments or "{}")
                    except json.JSONDecodeError as e:
                        raise AIServiceError(
                            f"工具参数不是合法JSON: {call.function.arguments}",
                            "INVALID_TOOL_ARGUMENTS",
                            {"tool": call.function.name}
                        ) from e
                    logger.info(
                        "执行模型工具调用",
                        operation="openai_compatible_tool_call",
                        tool=call.function.name,
                        round=tool_rounds
                    )
                    result = await handler(arguments)
                    conversation.append({
                        "role": "tool",
                        "tool_call_id": call.id,
                        "content": json.dumps(result, ensure_ascii=False)
                    })

        return await self._with_mlflow_trace(
            operation_name="openai_compatible_chat",
            inputs=get_trace_inputs(
                self.model_config.model_name,
                self.model_config.base_url,
                messages,
                temperature,
                max_tokens
            ),
            call_func=call_api
        )
