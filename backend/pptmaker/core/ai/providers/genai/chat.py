"""
Google GenAI (Gemini) 对话提供商
基于 Google GenAI SDK 实现，支持内联文档附件与函数调用
"""

from typing import Any, Dict, List, Optional

from google.genai import types

from pptmaker.core.ai.exceptions import AIServiceError
from pptmaker.core.ai.models import ChatAttachment, ToolDefinition
from pptmaker.core.ai.providers.base.chat import BaseChatProvider
from pptmaker.core.ai.tracker import MLflowTracingMixin
from pptmaker.core.log_utils import get_logger
from .utils import create_genai_client, translate_genai_exception

logger = get_logger(__name__)


class GenAIChatProvider(BaseChatProvider, MLflowTracingMixin):
    """Google GenAI 对话提供商"""

    def __init__(self, model_config):
        """
        初始化GenAI对话提供商

        Args:
            model_config: AI模型配置对象
        """
        BaseChatProvider.__init__(self, model_config)
        self._initialize_mlflow()

        self.client = create_genai_client(model_config)
        self.model = model_config.model_name

        logger.info(
            "GenAIChatProvider初始化成功",
            operation="genai_chat_init_success",
            model=self.model,
            has_api_base=bool(model_config.base_url)
        )

    def get_provider_name(self) -> str:
        """获取Provider名称"""
        return "genai"

    def _build_user_content(
        self,
        messages: List[Dict[str, str]],
        attachments: Optional[List[ChatAttachment]]
    ) -> List[types.Content]:
        """构建对话内容，附件放在最后一条用户消息的文本之前"""
        contents = []
        for index, message in enumerate(messages):
            parts = []
            if index == len(messages) - 1 and attachments:
                for attachment in attachments:
                    if attachment.is_text:
                        parts.append(types.Part.from_text(
                            text=attachment.data.decode("utf-8", errors="replace")
                        ))
                    else:
                        parts.append(types.Part.from_bytes(
                            data=attachment.data,
                            mime_type=attachment.mime_type
                        ))
            parts.append(types.Part.from_text(text=message["content"]))
            role = "model" if message.get("role") == "assistant" else "user"
            contents.append(types.Content(role=role, parts=parts))
        return contents

    @staticmethod
    def _build_tools(tools: List[ToolDefinition]) -> List[types.Tool]:
        declarations = [
            types.FunctionDeclaration(
                name=tool.name,
                description=tool.description,
                parameters_json_schema=tool.parameters
            )
            for tool in tools
        ]
        return [types.Tool(function_declarations=declarations)]

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
        GenAI对话接口

        有工具时进入手动函数调用循环：模型返回function_call后在本地执行
        对应handler，把结果作为function_response回传，直到模型给出文本
        或达到最大轮数（最后一轮禁止再调用工具）
        """
        system_prompt, conversation = self.split_system_prompt(messages)
        contents = self._build_user_content(conversation, attachments)
        handlers = {tool.name: tool.handler for tool in tools or []}

        logger.info(
            "GenAI对话请求",
            operation="genai_chat",
            model=self.model,
            message_count=len(messages),
            attachment_count=len(attachments or []),
            tool_count=len(handlers),
            temperature=temperature,
            max_tokens=max_tokens
        )

        async def call_api():
            tool_rounds = 0
            while True:
                allow_tools = bool(handlers) and tool_rounds < max_tool_rounds
                config = types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                )
                if handlers:
                    config.tools = self._build_tools(tools)
                    config.automatic_function_calling = types.AutomaticFunctionCallingConfig(disable=True)
                    config.tool_config = types.ToolConfig(
                        function_calling_config=types.FunctionCallingConfig(
                            mode="AUTO" if allow_tools else "NONE"
                        )
                    )
                elif json_mode:
                    # 函数调用与JSON输出模式不能同时使用
                    config.response_mime_type = "application/json"

                try:
                    response = await self.client.aio.models.generate_content(
                        model=self.model,
                        contents=contents,
                        config=config
                    )
                except Exception as e:
                    raise translate_genai_exception(e, self.model) from e

                function_calls = response.function_calls or []
                if not function_calls or not allow_tools:
                    return {
                        "content": response.text,
                        "model": self.model,
                        "usage": self._format_usage(response),
                        "tool_rounds": tool_rounds
                    }

                tool_rounds += 1
                contents.append(response.candidates[0].content)
                response_parts = []
                for call in function_calls:
                    handler = handlers.get(call.name)
                    if handler is None:
                        raise AIServiceError(
                            f"模型请求了未注册的工具: {call.name}",
                            "UNKNOWN_TOOL",
                            {"tool": call.name}
                        )
                    logger.info(
                        "执行模型工具调用",
                        operation="genai_tool_call",
                        tool=call.name,
                        round=tool_rounds
                    )
                    result = await handler(dict(call.args or {}))
                    response_parts.append(
                        types.Part.from_function_response(name=call.name, response=result)
                    )
                contents.append(types.Content(role="user", parts=response_parts))

        return await self._with_mlflow_trace(
            operation_name="genai_chat",
            inputs={
                "model": self.model,
                "message_count": len(messages),
                "attachment_count": len(attachments or []),
                "tools": list(handlers),
                "temperature": temperature,
                "max_tokens": max_tokens
            },
            call_func=call_api
        )

    @staticmethod
    def _format_usage(response) -> Dict[str, Any]:
        usage = getattr(response, "usage_metadata", None)
        if not usage:
            return {}
        return {
            "prompt_tokens": usage.prompt_token_count,
            "completion_tokens": usage.candidates_token_count,
            "total_tokens": usage.total_token_count
        }
