"""
AI客户端
封装模型选择、结构化输出校验与图片生成调用
"""

from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from pptmaker.core.ai import (
    ChatAttachment,
    ImageGenerationResult,
    ModelCapability,
    ModelOutputError,
    ToolDefinition,
)
from pptmaker.core.config import settings
from pptmaker.core.llm.models import ModelManager
from pptmaker.core.log_utils import get_logger
from pptmaker.utils.json_utils import ResponseParser

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class AIClient:
    """AI客户端门面"""

    def __init__(self, model_manager: Optional[ModelManager] = None):
        """初始化AI客户端"""
        self.model_manager = model_manager or ModelManager()

    async def structured_call(
        self,
        system_prompt: str,
        user_prompt: str,
        output_model: Type[T],
        temperature: float,
        max_tokens: int,
        attachments: Optional[List[ChatAttachment]] = None,
        tools: Optional[List[ToolDefinition]] = None,
    ) -> T:
        """
        调用对话模型并把输出校验为指定的结构化模型

        Args:
            system_prompt: 系统提示词
            user_prompt: 用户提示词
            output_model: 期望的输出pydantic模型
            temperature: 温度参数
            max_tokens: 最大token数
            attachments: 内联文件附件
            tools: 模型可调用的工具

        Returns:
            output_model实例

        Raises:
            ModelOutputError: 模型输出为空、不是JSON或不符合结构
        """
        provider = self.model_manager.get_provider(ModelCapability.CHAT)
        response = await provider.chat(
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            attachments=attachments,
            tools=tools,
            json_mode=True,
            max_tool_rounds=settings.ai_max_tool_rounds,
        )

        content = response.get("content")
        details = {"output_model": output_model.__name__, "model": response.get("model")}
        if not content or not content.strip():
            raise ModelOutputError("模型返回了空结果", details=details)

        try:
            data = ResponseParser.parse_json_response(content)
        except ValueError as e:
            logger.error(
                "模型输出不是合法JSON",
                operation="structured_call_parse_failed",
                exception=e,
                response_preview=content[:300]
            )
            raise ModelOutputError(f"模型输出不是合法JSON: {e}", details=details) from e

        try:
            result = output_model.model_validate(data)
        except ValidationError as e:
            logger.error(
                "模型输出不符合预期结构",
                operation="structured_call_validation_failed",
                exception=e,
                output_model=output_model.__name__
            )
            raise ModelOutputError(f"模型输出不符合预期结构: {e}", details=details) from e

        logger.info(
            "结构化调用完成",
            operation="structured_call_success",
            output_model=output_model.__name__,
            tool_rounds=response.get("tool_rounds", 0),
            usage=response.get("usage", {})
        )
        return result

    async def image_call(self, prompt: str, **kwargs) -> ImageGenerationResult:
        """
        调用图片模型

        Args:
            prompt: 图片描述提示词
            **kwargs: 透传给Provider的参数

        Returns:
            ImageGenerationResult
        """
        provider = self.model_manager.get_provider(ModelCapability.IMAGE_GEN)
        return await provider.generate_image(prompt, **kwargs)

    async def close(self):
        await self.model_manager.close()


# 全局AI客户端实例，首次使用时创建，应用关闭时释放
_ai_client: Optional[AIClient] = None


def get_ai_client() -> AIClient:
    """获取共享的AI客户端实例"""
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client


async def close_ai_client() -> None:
    """关闭共享的AI客户端，释放各Provider持有的SDK连接"""
    global _ai_client
    if _ai_client is not None:
        await _ai_client.close()
        _ai_client = None
