"""
Google GenAI (Gemini) 图片生成提供商
基于 Google GenAI SDK 实现，同时请求文本与图片两种输出模态
"""

from typing import Optional
from PIL import Image, UnidentifiedImageError
import io
import base64
import asyncio
from functools import partial

from google.genai import types

from pptmaker.core.ai.providers.base.image_gen import BaseImageGenProvider
from pptmaker.core.ai.models import ImageGenerationResult
from pptmaker.core.ai.tracker import MLflowTracingMixin
from pptmaker.core.log_utils import get_logger
from .utils import create_genai_client, is_timeout_error

logger = get_logger(__name__)


class GenAIImageProvider(BaseImageGenProvider, MLflowTracingMixin):
    """Google GenAI 图片生成提供商"""

    # 支持的比例
    SUPPORTED_ASPECT_RATIOS = ["1:1", "2:3", "3:2", "3:4", "4:3", "4:5", "5:4", "9:16", "16:9", "21:9"]

    def __init__(self, model_config):
        """
        初始化GenAI提供商

        Args:
            model_config: AI模型配置对象
        """
        BaseImageGenProvider.__init__(self, model_config)
        self._initialize_mlflow()

        self.client = create_genai_client(model_config)
        self.model = model_config.model_name

        logger.info(
            "GenAIImageProvider初始化成功",
            operation="genai_init_success",
            model=self.model,
            has_api_base=bool(model_config.base_url)
        )

    def get_provider_name(self) -> str:
        """获取Provider名称"""
        return "genai"

    def _build_config(self, aspect_ratio: Optional[str]) -> types.GenerateContentConfig:
        # 模型要求同时声明TEXT与IMAGE两种模态，即使只使用图片
        config = types.GenerateContentConfig(response_modalities=['TEXT', 'IMAGE'])
        if aspect_ratio:
            if aspect_ratio in self.SUPPORTED_ASPECT_RATIOS:
                config.image_config = types.ImageConfig(aspect_ratio=aspect_ratio)
            else:
                logger.warning(
                    f"不支持的比例 {aspect_ratio}，使用模型默认值",
                    operation="aspect_ratio_fallback"
                )
        return config

    @staticmethod
    def _encode_png(raw: bytes) -> str:
        """用PIL重新编码为PNG并转换为Data URI"""
        image = Image.open(io.BytesIO(raw))
        buffered = io.BytesIO()
        image.save(buffered, format="PNG")
        img_base64 = base64.b64encode(buffered.getvalue()).decode()
        return f"data:image/png;base64,{img_base64}"

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: Optional[str] = None,
        **kwargs
    ) -> ImageGenerationResult:
        """
        生成图片

        Args:
            prompt: 图片生成提示词
            aspect_ratio: 图片比例（可选，仅部分模型支持）
            **kwargs: 额外参数

        Returns:
            ImageGenerationResult: 生成结果
        """
        async def call_api() -> ImageGenerationResult:
            logger.info(
                "调用GenAI API生成图片",
                operation="genai_generate_start",
                model=self.model,
                prompt_length=len(prompt)
            )

            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(
                None,
                partial(
                    self.client.models.generate_content,
                    model=self.model,
                    contents=prompt,
                    config=self._build_config(aspect_ratio)
                )
            )

            parts = response.parts or []
            if not parts:
                return ImageGenerationResult(success=False, error_message="API响应中没有内容")

            texts = []
            for part in parts:
                if part.text:
                    texts.append(part.text)
                    continue

                if part.inline_data and part.inline_data.data:
                    try:
                        image_url = self._encode_png(part.inline_data.data)
                    except (UnidentifiedImageError, OSError) as e:
                        logger.debug(f"提取图片失败: {str(e)}")
                        continue

                    logger.info("图片生成成功", operation="genai_image_success")
                    return ImageGenerationResult(
                        success=True,
                        image_url=image_url,
                        text="\n".join(texts) or None,
                        metadata={
                            "model": self.model,
                            "source_mime_type": part.inline_data.mime_type
                        }
                    )

            return ImageGenerationResult(
                success=False,
                text="\n".join(texts) or None,
                error_message="响应中未包含图片数据"
            )

        try:
            return await self._with_mlflow_trace(
                operation_name="genai_generate_image",
                inputs={"model": self.model, "prompt": prompt[:500]},
                call_func=call_api
            )
        except Exception as e:
            prefix = "GenAI 图片生成超时" if is_timeout_error(e) else "GenAI 图片生成错误"
            error_msg = f"{prefix}: {str(e)}"
            logger.error(error_msg, operation="genai_generation_failed", exception=e)
            return ImageGenerationResult(success=False, error_message=error_msg)
