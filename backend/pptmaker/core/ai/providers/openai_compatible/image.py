"""
OpenAI兼容图片生成Provider
通过标准 Images API 生成图片，返回base64数据
"""

from typing import Optional
import io
import base64
from PIL import Image, UnidentifiedImageError

from pptmaker.core.ai.providers.base.image_gen import BaseImageGenProvider
from pptmaker.core.ai.models import ImageGenerationResult
from pptmaker.core.ai.tracker import MLflowTracingMixin
from pptmaker.core.log_utils import get_logger
from .utils import create_openai_client, handle_openai_exception

logger = get_logger(__name__)


class OpenAICompatibleImageProvider(BaseImageGenProvider, MLflowTracingMixin):
    """OpenAI兼容图片生成Provider"""

    def __init__(self, model_config):
        """初始化Provider"""
        BaseImageGenProvider.__init__(self, model_config)
        self._initialize_mlflow()

        self.client = create_openai_client(model_config)
        self.model = model_config.model_name

        logger.info(
            "OpenAI兼容图片生成客户端初始化完成",
            operation="openai_compatible_image_init",
            base_url=model_config.base_url,
            model=self.model
        )

    def get_provider_name(self) -> str:
        """获取Provider名称"""
        return "openai_compatible"

    async def close(self):
        """关闭 OpenAI 客户端"""
        await self.client.close()

    @staticmethod
    def _to_png_data_uri(b64_data: str) -> str:
        image = Image.open(io.BytesIO(base64.b64decode(b64_data)))
        buffered = io.BytesIO()
        image.save(buffered, format="PNG")
        return f"data:image/png;base64,{base64.b64encode(buffered.getvalue()).decode()}"

    async def generate_image(
        self,
        prompt: str,
        size: Optional[str] = None,
        **kwargs
    ) -> ImageGenerationResult:
        """通过标准的 Images Generations API 生成图片"""
        size = size or f"{self.model_config.parameters.get('width', 1024)}x{self.model_config.parameters.get('height', 1024)}"

        async def call_api() -> ImageGenerationResult:
            logger.info(
                "调用 OpenAI 兼容标准 Images API 生成图片",
                operation="openai_standard_image_start",
                model=self.model,
                size=size
            )

            response = await self.client.images.generate(
                model=self.model,
                prompt=prompt,
                size=size,
                n=1,
                response_format="b64_json"
            )

            if not response.data:
                return ImageGenerationResult(success=False, error_message="标准 API 未返回图片数据")

            item = response.data[0]
            if item.b64_json:
                try:
                    image_url = self._to_png_data_uri(item.b64_json)
                except (UnidentifiedImageError, OSError, ValueError) as e:
                    return ImageGenerationResult(success=False, error_message=f"图片数据无法解码: {e}")
                return ImageGenerationResult(
                    success=True,
                    image_url=image_url,
                    text=getattr(item, "revised_prompt", None),
                    metadata={"model": self.model, "method": "standard_api"}
                )

            # 部分兼容服务忽略response_format，只返回URL
            if item.url:
                return ImageGenerationResult(
                    success=True,
                    image_url=item.url,
                    metadata={"model": self.model, "method": "standard_api_url"}
                )

            return ImageGenerationResult(success=False, error_message="标准 API 未返回图片数据")

        try:
            return await self._with_mlflow_trace(
                operation_name="openai_compatible_generate_image",
                inputs={"model": self.model, "prompt": prompt[:500], "size": size},
                call_func=call_api
            )
        except Exception as e:
            error_msg = handle_openai_exception(e, self.model_config.base_url)
            logger.error("标准API生成图片失败", operation="openai_standard_image_error", error=str(e))
            return ImageGenerationResult(success=False, error_message=error_msg)
