"""
配图生成Service
把一段文字描述渲染为单张图片，以Data URI返回
"""

from typing import Optional

from pptmaker.core.ai.exceptions import VisualGenerationError
from pptmaker.core.llm.client import AIClient, get_ai_client
from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages
from pptmaker.prompts import get_prompt_manager
from pptmaker.prompts.utils import PromptHelper
from pptmaker.utils.data_uri import is_image_data_uri

logger = get_logger(__name__)


class VisualizerService:
    """配图生成服务"""

    def __init__(self, ai_client: Optional[AIClient] = None):
        self.ai_client = ai_client or get_ai_client()
        self.prompt_manager = get_prompt_manager()
        self.prompt_helper = PromptHelper(self.prompt_manager)

    def build_prompt(self, prompt_text: str, template_details: Optional[str] = None) -> str:
        """渲染图片模型使用的完整提示词"""
        system_prompt, user_prompt, _, _ = self.prompt_helper.prepare_prompts(
            category="presentation",
            template_name="visual_generation",
            user_prompt_params={
                "prompt_text": prompt_text,
                "template_details": template_details
            }
        )
        return f"{system_prompt}\n\n{user_prompt}"

    async def generate_visual(self, prompt_text: str, template_details: Optional[str] = None) -> str:
        """
        生成单张配图

        Args:
            prompt_text: 需要可视化的文字描述
            template_details: 模板与风格提示（可选）

        Returns:
            str: 图片Data URI

        Raises:
            VisualGenerationError: 模型未返回图片或返回的不是图片Data URI
        """
        logger.info(
            log_messages.VISUAL_GENERATION_START,
            operation="generate_visual",
            prompt_preview=prompt_text[:100],
            has_template_details=bool(template_details)
        )

        result = await self.ai_client.image_call(self.build_prompt(prompt_text, template_details))

        if not result.success:
            raise VisualGenerationError(
                result.error_message or "Visual generation failed",
                details={"prompt": prompt_text[:200]}
            )

        if not result.image_url:
            raise VisualGenerationError(
                "Model did not return an image",
                details={"prompt": prompt_text[:200], "text": result.text}
            )

        if not is_image_data_uri(result.image_url):
            raise VisualGenerationError(
                "Model returned an image that is not a data URI",
                details={"prompt": prompt_text[:200], "image_url": result.image_url[:100]}
            )

        logger.info(
            log_messages.VISUAL_GENERATION_SUCCESS,
            operation="generate_visual",
            data_uri_length=len(result.image_url)
        )
        return result.image_url
