"""
文档分析Service（核心业务逻辑）
负责输入校验、LLM调用、结构化结果校验
"""

import json
from typing import Optional

from pptmaker.core.ai.models import ChatAttachment
from pptmaker.core.config import settings
from pptmaker.core.llm.client import AIClient, get_ai_client
from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages
from pptmaker.prompts import get_prompt_manager
from pptmaker.prompts.utils import PromptHelper
from pptmaker.schemas.document_analysis import DocumentAnalysis
from pptmaker.utils.data_uri import DataURI, parse_data_uri

logger = get_logger(__name__)


class DocumentAnalysisService:
    """文档分析服务"""

    def __init__(self, ai_client: Optional[AIClient] = None):
        self.ai_client = ai_client or get_ai_client()
        self.prompt_manager = get_prompt_manager()
        self.prompt_helper = PromptHelper(self.prompt_manager)

    def validate_document(self, document_data_uri: str) -> DataURI:
        """
        校验文档Data URI的格式、类型和大小

        Raises:
            ValueError: 校验失败
        """
        document = parse_data_uri(document_data_uri)

        if document.mime_type not in settings.allowed_document_mime_types:
            logger.warning(
                log_messages.FILE_VALIDATION_FAILED,
                operation="validate_document",
                mime_type=document.mime_type
            )
            raise ValueError(
                f"不支持的文档类型: {document.mime_type}，"
                f"支持的类型: {', '.join(settings.allowed_document_mime_types)}"
            )

        if document.size == 0:
            raise ValueError("文档内容为空")

        if document.size > settings.max_upload_size:
            raise ValueError(
                f"文档大小 {document.size} 字节超过上限 {settings.max_upload_size} 字节"
            )

        return document

    async def analyze_document(self, document_data_uri: str) -> DocumentAnalysis:
        """
        分析文档，提取主题、子主题、数据点、引用和摘要

        Args:
            document_data_uri: 文档Data URI

        Returns:
            DocumentAnalysis: 模型返回的结构化结果，原样返回

        Raises:
            ValueError: 文档校验失败
            ModelOutputError: 模型输出为空或不符合结构
        """
        document = self.validate_document(document_data_uri)

        logger.info(
            log_messages.DOCUMENT_ANALYSIS_START,
            operation="analyze_document",
            mime_type=document.mime_type,
            document_size=document.size
        )

        system_prompt, user_prompt, temperature, max_tokens = self.prompt_helper.prepare_prompts(
            category="presentation",
            template_name="document_analysis",
            user_prompt_params={"mime_type": document.mime_type},
            system_prompt_params={
                "output_schema": json.dumps(DocumentAnalysis.model_json_schema(by_alias=True))
            }
        )

        analysis = await self.ai_client.structured_call(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            output_model=DocumentAnalysis,
            temperature=temperature,
            max_tokens=max_tokens,
            attachments=[ChatAttachment(mime_type=document.mime_type, data=document.data)]
        )

        logger.info(
            log_messages.DOCUMENT_ANALYSIS_SUCCESS,
            operation="analyze_document",
            topics_count=len(analysis.topics),
            data_points_count=len(analysis.data_points),
            quotes_count=len(analysis.quotes)
        )
        return analysis
