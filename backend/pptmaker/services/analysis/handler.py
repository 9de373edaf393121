"""
文档分析Handler
负责请求日志、耗时统计和异常映射
"""

import mimetypes
import time
from typing import Optional

from pptmaker.core.config import settings
from pptmaker.core.log_utils import get_logger
from pptmaker.core.log_messages import log_messages
from pptmaker.schemas.document_analysis import DocumentAnalysis, DocumentAnalysisRequest
from pptmaker.services.analysis.service import DocumentAnalysisService
from pptmaker.services.handler_utils import to_http_exception
from pptmaker.utils.data_uri import build_data_uri

logger = get_logger(__name__)

# mimetypes在部分系统上缺少docx映射
_EXTENSION_MIME_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
}


class DocumentAnalysisHandler:
    """文档分析处理器"""

    def __init__(self, service: Optional[DocumentAnalysisService] = None):
        self.service = service or DocumentAnalysisService()

    async def handle_analyze_document(self, request: DocumentAnalysisRequest) -> DocumentAnalysis:
        """处理Data URI形式的文档分析请求"""
        start_time = time.time()

        try:
            logger.info(log_messages.START_OPERATION, operation_name="文档分析")

            result = await self.service.analyze_document(request.document_data_uri)

            logger.info(
                log_messages.OPERATION_SUCCESS,
                operation_name="文档分析",
                duration_ms=int((time.time() - start_time) * 1000)
            )
            return result

        except Exception as e:
            raise to_http_exception(e, "文档分析", time.time() - start_time) from e

    @staticmethod
    def resolve_mime_type(filename: Optional[str], content_type: Optional[str]) -> str:
        """
        确定上传文件的MIME类型

        优先使用扩展名映射，浏览器上报的content_type经常是application/octet-stream
        """
        extension = (filename or "").rsplit(".", 1)[-1].lower() if filename and "." in filename else ""
        if extension:
            if extension not in settings.allowed_document_extensions:
                raise ValueError(
                    f"不支持的文件扩展名: .{extension}，"
                    f"支持的扩展名: {', '.join(settings.allowed_document_extensions)}"
                )
            return _EXTENSION_MIME_TYPES.get(extension) or mimetypes.guess_type(filename)[0] or ""

        if content_type and content_type != "application/octet-stream":
            return content_type.split(";")[0].strip().lower()

        raise ValueError("无法确定上传文件的类型")

    async def handle_analyze_upload(
        self,
        filename: Optional[str],
        content_type: Optional[str],
        content: bytes
    ) -> DocumentAnalysis:
        """处理文件上传形式的文档分析请求，转换为Data URI后复用分析流程"""
        start_time = time.time()

        try:
            logger.info(
                log_messages.FILE_UPLOAD_START,
                operation="analyze_upload",
                upload_filename=filename,
                content_type=content_type,
                file_size=len(content)
            )

            if len(content) > settings.max_upload_size:
                raise ValueError(
                    f"文件大小 {len(content)} 字节超过上限 {settings.max_upload_size} 字节"
                )

            mime_type = self.resolve_mime_type(filename, content_type)
            result = await self.service.analyze_document(build_data_uri(content, mime_type))

            logger.info(
                log_messages.OPERATION_SUCCESS,
                operation_name="上传文档分析",
                upload_filename=filename,
                duration_ms=int((time.time() - start_time) * 1000)
            )
            return result

        except Exception as e:
            raise to_http_exception(e, "上传文档分析", time.time() - start_time) from e
