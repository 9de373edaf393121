"""
文档分析API端点
负责接收文档并返回分析结果
"""

from fastapi import APIRouter, Depends, File, UploadFile

from pptmaker.core.log_utils import get_logger
from pptmaker.schemas.common import StandardResponse
from pptmaker.schemas.document_analysis import DocumentAnalysisRequest
from pptmaker.services.analysis.handler import DocumentAnalysisHandler

logger = get_logger(__name__)

router = APIRouter(tags=["文档分析"])


def get_analysis_handler() -> DocumentAnalysisHandler:
    return DocumentAnalysisHandler()


@router.post(
    "/document",
    response_model=StandardResponse,
    summary="分析文档",
    description="分析Data URI形式的文档，提取主题、子主题、数据点、引用和摘要"
)
async def analyze_document(
    request: DocumentAnalysisRequest,
    handler: DocumentAnalysisHandler = Depends(get_analysis_handler)
) -> StandardResponse:
    """
    分析文档

    Args:
        request: 包含documentDataUri的请求体
        handler: 文档分析处理器

    Returns:
        StandardResponse: data为文档分析结果
    """
    result = await handler.handle_analyze_document(request)
    return StandardResponse(
        status="success",
        message="文档分析成功",
        data=result.model_dump(by_alias=True)
    )


@router.post(
    "/upload",
    response_model=StandardResponse,
    summary="上传并分析文档",
    description="上传PDF、DOCX或TXT文件并返回分析结果"
)
async def analyze_uploaded_document(
    file: UploadFile = File(..., description="待分析的文档"),
    handler: DocumentAnalysisHandler = Depends(get_analysis_handler)
) -> StandardResponse:
    content = await file.read()
    result = await handler.handle_analyze_upload(
        filename=file.filename,
        content_type=file.content_type,
        content=content
    )
    return StandardResponse(
        status="success",
        message="文档分析成功",
        data=result.model_dump(by_alias=True)
    )
