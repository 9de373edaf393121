"""
AI模型信息API端点
返回当前配置的对话模型和图片模型
"""

from fastapi import APIRouter

from pptmaker.core.llm.models import ModelManager
from pptmaker.core.log_utils import get_logger
from pptmaker.schemas.common import ModelInfo, StandardResponse

logger = get_logger(__name__)

router = APIRouter(tags=["AI模型信息"])


@router.get(
    "",
    response_model=StandardResponse,
    summary="获取AI模型配置",
    description="按能力列出当前使用的Provider、模型名称和已注册的Provider"
)
async def list_ai_models() -> StandardResponse:
    """
    获取AI模型配置

    Returns:
        StandardResponse: 包含每种能力的模型信息
    """
    models = [ModelInfo(**item) for item in ModelManager().describe()]

    logger.info(
        "成功获取AI模型配置",
        operation="list_models_success",
        total_models=len(models)
    )

    return StandardResponse(
        status="success",
        message="获取AI模型配置成功",
        data=[model.model_dump() for model in models]
    )
