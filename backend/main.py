"""
AI PPT Maker - FastAPI主应用
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pptmaker.core.config import settings
from pptmaker.api.v1.router import api_router
from pptmaker.core.ai import register_all_providers
from pptmaker.core.llm.client import close_ai_client
from pptmaker.core.log_utils import setup_logging, get_logger
from pptmaker.core.mlflow_tracker import ensure_mlflow_initialized

# 初始化日志系统
setup_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """应用生命周期管理"""
    logger.info("应用启动中...")

    register_all_providers()

    if settings.enable_mlflow:
        for provider_name in {settings.text_model_provider, settings.image_model_provider}:
            ensure_mlflow_initialized(provider_name)
        logger.info("MLflow追踪已启用", tracking_uri=settings.mlflow_tracking_uri)
    else:
        logger.info("MLflow追踪未启用，AI调用将不会被追踪")

    logger.info(
        "应用启动完成",
        text_model=f"{settings.text_model_provider}/{settings.text_model_name}",
        image_model=f"{settings.image_model_provider}/{settings.image_model_name}",
        web_search=settings.enable_web_search
    )

    yield

    await close_ai_client()
    logger.info("应用关闭")


app = FastAPI(
    title=settings.project_name,
    version=settings.app_version,
    description="根据文档自动生成演示文稿的AI服务",
    openapi_url=f"{settings.api_v1_str}/openapi.json",
    docs_url=f"{settings.api_v1_str}/docs",
    redoc_url=f"{settings.api_v1_str}/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

app.include_router(api_router, prefix=settings.api_v1_str)


@app.get("/")
def read_root():
    """根路径"""
    return {
        "message": settings.app_name,
        "version": settings.app_version,
        "docs": f"{settings.api_v1_str}/docs"
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.log_level.lower()
    )
