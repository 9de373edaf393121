"""
应用配置管理模块
统一管理所有配置信息，包括环境变量和文件配置
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator, ConfigDict

from pptmaker.utils.config_utils import (
    get_workspace_path, get_config_path, parse_list_config, parse_json_config
)


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "AI PPT Maker"
    app_version: str = "1.0.0"
    app_debug: bool = True

    # ==================== API配置 ====================
    api_v1_str: str = "/api/v1"
    project_name: str = "AI PPT Maker API"

    # ==================== 文件上传配置 ====================
    max_upload_size: int = 10485760  # 10MB

    # 文档分析允许的文件类型
    allowed_document_extensions: str = "pdf,docx,txt"
    allowed_document_mime_types: str = (
        "application/pdf,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document,"
        "text/plain"
    )

    # ==================== MLflow配置 ====================
    enable_mlflow: bool = False
    mlflow_tracking_uri: str = "http://localhost:5001"
    mlflow_experiment_name: str = "ai-ppt-maker-experiment"

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_file: str = "backend.log"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== 应用服务配置 ====================
    app_port: int = 8080
    app_host: str = "0.0.0.0"

    # ==================== AI模型默认配置 ====================
    ai_default_temperature: float = 0.7
    ai_default_max_tokens: int = 8192
    ai_default_timeout: int = 240
    # 模型调用不做重试，失败即终止当前工作单元
    ai_max_retries: int = 0
    # 结构生成阶段允许模型调用工具的最大轮数
    ai_max_tool_rounds: int = 5

    # ==================== 文本模型配置 ====================
    # provider: genai | openai_compatible
    text_model_provider: str = "genai"
    text_model_name: str = "gemini-2.0-flash"
    text_model_api_key: str = ""
    text_model_base_url: Optional[str] = None

    # ==================== 图片模型配置 ====================
    image_model_provider: str = "genai"
    image_model_name: str = "gemini-2.0-flash-exp"
    image_model_api_key: str = ""
    image_model_base_url: Optional[str] = None

    # 默认图片尺寸（仅openai_compatible图片接口使用）
    image_default_width: int = 1024
    image_default_height: int = 1024

    # ==================== 网络搜索工具配置 ====================
    enable_web_search: bool = True
    # 搜索提供商: placeholder
    search_provider: str = "placeholder"
    search_max_results: int = 3

    # ==================== CORS配置 ====================
    cors_origins: str = '["http://localhost:9002", "http://127.0.0.1:9002"]'

    # ==================== 验证器 ====================
    @field_validator("allowed_document_extensions", "allowed_document_mime_types")
    @classmethod
    def split_list_config(cls, value: str) -> List[str]:
        """将逗号分隔的配置字符串转换为列表"""
        return parse_list_config(value)

    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, value: str) -> List[str]:
        """解析CORS origins配置"""
        return parse_json_config(value)

    @field_validator("text_model_provider", "image_model_provider", "search_provider")
    @classmethod
    def normalize_provider(cls, value: str) -> str:
        """提供商名称统一为小写"""
        return value.strip().lower()

    # ==================== 计算属性 ====================
    @property
    def absolute_log_file(self) -> str:
        """获取绝对日志文件路径"""
        return str(get_workspace_path("log") / self.log_file)

    model_config = ConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        validate_default=True
    )


def get_settings() -> Settings:
    """获取应用配置实例"""
    # 环境变量文件加载由外部环境控制（Docker Compose、launch.json等）
    return Settings()


# 全局配置实例
settings = get_settings()
