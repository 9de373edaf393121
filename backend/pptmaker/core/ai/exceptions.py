"""
AI服务异常定义
"""

from typing import Optional, Dict, Any


class AIServiceError(Exception):
    """AI服务基础异常"""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code or "AI_SERVICE_ERROR"
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ModelOutputError(AIServiceError):
    """模型返回空结果或结果不符合预期结构"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "MODEL_OUTPUT_ERROR", details)


class ModelTimeoutError(AIServiceError):
    """模型调用超时"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "MODEL_TIMEOUT", details)


class VisualGenerationError(AIServiceError):
    """配图生成失败"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VISUAL_GENERATION_ERROR", details)


class ProviderNotAvailableError(AIServiceError):
    """请求的Provider未注册或未配置"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PROVIDER_NOT_AVAILABLE", details)


class EmptyStructureError(ModelOutputError):
    """模型没有返回任何幻灯片"""
