"""
MLflow追踪器模块
为AI模型调用提供可选的MLflow追踪，默认关闭
"""

import mlflow

from pptmaker.core.config import settings
from pptmaker.core.log_utils import get_logger

logger = get_logger(__name__)


class MLflowTracker:
    """MLflow追踪器"""

    # 支持自动追踪的SDK，键为provider名称
    AUTOLOG_FLAVORS = {
        "openai_compatible": "openai",
        "genai": "gemini",
    }

    def __init__(self):
        self.is_initialized = False
        self.autolog_flavors = set()

    def initialize(self) -> bool:
        """初始化MLflow追踪器"""
        if self.is_initialized:
            return True

        if not settings.enable_mlflow:
            logger.debug("MLflow追踪已被禁用")
            return False

        try:
            mlflow.set_tracking_uri(settings.mlflow_tracking_uri)

            try:
                experiment = mlflow.get_experiment_by_name(settings.mlflow_experiment_name)
                if experiment is None:
                    mlflow.create_experiment(settings.mlflow_experiment_name)
                mlflow.set_experiment(settings.mlflow_experiment_name)
                logger.info(f"MLflow实验已设置: {settings.mlflow_experiment_name}")
            except Exception as e:
                logger.warning(f"MLflow实验设置失败: {e}")

            self.is_initialized = True
            logger.info(f"MLflow追踪器初始化成功: {settings.mlflow_tracking_uri}")
            return True

        except Exception as e:
            logger.error(f"MLflow追踪器初始化失败: {e}", exception=e)
            return False

    def enable_autolog(self, provider_name: str) -> bool:
        """
        为指定provider对应的SDK启用自动追踪

        Args:
            provider_name: provider名称（genai / openai_compatible）

        Returns:
            是否已启用
        """
        flavor = self.AUTOLOG_FLAVORS.get(provider_name)
        if flavor is None:
            return False
        if flavor in self.autolog_flavors:
            return True

        if not self.is_initialized and not self.initialize():
            return False

        try:
            getattr(mlflow, flavor).autolog(log_traces=True)
            self.autolog_flavors.add(flavor)
            logger.info(f"{flavor}自动追踪已启用")
            return True
        except Exception as e:
            logger.error(f"启用{flavor}自动追踪失败: {e}", exception=e)
            return False


# 全局MLflow追踪器实例
mlflow_tracker = MLflowTracker()


def get_mlflow_tracker() -> MLflowTracker:
    """获取MLflow追踪器实例"""
    return mlflow_tracker


def ensure_mlflow_initialized(provider_name: str) -> bool:
    """确保MLflow已初始化并为provider启用自动追踪"""
    tracker = get_mlflow_tracker()
    if not tracker.is_initialized:
        tracker.initialize()
    if tracker.is_initialized:
        tracker.enable_autolog(provider_name)
    return tracker.is_initialized
