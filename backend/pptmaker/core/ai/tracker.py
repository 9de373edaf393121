"""
统一的MLflow追踪Mixin
为所有AI Provider提供MLflow追踪功能
"""

from typing import Dict, Any, Callable
import time
import mlflow

from pptmaker.core.log_utils import get_logger
from pptmaker.core.mlflow_tracker import get_mlflow_tracker, ensure_mlflow_initialized

logger = get_logger(__name__)


class MLflowTracingMixin:
    """MLflow追踪Mixin类

    为继承它的类提供MLflow追踪功能
    需要子类实现：
    - model_config 属性
    - get_provider_name() 方法
    """

    def _initialize_mlflow(self):
        """初始化MLflow追踪，未启用时静默跳过"""
        self.mlflow_tracker = get_mlflow_tracker()
        try:
            if ensure_mlflow_initialized(self.get_provider_name()):
                logger.info(
                    "MLflow追踪已启用",
                    operation="ai_provider_mlflow_init_success",
                    provider=self.__class__.__name__
                )
        except Exception as e:
            logger.error(
                "初始化MLflow追踪时出现错误",
                operation="ai_provider_mlflow_init_error",
                provider=self.__class__.__name__,
                exception=e
            )

    def _get_model_name(self) -> str:
        """获取模型名称"""
        if hasattr(self, 'model_config') and hasattr(self.model_config, 'model_name'):
            return self.model_config.model_name
        return "unknown"

    async def _with_mlflow_trace(
        self,
        operation_name: str,
        inputs: Dict[str, Any],
        call_func: Callable
    ) -> Any:
        """使用MLflow trace API进行追踪

        Args:
            operation_name: 操作名称
            inputs: 输入参数
            call_func: 实际执行函数

        Returns:
            执行结果
        """
        model_name = self._get_model_name()
        start_time = time.time()
        tracker = getattr(self, "mlflow_tracker", None)

        try:
            if tracker is None or not tracker.is_initialized:
                return await call_func()

            trace_name = f"{self.__class__.__name__}_{model_name}_{operation_name}"
            with mlflow.start_span(name=trace_name, span_type="CHAIN") as span:
                span.set_inputs(inputs)
                result = await call_func()
                if hasattr(result, '__dict__'):
                    span.set_outputs({k: str(v)[:500] for k, v in result.__dict__.items()})
                else:
                    span.set_outputs({"result": str(result)[:500]})
                span.set_attribute("success", True)
                return result
        finally:
            duration = time.time() - start_time
            logger.info(
                f"{operation_name}完成",
                operation=f"ai_provider_{operation_name}",
                provider=self.__class__.__name__,
                model=model_name,
                duration_seconds=round(duration, 3)
            )
