"""
日志消息模板模块
统一管理所有业务日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 通用日志消息 ====================
    START_OPERATION = "开始执行操作: {operation_name}"
    OPERATION_SUCCESS = "操作成功完成: {operation_name}"
    OPERATION_FAILED = "操作执行失败: {operation_name}"

    # ==================== 文档分析相关 ====================
    DOCUMENT_ANALYSIS_START = "开始分析文档"
    DOCUMENT_ANALYSIS_SUCCESS = "文档分析成功"

    # ==================== 文件上传相关 ====================
    FILE_UPLOAD_START = "开始文件上传"
    FILE_VALIDATION_FAILED = "文件验证失败"

    # ==================== 演示文稿生成相关 ====================
    PRESENTATION_STRUCTURE_START = "开始生成演示文稿结构"
    PRESENTATION_STRUCTURE_SUCCESS = "演示文稿结构生成成功"
    PRESENTATION_VISUALS_START = "开始并发生成幻灯片配图"
    PRESENTATION_VISUALS_DONE = "幻灯片配图生成结束"
    PRESENTATION_FALLBACK = "演示文稿生成失败，返回错误幻灯片"

    # ==================== 配图生成相关 ====================
    VISUAL_GENERATION_START = "开始生成配图"
    VISUAL_GENERATION_SUCCESS = "配图生成成功"
    VISUAL_GENERATION_FAILED = "配图生成失败"


    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()
