"""
图片服务模块
包含配图生成相关的业务服务
"""

from .visualizer_service import VisualizerService
from .visualizer_handler import VisualizerHandler

__all__ = [
    'VisualizerService',
    'VisualizerHandler'
]
