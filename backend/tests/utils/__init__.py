"""
测试工具包
提供统一的测试工具和辅助函数
"""

from .mock_utils import MockBuilder, PNG_BYTES, PNG_DATA_URI, make_data_uri, make_slide_dict

__all__ = [
    'MockBuilder',
    'PNG_BYTES',
    'PNG_DATA_URI',
    'make_data_uri',
    'make_slide_dict'
]
