"""
通用工具模块包
提供项目通用的工具函数和辅助类
"""

from .config_utils import (
    get_project_root,
    get_workspace_path,
    get_config_path,
    parse_list_config,
    parse_json_config,
    ensure_directory_exists
)

from .data_uri import (
    DataURI,
    parse_data_uri,
    build_data_uri,
    is_image_data_uri,
    is_http_url
)

from .json_utils import ResponseParser

__all__ = [
    "get_project_root",
    "get_workspace_path",
    "get_config_path",
    "parse_list_config",
    "parse_json_config",
    "ensure_directory_exists",
    "DataURI",
    "parse_data_uri",
    "build_data_uri",
    "is_image_data_uri",
    "is_http_url",
    "ResponseParser",
]
