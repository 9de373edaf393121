"""
网络搜索工具
把搜索提供商包装为模型可调用的 webSearch 工具
"""

from typing import Any, Dict, Optional, Type

from pptmaker.core.ai.models import ToolDefinition
from pptmaker.core.config import settings
from pptmaker.core.log_utils import get_logger
from .providers.base import BaseSearchProvider
from .providers.placeholder import PlaceholderSearchProvider

logger = get_logger(__name__)

WEB_SEARCH_TOOL_NAME = "webSearch"

WEB_SEARCH_TOOL_DESCRIPTION = (
    "Performs a web search for information or images based on a query. "
    "Use this ONLY for finding existing images on the web, NOT for generating new ones."
)

WEB_SEARCH_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "The search query for a suitable image."
        }
    },
    "required": ["query"]
}

# 搜索提供商注册表，集成方可通过 register_search_provider 接入真实搜索服务
_SEARCH_PROVIDERS: Dict[str, Type[BaseSearchProvider]] = {
    PlaceholderSearchProvider.name: PlaceholderSearchProvider,
}


def register_search_provider(name: str, provider_class: Type[BaseSearchProvider]) -> None:
    """注册搜索提供商"""
    _SEARCH_PROVIDERS[name] = provider_class
    logger.info(f"注册搜索提供商: {name}", operation="register_search_provider")


def create_search_provider(name: Optional[str] = None) -> BaseSearchProvider:
    """
    按名称创建搜索提供商

    Raises:
        ValueError: 名称未注册
    """
    provider_name = name or settings.search_provider
    if provider_name not in _SEARCH_PROVIDERS:
        raise ValueError(
            f"未注册的搜索提供商: {provider_name}, 可用的提供商: {list(_SEARCH_PROVIDERS)}"
        )
    return _SEARCH_PROVIDERS[provider_name]()


def build_web_search_tool(
    provider: BaseSearchProvider,
    max_results: Optional[int] = None
) -> ToolDefinition:
    """构建 webSearch 工具定义"""
    limit = max_results or settings.search_max_results

    async def handler(arguments: Dict[str, Any]) -> Dict[str, Any]:
        query = str(arguments.get("query", "")).strip()
        if not query:
            return {"results": []}
        results = await provider.search(query, limit=limit)
        return {"results": [result.to_dict() for result in results]}

    return ToolDefinition(
        name=WEB_SEARCH_TOOL_NAME,
        description=WEB_SEARCH_TOOL_DESCRIPTION,
        parameters=WEB_SEARCH_PARAMETERS,
        handler=handler,
        metadata={"search_provider": provider.name}
    )
