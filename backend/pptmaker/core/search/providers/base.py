"""
搜索提供商基类
定义网络搜索服务的统一接口
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pptmaker.core.log_utils import get_logger

logger = get_logger(__name__)


class SearchResult:
    """搜索结果封装类"""

    def __init__(self, title: str, link: str, snippet: Optional[str] = None):
        self.title = title
        self.link = link
        self.snippet = snippet

    def to_dict(self) -> dict:
        """转换为字典格式"""
        result = {"title": self.title, "link": self.link}
        if self.snippet is not None:
            result["snippet"] = self.snippet
        return result

    def __eq__(self, other) -> bool:
        return isinstance(other, SearchResult) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"SearchResult(title={self.title!r}, link={self.link!r})"


class BaseSearchProvider(ABC):
    """搜索提供商基类"""

    name = "base"

    def __init__(self):
        self.logger = logger

    @abstractmethod
    async def search(self, query: str, limit: int = 3, **kwargs) -> List[SearchResult]:
        """
        文本搜索

        Args:
            query: 搜索查询
            limit: 返回结果数量
            **kwargs: 其他搜索参数

        Returns:
            搜索结果列表，优先返回可直接引用的图片链接
        """
        pass

    def _validate_search_params(self, query: Optional[str], limit: int) -> None:
        """验证搜索参数"""
        if query is None or len(query.strip()) == 0:
            raise ValueError("搜索查询不能为空")

        if limit <= 0 or limit > 20:
            raise ValueError("搜索结果数量必须在1-20之间")

    def _log_search_activity(self, query: str, result_count: int, duration_ms: float) -> None:
        """记录搜索活动"""
        self.logger.info(
            "网络搜索完成",
            operation="web_search",
            search_provider=self.name,
            query=query[:100],
            result_count=result_count,
            duration_ms=round(duration_ms, 2)
        )
