"""
占位搜索提供商
不访问任何搜索引擎，根据查询词确定性地构造图片与网页链接，
供未接入真实搜索服务的部署和测试使用
"""

import re
import time
from typing import List
from urllib.parse import quote

from .base import BaseSearchProvider, SearchResult

# 与浏览器 encodeURIComponent 保持一致的不转义字符
_URI_COMPONENT_SAFE = "-_.!~*'()"


def query_to_seed(query: str) -> str:
    """把查询词转换为图片种子：空白替换为连字符、转小写、URL编码"""
    return quote(re.sub(r"\s+", "-", query).lower(), safe=_URI_COMPONENT_SAFE)


class PlaceholderSearchProvider(BaseSearchProvider):
    """确定性占位搜索提供商"""

    name = "placeholder"

    async def search(self, query: str, limit: int = 3, **kwargs) -> List[SearchResult]:
        self._validate_search_params(query, limit)
        start = time.perf_counter()

        seed = query_to_seed(query)
        results = [
            SearchResult(
                title=f"Image Result for {query}",
                link=f"https://picsum.photos/seed/{seed}/400/300",
                snippet=f"An image related to {query}."
            ),
            SearchResult(
                title=f"Web page about {query}",
                link=f"https://example.com/info/{seed}",
                snippet=f"Information about {query}."
            ),
            SearchResult(
                title=f"Another Image Result for {query}",
                link=f"https://picsum.photos/seed/{seed}-alt/400/300",
                snippet=f"Alternative image for {query}."
            ),
        ][:limit]

        self._log_search_activity(query, len(results), (time.perf_counter() - start) * 1000)
        return results
