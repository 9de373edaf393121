"""
网络搜索单元测试
测试占位搜索提供商和 webSearch 工具
"""

import pytest

from pptmaker.core.search.providers.base import BaseSearchProvider, SearchResult
from pptmaker.core.search.providers.placeholder import PlaceholderSearchProvider, query_to_seed
from pptmaker.core.search.tool import (
    WEB_SEARCH_TOOL_NAME,
    build_web_search_tool,
    create_search_provider,
    register_search_provider,
)


@pytest.mark.unit
@pytest.mark.search
class TestPlaceholderSearchProvider:
    """占位搜索提供商测试类"""

    def setup_method(self):
        self.provider = PlaceholderSearchProvider()

    @pytest.mark.parametrize("query,expected", [
        ("team photo", "team-photo"),
        ("Modern   Office\tBuilding", "modern-office-building"),
        ("sales & growth", "sales-%26-growth"),
        ("café", "caf%C3%A9"),
    ])
    def test_query_to_seed(self, query, expected):
        assert query_to_seed(query) == expected

    @pytest.mark.asyncio
    async def test_search_results(self):
        """测试返回图片、网页和备选图片三条结果"""
        results = await self.provider.search("team photo")

        assert [result.link for result in results] == [
            "https://picsum.photos/seed/team-photo/400/300",
            "https://example.com/info/team-photo",
            "https://picsum.photos/seed/team-photo-alt/400/300",
        ]
        assert results[0].title == "Image Result for team photo"
        assert results[1].title == "Web page about team photo"

    @pytest.mark.asyncio
    async def test_search_is_deterministic(self):
        first = await self.provider.search("growth chart")
        second = await self.provider.search("growth chart")
        assert first == second

    @pytest.mark.asyncio
    async def test_search_limit(self):
        results = await self.provider.search("team photo", limit=1)
        assert len(results) == 1

    @pytest.mark.parametrize("query,limit", [("", 3), ("   ", 3), ("ok", 0), ("ok", 21)])
    @pytest.mark.asyncio
    async def test_invalid_params(self, query, limit):
        with pytest.raises(ValueError):
            await self.provider.search(query, limit=limit)


class _StaticSearchProvider(BaseSearchProvider):
    name = "static"

    async def search(self, query, limit=3, **kwargs):
        return [SearchResult(title="Static", link="https://images.example.com/static.jpg")]


@pytest.mark.unit
@pytest.mark.search
class TestWebSearchTool:
    """webSearch 工具测试类"""

    @pytest.mark.asyncio
    async def test_tool_definition(self):
        tool = build_web_search_tool(PlaceholderSearchProvider(), max_results=2)

        assert tool.name == WEB_SEARCH_TOOL_NAME == "webSearch"
        assert tool.parameters["required"] == ["query"]
        assert tool.metadata == {"search_provider": "placeholder"}

        output = await tool.handler({"query": "team photo"})
        assert len(output["results"]) == 2
        assert output["results"][0] == {
            "title": "Image Result for team photo",
            "link": "https://picsum.photos/seed/team-photo/400/300",
            "snippet": "An image related to team photo.",
        }

    @pytest.mark.asyncio
    async def test_empty_query_returns_no_results(self):
        tool = build_web_search_tool(PlaceholderSearchProvider())
        assert await tool.handler({}) == {"results": []}
        assert await tool.handler({"query": "  "}) == {"results": []}

    def test_create_default_provider(self):
        assert isinstance(create_search_provider(), PlaceholderSearchProvider)

    def test_create_unknown_provider(self):
        with pytest.raises(ValueError):
            create_search_provider("does-not-exist")

    @pytest.mark.asyncio
    async def test_register_custom_provider(self):
        """测试注册自定义搜索提供商"""
        register_search_provider("static", _StaticSearchProvider)

        provider = create_search_provider("static")
        output = await build_web_search_tool(provider).handler({"query": "anything"})

        assert output == {"results": [{"title": "Static", "link": "https://images.example.com/static.jpg"}]}
