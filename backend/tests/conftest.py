"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

单元测试不访问任何模型服务，AI客户端统一使用mock
接口测试通过FastAPI TestClient在进程内调用，不需要单独启动服务
"""

import pytest

from pptmaker.core.config import settings
from pptmaker.schemas.document_analysis import DocumentAnalysis
from pptmaker.schemas.presentation import PresentationRequest
from tests.utils.mock_utils import MockBuilder


@pytest.fixture(scope="function")
def sample_analysis() -> DocumentAnalysis:
    """示例文档分析结果"""
    return DocumentAnalysis(
        topics=["Quarterly performance", "Team growth"],
        subtopics=["Revenue by quarter", "Hiring plan"],
        data_points=["Q1 revenue $50k", "Q2 revenue $75k"],
        quotes=["Growth is a team effort."],
        summary="The company grew revenue 50% from Q1 to Q2 while expanding the team."
    )


@pytest.fixture(scope="function")
def presentation_request(sample_analysis) -> PresentationRequest:
    """示例演示文稿生成请求"""
    return PresentationRequest(
        analysis_data=sample_analysis,
        num_slides=3,
        template="Modern",
        smart_art_density="medium",
        data_viz_preference="charts",
        content_visual_ratio="balanced",
        tone_style="professional"
    )


@pytest.fixture(scope="function")
def mock_ai_client():
    """mock的AI客户端，structured_call 与 image_call 均为AsyncMock"""
    return MockBuilder.create_mock_ai_client()


@pytest.fixture(scope="function")
def web_search_disabled(monkeypatch):
    """关闭结构生成阶段的webSearch工具"""
    monkeypatch.setattr(settings, "enable_web_search", False)


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "integration: 接口测试")
    config.addinivalue_line("markers", "logging: 日志相关测试")
    config.addinivalue_line("markers", "presentation: 演示文稿生成测试")
    config.addinivalue_line("markers", "analysis: 文档分析测试")
    config.addinivalue_line("markers", "visual: 配图生成测试")
    config.addinivalue_line("markers", "search: 网络搜索测试")
    config.addinivalue_line("markers", "providers: 模型Provider测试")
