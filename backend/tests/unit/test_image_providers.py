"""
图片生成Provider单元测试
"""

import base64
from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock, MagicMock

from pptmaker.core.ai.config import ModelConfig
from pptmaker.core.ai.models import ModelCapability
from pptmaker.core.ai.providers.genai.image import GenAIImageProvider
from pptmaker.core.ai.providers.openai_compatible.image import OpenAICompatibleImageProvider
from pptmaker.utils.data_uri import parse_data_uri
from tests.utils.mock_utils import PNG_BYTES


def _model_config(provider_name: str) -> ModelConfig:
    return ModelConfig(
        model_id=f"{provider_name}:image-model",
        model_name="image-model",
        api_key="test-key",
        capabilities=[ModelCapability.IMAGE_GEN.value],
        provider_mapping={ModelCapability.IMAGE_GEN.value: provider_name},
        parameters={"width": 1024, "height": 768},
    )


def _part(text=None, data=None, mime_type="image/png"):
    inline_data = SimpleNamespace(data=data, mime_type=mime_type) if data is not None else None
    return SimpleNamespace(text=text, inline_data=inline_data)


@pytest.mark.unit
@pytest.mark.providers
class TestGenAIImageProvider:
    """GenAI图片Provider测试类"""

    @pytest.fixture
    def provider(self):
        provider = GenAIImageProvider(_model_config("genai"))
        provider.client = MagicMock()
        return provider

    @pytest.mark.asyncio
    async def test_text_and_image_response(self, provider):
        """测试同时返回文字和图片时得到PNG Data URI"""
        provider.client.models.generate_content.return_value = SimpleNamespace(parts=[
            _part(text="Here is your chart."),
            _part(data=PNG_BYTES),
        ])

        result = await provider.generate_image("Bar chart: Q1 $50k, Q2 $75k")

        assert result.success
        assert result.text == "Here is your chart."
        image = parse_data_uri(result.image_url)
        assert image.mime_type == "image/png"
        assert image.data.startswith(b"\x89PNG")

        config = provider.client.models.generate_content.call_args.kwargs["config"]
        assert config.response_modalities == ["TEXT", "IMAGE"]

    @pytest.mark.asyncio
    async def test_text_only_response(self, provider):
        provider.client.models.generate_content.return_value = SimpleNamespace(parts=[
            _part(text="I can only describe it."),
        ])

        result = await provider.generate_image("chart")

        assert not result.success
        assert result.image_url is None
        assert result.text == "I can only describe it."

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_failure(self, provider):
        """测试SDK异常转换为失败结果而不是抛出"""
        provider.client.models.generate_content.side_effect = RuntimeError("quota exceeded")

        result = await provider.generate_image("chart")

        assert not result.success
        assert "quota exceeded" in result.error_message

    @pytest.mark.asyncio
    async def test_supported_aspect_ratio(self, provider):
        provider.client.models.generate_content.return_value = SimpleNamespace(parts=[_part(data=PNG_BYTES)])

        await provider.generate_image("chart", aspect_ratio="16:9")

        config = provider.client.models.generate_content.call_args.kwargs["config"]
        assert config.image_config.aspect_ratio == "16:9"


@pytest.mark.unit
@pytest.mark.providers
class TestOpenAICompatibleImageProvider:
    """OpenAI兼容图片Provider测试类"""

    @pytest.fixture
    def provider(self):
        provider = OpenAICompatibleImageProvider(_model_config("openai_compatible"))
        provider.client = MagicMock()
        provider.client.images.generate = AsyncMock()
        return provider

    @pytest.mark.asyncio
    async def test_b64_response(self, provider):
        provider.client.images.generate.return_value = SimpleNamespace(data=[
            SimpleNamespace(b64_json=base64.b64encode(PNG_BYTES).decode(), url=None, revised_prompt=None)
        ])

        result = await provider.generate_image("chart")

        assert result.success
        assert result.image_url.startswith("data:image/png;base64,")
        assert provider.client.images.generate.call_args.kwargs["size"] == "1024x768"

    @pytest.mark.asyncio
    async def test_url_response(self, provider):
        provider.client.images.generate.return_value = SimpleNamespace(data=[
            SimpleNamespace(b64_json=None, url="https://cdn.example.com/chart.png")
        ])

        result = await provider.generate_image("chart")

        assert result.success
        assert result.image_url == "https://cdn.example.com/chart.png"

    @pytest.mark.asyncio
    async def test_empty_response(self, provider):
        provider.client.images.generate.return_value = SimpleNamespace(data=[])

        result = await provider.generate_image("chart")

        assert not result.success
