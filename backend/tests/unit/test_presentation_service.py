"""
演示文稿生成服务单元测试
覆盖结构生成、配图并发生成、规整以及失败时的错误幻灯片
"""

import asyncio

import pytest

from pptmaker.core.ai.exceptions import ModelOutputError, ModelTimeoutError, VisualGenerationError
from pptmaker.schemas.presentation import (
    ERROR_SLIDE_ID,
    VISUAL_ERROR_PREFIX,
    PresentationRequest,
)
from pptmaker.services.generation.presentation.service import PresentationGenerationService
from tests.utils.mock_utils import MockBuilder, PNG_DATA_URI, make_slide_dict

WEB_IMAGE_URL = "https://picsum.photos/seed/team-photo/400/300"
CHART_PROMPT = "Bar chart: Q1 $50k, Q2 $75k"


@pytest.mark.unit
@pytest.mark.presentation
class TestPresentationGenerationService:
    """演示文稿生成服务测试类"""

    @pytest.fixture
    def mock_visualizer(self):
        return MockBuilder.create_mock_visualizer()

    @pytest.fixture
    def service(self, mock_ai_client, mock_visualizer):
        return PresentationGenerationService(ai_client=mock_ai_client, visualizer=mock_visualizer)

    def _set_structure(self, mock_ai_client, slides):
        mock_ai_client.structured_call.return_value = MockBuilder.create_structure(slides)

    @pytest.mark.asyncio
    async def test_web_image_and_chart(self, service, mock_ai_client, mock_visualizer, presentation_request):
        """测试已有网络图片的幻灯片不生成配图，图表提示词只生成一次"""
        self._set_structure(mock_ai_client, [
            make_slide_dict(1, "Our Team", "Meet the team.", "team photo", WEB_IMAGE_URL),
            make_slide_dict(2, "Revenue", "Revenue grew.", CHART_PROMPT),
            make_slide_dict(3, "Summary", "Thanks."),
        ])

        presentation = await service.generate_presentation(presentation_request)

        assert len(presentation.slides) == 3
        mock_visualizer.generate_visual.assert_awaited_once_with(
            CHART_PROMPT, "Template: Modern, Style: professional"
        )

        web_slide, chart_slide, plain_slide = presentation.slides
        assert web_slide.visual_data_uri == WEB_IMAGE_URL
        assert web_slide.visual_prompt == "team photo"
        assert chart_slide.visual_data_uri == PNG_DATA_URI
        assert chart_slide.visual_prompt == CHART_PROMPT
        assert chart_slide.visual_status == "prompt"
        assert plain_slide.visual_prompt is None
        assert plain_slide.visual_data_uri is None

        assert presentation.metadata.template == "Modern"
        assert presentation.metadata.tone_style == "professional"
        assert not presentation.is_error

    @pytest.mark.asyncio
    async def test_visual_failure_becomes_error_visual(
        self, mock_ai_client, presentation_request
    ):
        """测试单张配图失败只影响该幻灯片"""
        visualizer = MockBuilder.create_mock_visualizer()

        async def generate(prompt_text, template_details=None):
            if prompt_text == CHART_PROMPT:
                raise VisualGenerationError("quota exceeded")
            return PNG_DATA_URI

        visualizer.generate_visual.side_effect = generate
        service = PresentationGenerationService(ai_client=mock_ai_client, visualizer=visualizer)
        self._set_structure(mock_ai_client, [
            make_slide_dict(1, "Revenue", "Revenue grew.", CHART_PROMPT),
            make_slide_dict(2, "Process", "Three steps.", "Diagram of a 3-step process"),
        ])

        presentation = await service.generate_presentation(presentation_request)

        assert len(presentation.slides) == 2
        failed, succeeded = presentation.slides
        assert failed.visual_data_uri is None
        assert failed.visual_prompt.startswith(VISUAL_ERROR_PREFIX)
        assert "quota exceeded" in failed.visual_prompt
        assert CHART_PROMPT in failed.visual_prompt
        assert failed.visual_status == "error"
        assert succeeded.visual_data_uri == PNG_DATA_URI
        assert visualizer.generate_visual.await_count == 2

    @pytest.mark.asyncio
    async def test_plain_exception_from_visualizer(self, mock_ai_client, presentation_request):
        """测试非业务异常同样转换为错误视觉元素"""
        visualizer = MockBuilder.create_mock_visualizer(side_effect=RuntimeError("quota exceeded"))
        service = PresentationGenerationService(ai_client=mock_ai_client, visualizer=visualizer)
        self._set_structure(mock_ai_client, [make_slide_dict(1, "Revenue", "Revenue grew.", CHART_PROMPT)])

        presentation = await service.generate_presentation(presentation_request)

        slide = presentation.slides[0]
        assert slide.visual_prompt == f'{VISUAL_ERROR_PREFIX} from prompt "{CHART_PROMPT}": quota exceeded'
        assert slide.visual_data_uri is None

    @pytest.mark.asyncio
    async def test_every_prompt_slide_resolved(self, mock_ai_client, presentation_request):
        """测试每张只有提示词的幻灯片最终都有图片或错误描述"""
        visualizer = MockBuilder.create_mock_visualizer()
        calls = []

        async def generate(prompt_text, template_details=None):
            calls.append(prompt_text)
            if len(calls) % 2 == 0:
                raise VisualGenerationError("model overloaded")
            return PNG_DATA_URI

        visualizer.generate_visual.side_effect = generate
        service = PresentationGenerationService(ai_client=mock_ai_client, visualizer=visualizer)
        self._set_structure(
            mock_ai_client,
            [make_slide_dict(i, f"Slide {i}", "Body", f"Chart number {i}") for i in range(1, 6)]
        )

        presentation = await service.generate_presentation(presentation_request)

        assert len(presentation.slides) == 5
        for slide in presentation.slides:
            resolved = slide.visual_data_uri is not None
            errored = slide.visual_prompt.startswith(VISUAL_ERROR_PREFIX)
            assert resolved != errored

    @pytest.mark.asyncio
    async def test_visuals_generated_concurrently(self, mock_ai_client, presentation_request):
        """测试各幻灯片的配图同时生成，单张失败不影响其他幻灯片"""
        visualizer = MockBuilder.create_mock_visualizer()
        in_flight = 0
        peak = 0

        async def generate(prompt_text, template_details=None):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            try:
                await asyncio.sleep(0.05)
                if prompt_text == "Chart number 2":
                    raise VisualGenerationError("model overloaded")
                return PNG_DATA_URI
            finally:
                in_flight -= 1

        visualizer.generate_visual.side_effect = generate
        service = PresentationGenerationService(ai_client=mock_ai_client, visualizer=visualizer)
        self._set_structure(mock_ai_client, [
            make_slide_dict(1, "Slide 1", "Body", "Chart number 1"),
            make_slide_dict(2, "Slide 2", "Body", "Chart number 2"),
            make_slide_dict(3, "Slide 3", "Body", "Chart number 3", WEB_IMAGE_URL),
            make_slide_dict(4, "Slide 4", "Body", "Chart number 4"),
            make_slide_dict(5, "Slide 5", "Body", "Chart number 5"),
        ])

        presentation = await service.generate_presentation(presentation_request)

        assert peak == 4
        assert visualizer.generate_visual.await_count == 4
        statuses = [slide.visual_status for slide in presentation.slides]
        assert statuses == ["prompt", "error", "prompt", "prompt", "prompt"]
        uris = [slide.visual_data_uri for slide in presentation.slides]
        assert uris == [PNG_DATA_URI, None, WEB_IMAGE_URL, PNG_DATA_URI, PNG_DATA_URI]

    @pytest.mark.asyncio
    async def test_web_images_preference(
        self, service, mock_ai_client, mock_visualizer, sample_analysis
    ):
        """测试web-images偏好下已有网络图片的幻灯片不生成配图，只有提示词的幻灯片仍生成一次"""
        self._set_structure(mock_ai_client, [
            make_slide_dict(1, "Our Team", "Meet the team.", "team photo", WEB_IMAGE_URL),
            make_slide_dict(2, "Revenue", "Revenue grew.", CHART_PROMPT),
        ])
        request = PresentationRequest(
            analysis_data=sample_analysis,
            num_slides=2,
            data_viz_preference="web-images",
        )

        presentation = await service.generate_presentation(request)

        mock_visualizer.generate_visual.assert_awaited_once_with(
            CHART_PROMPT, "Template: Modern, Style: professional"
        )
        web_slide, chart_slide = presentation.slides
        assert web_slide.visual_data_uri == WEB_IMAGE_URL
        assert chart_slide.visual_data_uri == PNG_DATA_URI
        assert "Data Visualization Preference: web-images" in mock_ai_client.structured_call.call_args.kwargs["user_prompt"]

    @pytest.mark.asyncio
    async def test_blank_prompt_skipped_and_trimmed(
        self, service, mock_ai_client, mock_visualizer, presentation_request
    ):
        """测试空白提示词不触发配图生成，文本去除首尾空白"""
        self._set_structure(mock_ai_client, [
            make_slide_dict(1, "  Intro  ", "  Welcome  ", "   ", "  "),
            make_slide_dict(2, "Revenue", "Revenue grew.", f"  {CHART_PROMPT}  "),
        ])

        presentation = await service.generate_presentation(presentation_request)

        intro, revenue = presentation.slides
        assert intro.title == "Intro"
        assert intro.content == "Welcome"
        assert intro.visual_prompt is None
        assert intro.visual_data_uri is None
        mock_visualizer.generate_visual.assert_awaited_once_with(
            CHART_PROMPT, "Template: Modern, Style: professional"
        )
        assert revenue.visual_prompt == CHART_PROMPT

    @pytest.mark.asyncio
    async def test_web_search_tool_passed(self, service, mock_ai_client, presentation_request):
        """测试开启网络搜索时结构生成调用携带webSearch工具"""
        self._set_structure(mock_ai_client, [make_slide_dict(1)])

        await service.generate_presentation(presentation_request)

        kwargs = mock_ai_client.structured_call.call_args.kwargs
        assert [tool.name for tool in kwargs["tools"]] == ["webSearch"]
        assert "Modern" in kwargs["user_prompt"]
        assert "Q1 revenue $50k" in kwargs["user_prompt"]
        assert "Target Number of Slides: 3" in kwargs["user_prompt"]

    @pytest.mark.asyncio
    async def test_web_search_disabled(
        self, service, mock_ai_client, presentation_request, web_search_disabled
    ):
        """测试关闭网络搜索时不传工具"""
        self._set_structure(mock_ai_client, [make_slide_dict(1)])

        await service.generate_presentation(presentation_request)

        kwargs = mock_ai_client.structured_call.call_args.kwargs
        assert kwargs["tools"] is None
        assert "webSearch" not in kwargs["system_prompt"]

    @pytest.mark.asyncio
    async def test_automatic_slide_count(self, service, mock_ai_client, sample_analysis):
        """测试未指定幻灯片数量时提示词要求模型自行决定"""
        self._set_structure(mock_ai_client, [make_slide_dict(1)])
        request = PresentationRequest(analysis_data=sample_analysis)

        presentation = await service.generate_presentation(request)

        kwargs = mock_ai_client.structured_call.call_args.kwargs
        assert "Determine automatically" in kwargs["user_prompt"]
        assert presentation.metadata.template == "Modern"


@pytest.mark.unit
@pytest.mark.presentation
class TestPresentationErrorFallback:
    """演示文稿生成失败时的错误幻灯片测试类"""

    @pytest.fixture
    def mock_visualizer(self):
        return MockBuilder.create_mock_visualizer()

    @pytest.fixture
    def service(self, mock_ai_client, mock_visualizer):
        return PresentationGenerationService(ai_client=mock_ai_client, visualizer=mock_visualizer)

    def _assert_error_presentation(self, presentation):
        assert len(presentation.slides) == 1
        slide = presentation.slides[0]
        assert slide.id == ERROR_SLIDE_ID
        assert slide.title.startswith("Error")
        assert presentation.is_error
        return slide

    @pytest.mark.asyncio
    async def test_structure_failure(self, service, mock_ai_client, mock_visualizer, presentation_request):
        """测试结构生成异常返回错误幻灯片"""
        mock_ai_client.structured_call.side_effect = RuntimeError("connection refused")

        presentation = await service.generate_presentation(presentation_request)

        slide = self._assert_error_presentation(presentation)
        assert slide.content == "Failed to generate presentation: connection refused"
        assert presentation.metadata.template == "Modern"
        mock_visualizer.generate_visual.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_structure(self, service, mock_ai_client, presentation_request):
        """测试模型没有返回幻灯片时直接附上原始错误消息"""
        mock_ai_client.structured_call.return_value = MockBuilder.create_structure([])

        presentation = await service.generate_presentation(presentation_request)

        slide = self._assert_error_presentation(presentation)
        assert slide.content == (
            "Failed to generate presentation: Failed to generate presentation structure. "
            "LLM response was empty or invalid."
        )

    @pytest.mark.asyncio
    async def test_schema_error_wording(self, service, mock_ai_client, presentation_request):
        """测试结构校验失败的错误说明"""
        mock_ai_client.structured_call.side_effect = ModelOutputError("missing field slides")

        presentation = await service.generate_presentation(presentation_request)

        slide = self._assert_error_presentation(presentation)
        assert slide.content.startswith(
            "Failed to generate presentation: The AI model did not return data in the expected format."
        )
        assert slide.content.endswith("Details: missing field slides")

    @pytest.mark.parametrize("error", [
        ModelTimeoutError("request took too long"),
        asyncio.TimeoutError(),
        RuntimeError("Deadline exceeded"),
    ])
    @pytest.mark.asyncio
    async def test_timeout_wording(self, service, mock_ai_client, presentation_request, error):
        """测试超时类错误的错误说明"""
        mock_ai_client.structured_call.side_effect = error

        presentation = await service.generate_presentation(presentation_request)

        slide = self._assert_error_presentation(presentation)
        assert slide.content == (
            "Failed to generate presentation: The request timed out. This might be due to a complex "
            "request or network issues. Please try again."
        )

    @pytest.mark.asyncio
    async def test_error_presentation_serialization(self, service, mock_ai_client, presentation_request):
        """测试错误幻灯片序列化后只包含必要字段"""
        mock_ai_client.structured_call.side_effect = RuntimeError("boom")

        presentation = await service.generate_presentation(presentation_request)
        data = presentation.model_dump(by_alias=True, exclude_none=True)

        assert data["slides"] == [{
            "id": 0,
            "title": "Error Generating Presentation",
            "content": "Failed to generate presentation: boom",
        }]
        assert data["metadata"] == {"template": "Modern", "toneStyle": "professional"}
