"""
工具函数单元测试
遵循项目测试规范：快速执行，无外部依赖
"""

import pytest

from pptmaker.utils.config_utils import parse_json_config, parse_list_config
from pptmaker.utils.data_uri import (
    build_data_uri,
    is_http_url,
    is_image_data_uri,
    parse_data_uri,
)
from pptmaker.utils.json_utils import ResponseParser


@pytest.mark.unit
class TestDataURI:
    """Data URI工具测试类"""

    def test_parse(self):
        document = parse_data_uri("data:Text/Plain;base64,aGVsbG8=")
        assert document.mime_type == "text/plain"
        assert document.data == b"hello"
        assert document.size == 5

    def test_parse_with_parameters(self):
        document = parse_data_uri("data:text/plain;charset=utf-8;base64,aGk=")
        assert document.data == b"hi"

    def test_build(self):
        assert build_data_uri(b"hello", "text/plain") == "data:text/plain;base64,aGVsbG8="
        assert parse_data_uri(build_data_uri(b"\x00\xff", "application/pdf")).data == b"\x00\xff"

    @pytest.mark.parametrize("uri", [None, "", "hello", "data:,abc", "data:text/plain,abc", "data:text/plain;base64,@@"])
    def test_parse_invalid(self, uri):
        with pytest.raises(ValueError):
            parse_data_uri(uri)

    @pytest.mark.parametrize("value,expected", [
        ("data:image/png;base64,AAAA", True),
        ("data:text/plain;base64,AAAA", False),
        ("https://picsum.photos/seed/x/400/300", False),
        (None, False),
    ])
    def test_is_image_data_uri(self, value, expected):
        assert is_image_data_uri(value) is expected

    @pytest.mark.parametrize("value,expected", [
        ("https://example.com/a.png", True),
        ("http://example.com/a.png", True),
        ("ftp://example.com/a.png", False),
        ("", False),
    ])
    def test_is_http_url(self, value, expected):
        assert is_http_url(value) is expected


@pytest.mark.unit
class TestResponseParser:
    """模型响应JSON解析测试类"""

    def test_plain_json(self):
        assert ResponseParser.parse_json_response('{"slides": []}') == {"slides": []}

    def test_fenced_json(self):
        response = '```json\n{"regeneratedSlide": "text"}\n```'
        assert ResponseParser.parse_json_response(response) == {"regeneratedSlide": "text"}

    def test_json_with_surrounding_text(self):
        response = 'Here is the result:\n{"summary": "ok"}\nHope this helps!'
        assert ResponseParser.parse_json_response(response) == {"summary": "ok"}

    @pytest.mark.parametrize("response", [None, "", "   ", "not json", "[1, 2]"])
    def test_invalid(self, response):
        with pytest.raises(ValueError):
            ResponseParser.parse_json_response(response)


@pytest.mark.unit
class TestConfigUtils:
    """配置工具测试类"""

    def test_parse_list_config(self):
        assert parse_list_config("PDF, docx,,txt ") == ["pdf", "docx", "txt"]
        assert parse_list_config(["A", "b"]) == ["a", "b"]

    def test_parse_json_config(self):
        assert parse_json_config('["http://localhost:9002"]') == ["http://localhost:9002"]
