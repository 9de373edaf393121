"""
Data URI工具模块
解析、构建与校验 data:<mime>;base64,<payload> 形式的内联数据
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Optional

_DATA_URI_PATTERN = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?P<params>(?:;[\w.+-]+=[^;,]*)*)(?P<b64>;base64)?,(?P<data>.*)$",
    re.DOTALL
)


@dataclass(frozen=True)
class DataURI:
    """解析后的Data URI"""
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def parse_data_uri(uri: str) -> DataURI:
    """
    解析Data URI

    Args:
        uri: data:<mime>;base64,<payload> 字符串

    Returns:
        DataURI: 解析结果

    Raises:
        ValueError: 格式不合法或base64解码失败
    """
    if not uri or not isinstance(uri, str):
        raise ValueError("Data URI不能为空")

    match = _DATA_URI_PATTERN.match(uri.strip())
    if not match:
        raise ValueError("无效的Data URI格式，期望 data:<mimetype>;base64,<encoded_data>")

    if not match.group("b64"):
        raise ValueError("仅支持base64编码的Data URI")

    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Data URI的base64内容无法解码: {e}") from e

    return DataURI(mime_type=match.group("mime").lower(), data=payload)


def build_data_uri(data: bytes, mime_type: str) -> str:
    """将二进制内容编码为Data URI"""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def is_image_data_uri(value: Optional[str]) -> bool:
    return bool(value) and value.startswith("data:image")


def is_http_url(value: Optional[str]) -> bool:
    return bool(value) and (value.startswith("http://") or value.startswith("https://"))
