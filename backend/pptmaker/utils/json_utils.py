"""
JSON工具模块
提供统一的模型响应JSON解析函数
"""

import json
import re
from typing import Dict, Any


_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class ResponseParser:
    """响应解析器"""

    @staticmethod
    def parse_json_response(ai_response: str) -> Dict[str, Any]:
        """
        解析JSON格式的AI响应

        Args:
            ai_response: AI响应内容

        Returns:
            Dict[str, Any]: 解析后的JSON数据

        Raises:
            ValueError: 响应为空、解析失败或顶层不是对象时抛出
        """
        if ai_response is None or not ai_response.strip():
            raise ValueError("AI response is empty")

        cleaned_response = ai_response.strip()

        # 清理可能的Markdown代码块包裹
        fence_match = _FENCE_PATTERN.match(cleaned_response)
        if fence_match:
            cleaned_response = fence_match.group(1)

        try:
            data = json.loads(cleaned_response)
        except json.JSONDecodeError as e:
            # 模型偶尔在JSON前后附带说明文字，退而截取最外层花括号
            start = cleaned_response.find("{")
            end = cleaned_response.rfind("}")
            if start == -1 or end <= start:
                raise ValueError(f"Failed to parse AI response as JSON: {str(e)}") from e
            try:
                data = json.loads(cleaned_response[start:end + 1])
            except json.JSONDecodeError as inner:
                raise ValueError(f"Failed to parse AI response as JSON: {str(inner)}") from inner

        if not isinstance(data, dict):
            raise ValueError("Invalid response format: top-level JSON value must be an object")

        return data
