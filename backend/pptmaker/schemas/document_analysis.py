"""
文档分析相关的Pydantic验证模型
"""

from typing import List
from pydantic import BaseModel, Field

from .common import CAMEL_MODEL_CONFIG


class DocumentAnalysisRequest(BaseModel):
    """文档分析请求模型"""
    document_data_uri: str = Field(
        ...,
        min_length=1,
        description="待分析文档，格式 data:<mimetype>;base64,<encoded_data>，支持PDF、DOCX、TXT"
    )

    model_config = CAMEL_MODEL_CONFIG


class DocumentAnalysis(BaseModel):
    """文档分析结果，返回后不可修改"""
    topics: List[str] = Field(..., description="文档的主要主题")
    subtopics: List[str] = Field(..., description="各主题下的子主题")
    data_points: List[str] = Field(..., description="重要的数据点")
    quotes: List[str] = Field(..., description="关键引用")
    summary: str = Field(..., description="文档内容摘要")

    model_config = {**CAMEL_MODEL_CONFIG, "frozen": True}

    @classmethod
    def empty(cls, summary: str = "Error during analysis.") -> "DocumentAnalysis":
        """分析失败时调用方可以替换使用的空结果"""
        return cls(topics=[], subtopics=[], data_points=[], quotes=[], summary=summary)
