"""검색 요청/응답 Pydantic 모델."""
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional

from pinecone_proxy.config.pinecone_config import DEFAULT_NAMESPACE, DEFAULT_TOP_K


class SearchType(str, Enum):
    TEXT = "text"
    VECTOR = "vector"
    ID = "id"


class RerankSpec(BaseModel):
    """재정렬 요청 옵션 - 비어 있는 항목은 번역 단계에서 기본값으로 채움"""
    model: Optional[str] = None
    top_n: Optional[int] = Field(None, ge=1)
    rank_fields: Optional[List[str]] = None
    query: Optional[Any] = Field(None, description="text 이외 검색에서 재정렬에 쓸 별도 쿼리")


class SearchRequest(BaseModel):
    # query / search_type 의 타입 일치 여부는 query_translator 에서 검사
    query: Any = Field(None, description="text/id 검색은 문자열, vector 검색은 숫자 배열")
    namespace: str = DEFAULT_NAMESPACE
    top_k: int = Field(default=DEFAULT_TOP_K, ge=1)
    fields: List[str] = Field(default=[], description="응답에 포함할 필드 목록")
    filters: Dict[str, Any] = Field(default={}, description="메타데이터 필터 표현식")
    rerank: Optional[RerankSpec] = None
    search_type: Any = SearchType.TEXT.value


class SearchMetadata(BaseModel):
    """검색 응답에 덧붙이는 메타데이터"""
    search_type: str
    namespace: str
    top_k: int
    total_results: int
    has_reranking: bool
    timestamp: str
    response_time_ms: float


class NamespaceStatus(BaseModel):
    ok: bool
    status: Optional[int] = None
    hits: Optional[int] = None
    error: Optional[str] = None


class NamespaceReport(BaseModel):
    """진단 엔드포인트 응답 모델"""
    host: str
    namespaces: Dict[str, NamespaceStatus]
    timestamp: str
