"""클라이언트 검색 요청 → Pinecone records search 페이로드 변환."""
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Dict, List
from urllib.parse import quote
import logging

from pinecone_proxy.config.pinecone_config import MAX_TOP_K, MAX_RERANK_TOP_N, DEFAULT_RERANK_MODEL
from pinecone_proxy.models.search_model import SearchRequest, SearchType, RerankSpec
from pinecone_proxy.utils.errors import UnknownSearchType, TypeMismatch

logger = logging.getLogger(__name__)

# JavaScript encodeURIComponent 와 동일한 예외 문자
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class TranslatedQuery:
    url: str
    payload: Dict[str, Any]
    search_type: SearchType
    namespace: str
    top_k: int

    @property
    def has_reranking(self) -> bool:
        return "rerank" in self.payload


# ──────────────────────────────────────────────────────────────
# search_type 별 query 빌더
# ──────────────────────────────────────────────────────────────

def _is_number(value: Any) -> bool:
    # bool 은 int 의 하위 타입이지만 숫자로 취급하지 않음
    return isinstance(value, Real) and not isinstance(value, bool)


def _text_query(raw: Any, top_k: int) -> Dict[str, Any]:
    if not isinstance(raw, str):
        raise TypeMismatch(SearchType.TEXT.value, "string", raw)
    return {"inputs": {"text": raw}, "top_k": top_k}


def _vector_query(raw: Any, top_k: int) -> Dict[str, Any]:
    if not isinstance(raw, list) or not all(_is_number(v) for v in raw):
        raise TypeMismatch(SearchType.VECTOR.value, "number[]", raw)
    return {"vector": {"values": raw}, "top_k": top_k}


def _id_query(raw: Any, top_k: int) -> Dict[str, Any]:
    if not isinstance(raw, str):
        raise TypeMismatch(SearchType.ID.value, "string", raw)
    return {"id": raw, "top_k": top_k}


_QUERY_BUILDERS: Dict[SearchType, Callable[[Any, int], Dict[str, Any]]] = {
    SearchType.TEXT: _text_query,
    SearchType.VECTOR: _vector_query,
    SearchType.ID: _id_query,
}

_missing = set(SearchType) - set(_QUERY_BUILDERS)
if _missing:
    raise RuntimeError(f"query builder missing for search types: {sorted(t.value for t in _missing)}")


# ──────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────

def parse_search_type(value: Any) -> SearchType:
    try:
        return SearchType(value)
    except (ValueError, TypeError):
        raise UnknownSearchType(value)


def clamp_top_k(top_k: int) -> int:
    return min(top_k, MAX_TOP_K)


def build_rerank(
    spec: RerankSpec,
    search_type: SearchType,
    top_k: int,
    fields: List[str],
    default_model: str = DEFAULT_RERANK_MODEL,
) -> Dict[str, Any]:
    """재정렬 옵션 구성.

    text 검색은 Pinecone 이 검색 쿼리 텍스트로 재정렬하므로 ``rerank.query`` 를 보내지 않고,
    vector/id 검색에서만 별도 재정렬 쿼리를 그대로 전달합니다.
    """
    rerank: Dict[str, Any] = {
        "model": spec.model or default_model,
        "top_n": spec.top_n or min(top_k, MAX_RERANK_TOP_N),
        "rank_fields": list(spec.rank_fields) if spec.rank_fields else list(fields),
    }
    if search_type is not SearchType.TEXT and spec.query is not None:
        rerank["query"] = spec.query
    return rerank


def build_search_url(host: str, namespace: str) -> str:
    encoded = quote(namespace, safe=_URI_COMPONENT_SAFE)
    return f"https://{host}/records/namespaces/{encoded}/search"


def translate(request: SearchRequest, host: str, default_rerank_model: str = DEFAULT_RERANK_MODEL) -> TranslatedQuery:
    search_type = parse_search_type(request.search_type)
    top_k = clamp_top_k(request.top_k)

    payload: Dict[str, Any] = {"query": _QUERY_BUILDERS[search_type](request.query, top_k)}

    if request.fields:
        payload["fields"] = list(request.fields)
    if request.filters:
        payload["filter"] = request.filters
    # model 키가 있어야 재정렬 요청으로 간주 (빈 문자열이면 기본 모델)
    if request.rerank is not None and request.rerank.model is not None:
        payload["rerank"] = build_rerank(request.rerank, search_type, top_k, request.fields, default_rerank_model)

    url = build_search_url(host, request.namespace)
    logger.debug(f"검색 요청 변환 완료: type={search_type.value}, namespace={request.namespace}, top_k={top_k}")
    return TranslatedQuery(
        url=url,
        payload=payload,
        search_type=search_type,
        namespace=request.namespace,
        top_k=top_k,
    )
