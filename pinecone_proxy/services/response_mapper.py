"""Pinecone 응답 가공 및 오류 → 클라이언트 응답 매핑."""
from datetime import datetime, timezone
from typing import Any, Dict
import logging

import httpx

from pinecone_proxy.models.search_model import SearchMetadata
from pinecone_proxy.services.query_translator import TranslatedQuery
from pinecone_proxy.utils.errors import (
    SearchProxyError,
    ProviderError,
    ConnectivityError,
    ProviderTimeoutError,
    UnknownProviderError,
)
from pinecone_proxy.utils.pinecone_client import parse_body

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def map_provider_error(exc: Exception, timeout: float) -> SearchProxyError:
    """httpx 예외를 클라이언트용 예외로 변환.

    - HTTP 오류 응답: 상태 코드 유지, 본문은 details 로 전달
    - 타임아웃: 504
    - DNS/연결 실패: 503
    - 그 외: 500
    """
    if isinstance(exc, SearchProxyError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        return ProviderError(exc.response.status_code, parse_body(exc.response))
    # ConnectTimeout 도 타임아웃으로 분류하기 위해 ConnectError 보다 먼저 검사
    if isinstance(exc, httpx.TimeoutException):
        logger.error(f"Pinecone 호출 타임아웃 ({timeout}s): {exc}")
        return ProviderTimeoutError(timeout)
    if isinstance(exc, httpx.ConnectError):
        logger.error(f"Pinecone 연결 실패: {exc}")
        return ConnectivityError(str(exc))
    logger.exception(f"Pinecone 호출 중 알 수 없는 오류: {exc}")
    return UnknownProviderError(str(exc) or exc.__class__.__name__)


def count_hits(body: Dict[str, Any]) -> int:
    result = body.get("result")
    if not isinstance(result, dict):
        return 0
    hits = result.get("hits")
    return len(hits) if isinstance(hits, list) else 0


def enhance_result(body: Any, translated: TranslatedQuery, elapsed_ms: float) -> Dict[str, Any]:
    """Pinecone 응답 본문에 metadata 블록을 덧붙인 새 dict 반환."""
    enhanced = dict(body) if isinstance(body, dict) else {"result": body}
    metadata = SearchMetadata(
        search_type=translated.search_type.value,
        namespace=translated.namespace,
        top_k=translated.top_k,
        total_results=count_hits(enhanced),
        has_reranking=translated.has_reranking,
        timestamp=utc_timestamp(),
        response_time_ms=round(elapsed_ms, 2),
    )
    enhanced["metadata"] = metadata.model_dump()
    return enhanced
