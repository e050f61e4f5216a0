"""헬스 체크 / 사용 예시 / 진단 라우터."""
from fastapi import APIRouter, Depends

from pinecone_proxy.config.pinecone_config import EXAMPLE_REQUESTS, MAX_TOP_K, DEFAULT_NAMESPACE, DEFAULT_TOP_K
from pinecone_proxy.models.search_model import NamespaceReport, SearchType
from pinecone_proxy.routers.dependencies import get_search_service
from pinecone_proxy.services.response_mapper import utc_timestamp
from pinecone_proxy.services.search_service import SearchService

router = APIRouter()


@router.get("/health")
async def health(service: SearchService = Depends(get_search_service)):
    # Pinecone 연결 여부와 무관하게 프로세스가 살아 있으면 200
    return {
        "status": "ok",
        "timestamp": utc_timestamp(),
        "configured": service.configuration_status(),
    }


@router.get("/examples")
async def examples():
    return {
        "endpoint": "/search-query",
        "method": "POST",
        "search_types": [t.value for t in SearchType],
        "defaults": {"namespace": DEFAULT_NAMESPACE, "top_k": DEFAULT_TOP_K, "max_top_k": MAX_TOP_K},
        "examples": EXAMPLE_REQUESTS,
    }


@router.get("/debug/namespaces", response_model=NamespaceReport)
async def debug_namespaces(service: SearchService = Depends(get_search_service)):
    """설정된 네임스페이스마다 top_k=1 검색을 순차 실행해 상태를 보고합니다."""
    return await service.check_namespaces()
