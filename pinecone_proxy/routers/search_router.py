"""Pinecone 검색 프록시 라우터."""
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends

from pinecone_proxy.models.search_model import SearchRequest
from pinecone_proxy.routers.dependencies import get_search_service
from pinecone_proxy.services.search_service import SearchService

router = APIRouter()


@router.post("/search-query")
async def search_query(request: SearchRequest, service: SearchService = Depends(get_search_service)):
    """
text / vector / id 검색 요청을 Pinecone records search 형식으로 변환해 전달합니다.

    [요청 인수]
    - query: text/id 검색은 문자열, vector 검색은 숫자 배열
    - namespace (str): 검색할 네임스페이스 (기본값 "__default__")
    - top_k (int): 반환할 최대 결과 수 (최대 10000)
    - fields (List[str]): 응답에 포함할 필드
    - filters (dict): 메타데이터 필터
    - rerank (dict, 선택): 재정렬 옵션 (model, top_n, rank_fields, query)
    - search_type (str): text | vector | id

    [응답]
    Pinecone 응답 본문 + metadata (search_type, namespace, top_k, total_results, has_reranking, timestamp)
    """
    return await service.search(request)


@router.post("/pinecone-query")
async def pinecone_query(payload: Dict[str, Any] = Body(...), service: SearchService = Depends(get_search_service)):
    """요청 본문을 변환 없이 인덱스의 /query 엔드포인트로 그대로 전달합니다."""
    return await service.passthrough(payload)
