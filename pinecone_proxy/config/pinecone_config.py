"""Pinecone 검색 API 상수 정의.

- **MAX_TOP_K** : Pinecone 가 허용하는 top_k 상한
- **DEFAULT_NAMESPACE** : 네임스페이스 미지정 시 사용하는 기본 네임스페이스
- **API_KEY_ENV_NAMES / HOST_ENV_NAMES** : 자격 증명을 찾을 환경 변수 후보 (우선순위 순)
- **EXAMPLE_REQUESTS** : /examples 및 400 응답에 함께 내려주는 요청 예시

"""
from typing import Dict, Any, List

# ──────────────────────────────────────────────────────────────
# 검색 한도
# ──────────────────────────────────────────────────────────────

MAX_TOP_K: int = 10000
DEFAULT_TOP_K: int = 10
MAX_RERANK_TOP_N: int = 100

DEFAULT_NAMESPACE: str = "__default__"
DEFAULT_RERANK_MODEL: str = "bge-reranker-v2-m3"
PINECONE_API_VERSION: str = "2025-01"

# ──────────────────────────────────────────────────────────────
# 자격 증명 환경 변수 후보 (앞에 있을수록 우선)
# ──────────────────────────────────────────────────────────────

API_KEY_ENV_NAMES: List[str] = ["PINECONE_API_KEY", "PINECONE_KEY", "API_KEY"]
HOST_ENV_NAMES: List[str] = ["PINECONE_INDEX_HOST", "PINECONE_HOST", "INDEX_HOST"]

# ──────────────────────────────────────────────────────────────
# 요청 예시
# ──────────────────────────────────────────────────────────────

EXAMPLE_REQUESTS: Dict[str, Dict[str, Any]] = {
    "text": {
        "query": "find docs about onboarding",
        "search_type": "text",
        "namespace": DEFAULT_NAMESPACE,
        "top_k": 5,
        "fields": ["title", "text"],
    },
    "vector": {
        "query": [0.1, 0.2, 0.3],
        "search_type": "vector",
        "top_k": 10,
    },
    "id": {
        "query": "rec-42",
        "search_type": "id",
        "top_k": 3,
    },
    "filter": {
        "query": "quarterly report",
        "search_type": "text",
        "filters": {"year": {"$gte": 2023}, "category": {"$in": ["finance", "ops"]}},
    },
    "rerank": {
        "query": "security incident response",
        "search_type": "text",
        "top_k": 20,
        "fields": ["text"],
        "rerank": {"model": DEFAULT_RERANK_MODEL, "top_n": 5, "rank_fields": ["text"]},
    },
}
