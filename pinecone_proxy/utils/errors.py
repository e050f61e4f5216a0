"""프록시 예외 계층.

모든 예외는 ``status_code`` 와 ``to_body()`` 를 가지며 main.py 의 예외 핸들러가 JSON 으로 변환합니다.
"""
from typing import Any, Dict, List, Optional

from pinecone_proxy.config.pinecone_config import EXAMPLE_REQUESTS

CONNECTIVITY_MESSAGE = (
    "Unable to reach the Pinecone index host. "
    "Check that the index host is correct and that the index exists."
)
TIMEOUT_MESSAGE = "Pinecone did not respond before the request timed out."


class SearchProxyError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


# ──────────────────────────────────────────────────────────────
# 설정 / 요청 오류
# ──────────────────────────────────────────────────────────────

class ConfigurationError(SearchProxyError):
    """API 키 또는 인덱스 호스트를 어느 후보 환경 변수에서도 찾지 못함."""

    def __init__(self, has_api_key: bool, has_index_host: bool, api_key_names: List[str], host_names: List[str]):
        super().__init__("Pinecone API key or index host not configured.", 500)
        self.has_api_key = has_api_key
        self.has_index_host = has_index_host
        self.api_key_names = api_key_names
        self.host_names = host_names

    def to_body(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "hasApiKey": self.has_api_key,
            "hasIndexHost": self.has_index_host,
            "checked": {"apiKey": self.api_key_names, "indexHost": self.host_names},
        }


class QueryValidationError(SearchProxyError):
    status_code = 400

    def __init__(self, message: str, search_type: str = "text", details: Optional[Any] = None):
        super().__init__(message)
        self.search_type = search_type
        self.details = details

    @property
    def example(self) -> Dict[str, Any]:
        return EXAMPLE_REQUESTS.get(self.search_type, EXAMPLE_REQUESTS["text"])

    def to_body(self) -> Dict[str, Any]:
        body = {"error": self.message, "example": self.example}
        if self.details is not None:
            body["details"] = self.details
        return body


class UnknownSearchType(QueryValidationError):
    def __init__(self, received: Any):
        super().__init__(
            f"Unknown search_type {received!r}. Expected one of: text, vector, id.",
            details={"received": received},
        )
        self.received = received


class TypeMismatch(QueryValidationError):
    def __init__(self, search_type: str, expected: str, received: Any):
        super().__init__(
            f"'query' must be of type {expected} for search_type '{search_type}'.",
            search_type=search_type,
            details={"expected": expected, "received": type(received).__name__},
        )
        self.expected = expected


# ──────────────────────────────────────────────────────────────
# Pinecone 호출 오류
# ──────────────────────────────────────────────────────────────

class ProviderError(SearchProxyError):
    """Pinecone 이 HTTP 오류를 반환. 상태 코드와 본문을 그대로 전달."""

    def __init__(self, status_code: int, body: Any):
        super().__init__(f"Pinecone returned HTTP {status_code}.", status_code)
        self.body = body

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.body}


class ConnectivityError(SearchProxyError):
    status_code = 503

    def __init__(self, reason: str):
        super().__init__(CONNECTIVITY_MESSAGE)
        self.reason = reason

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": {"reason": self.reason}}


class ProviderTimeoutError(SearchProxyError):
    status_code = 504

    def __init__(self, timeout: float):
        super().__init__(TIMEOUT_MESSAGE)
        self.timeout = timeout

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": {"timeout_seconds": self.timeout}}


class UnknownProviderError(SearchProxyError):
    status_code = 500
