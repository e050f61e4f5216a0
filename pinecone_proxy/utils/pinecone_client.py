"""Pinecone REST 호출 헬퍼 (httpx 기반)."""
from typing import Any, Dict, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


def parse_body(response: httpx.Response) -> Any:
    """JSON 이면 파싱 결과, 아니면 원문을 ``{"raw": ...}`` 로 감싸 반환."""
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}


class PineconeClient:
    def __init__(self, api_version: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_version = api_version
        # 테스트에서는 httpx.MockTransport 주입
        self._transport = transport

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Api-Key": api_key,
            "Content-Type": "application/json",
            "X-Pinecone-API-Version": self.api_version,
        }

    async def post(self, url: str, payload: Any, api_key: str, timeout: float) -> Any:
        """단일 POST 호출. 실패 시 httpx 예외를 그대로 올림 (재시도 없음)."""
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            response = await client.post(url, json=payload, headers=self._headers(api_key))
            logger.debug(f"Pinecone 응답: status={response.status_code}, url={url}")
            if response.is_error:
                logger.error(f"Pinecone 오류 응답: status={response.status_code}, body={response.text[:500]}")
            response.raise_for_status()
            return parse_body(response)
