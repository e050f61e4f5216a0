"""Pinecone 검색 프록시 로직."""
from typing import Any, Dict, Mapping, Optional
import time
import logging

from pinecone_proxy.config.settings import Settings
from pinecone_proxy.config.credentials import CredentialSet, resolve_credentials, first_non_empty
from pinecone_proxy.models.search_model import SearchRequest, NamespaceReport, NamespaceStatus
from pinecone_proxy.services.query_translator import translate
from pinecone_proxy.services.response_mapper import map_provider_error, enhance_result, count_hits, utc_timestamp
from pinecone_proxy.utils.pinecone_client import PineconeClient

logger = logging.getLogger(__name__)

DIAGNOSTIC_QUERY = "test"


class SearchService:
    def __init__(self, settings: Settings, environment: Mapping[str, str], client: Optional[PineconeClient] = None):
        self.settings = settings
        self.environment = environment
        self.client = client or PineconeClient(api_version=settings.pinecone_api_version)

    def credentials(self) -> CredentialSet:
        return resolve_credentials(
            self.settings.api_key_env_names,
            self.settings.host_env_names,
            self.environment,
        )

    def configuration_status(self) -> Dict[str, Any]:
        """헬스 체크용 설정 상태 (값은 노출하지 않음)."""
        _, api_key_source = first_non_empty(self.settings.api_key_env_names, self.environment)
        _, host_source = first_non_empty(self.settings.host_env_names, self.environment)
        return {
            "apiKey": api_key_source is not None,
            "indexHost": host_source is not None,
            "apiKeySource": api_key_source,
            "indexHostSource": host_source,
        }

    async def _call(self, url: str, payload: Any, api_key: str, timeout: float) -> Any:
        try:
            return await self.client.post(url, payload, api_key, timeout)
        except Exception as e:
            raise map_provider_error(e, timeout) from e

    async def search(self, request: SearchRequest) -> Dict[str, Any]:
        creds = self.credentials()
        logger.info(f"자격 증명 출처: api_key={creds.api_key_source}, host={creds.host_source}")

        translated = translate(request, creds.host, self.settings.default_rerank_model)
        logger.info(
            f"Pinecone 검색: type={translated.search_type.value}, namespace={translated.namespace}, "
            f"top_k={translated.top_k}, rerank={translated.has_reranking}"
        )

        start_time = time.perf_counter()
        body = await self._call(translated.url, translated.payload, creds.api_key, self.settings.search_timeout)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        enhanced = enhance_result(body, translated, elapsed_ms)
        logger.info(f"Pinecone 검색 완료: {enhanced['metadata']['total_results']}건, {elapsed_ms:.1f}ms")
        return enhanced

    async def passthrough(self, payload: Any) -> Any:
        """요청 본문을 그대로 인덱스의 /query 엔드포인트로 전달."""
        creds = self.credentials()
        url = f"https://{creds.host}/query"
        logger.info(f"Pinecone raw query 전달: {url}")
        return await self._call(url, payload, creds.api_key, self.settings.search_timeout)

    async def check_namespaces(self) -> NamespaceReport:
        """설정된 네임스페이스를 순서대로 하나씩 조회. 한 곳의 실패가 나머지를 막지 않음."""
        creds = self.credentials()
        timeout = self.settings.diagnostic_timeout
        statuses: Dict[str, NamespaceStatus] = {}

        for namespace in self.settings.diagnostic_namespaces:
            probe = SearchRequest(query=DIAGNOSTIC_QUERY, namespace=namespace, top_k=1)
            translated = translate(probe, creds.host, self.settings.default_rerank_model)
            try:
                body = await self._call(translated.url, translated.payload, creds.api_key, timeout)
            except Exception as e:
                error = map_provider_error(e, timeout)
                logger.warning(f"네임스페이스 진단 실패: {namespace} ({error.status_code}) {error.message}")
                statuses[namespace] = NamespaceStatus(ok=False, status=error.status_code, error=error.message)
                continue
            hits = count_hits(body) if isinstance(body, dict) else 0
            statuses[namespace] = NamespaceStatus(ok=True, status=200, hits=hits)

        return NamespaceReport(host=creds.host, namespaces=statuses, timestamp=utc_timestamp())
