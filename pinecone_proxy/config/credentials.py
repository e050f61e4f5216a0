"""Pinecone 자격 증명(API 키, 인덱스 호스트) 해석 모듈.

후보 환경 변수 이름 목록을 우선순위대로 훑어 처음으로 값이 있는 항목을 사용합니다.
"""
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple
import logging

from pinecone_proxy.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

HTTPS_PREFIX = "https://"


@dataclass(frozen=True)
class CredentialSet:
    api_key: str
    host: str
    api_key_source: str
    host_source: str


def first_non_empty(names: Sequence[str], environment: Mapping[str, str]) -> Tuple[Optional[str], Optional[str]]:
    """(값, 환경 변수 이름) 반환. 아무것도 없으면 (None, None)."""
    for name in names:
        value = environment.get(name)
        if value:
            return value, name
    return None, None


def normalize_host(host: str) -> str:
    # 앞의 https:// 한 번만 제거
    if host.startswith(HTTPS_PREFIX):
        return host[len(HTTPS_PREFIX):]
    return host


def resolve_credentials(
    api_key_names: Sequence[str],
    host_names: Sequence[str],
    environment: Mapping[str, str],
) -> CredentialSet:
    api_key, api_key_source = first_non_empty(api_key_names, environment)
    host, host_source = first_non_empty(host_names, environment)

    if api_key is None or host is None:
        logger.warning(
            f"Pinecone 자격 증명 누락: api_key={api_key is not None}, host={host is not None}"
        )
        raise ConfigurationError(
            has_api_key=api_key is not None,
            has_index_host=host is not None,
            api_key_names=list(api_key_names),
            host_names=list(host_names),
        )

    logger.debug(f"자격 증명 출처: api_key={api_key_source}, host={host_source}")
    return CredentialSet(
        api_key=api_key,
        host=normalize_host(host),
        api_key_source=api_key_source,
        host_source=host_source,
    )
