"""애플리케이션 전역 설정 (Pydantic Settings)."""
from functools import lru_cache
from typing import Dict, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import os

from pinecone_proxy.config.pinecone_config import (
    API_KEY_ENV_NAMES,
    HOST_ENV_NAMES,
    DEFAULT_NAMESPACE,
    DEFAULT_RERANK_MODEL,
    PINECONE_API_VERSION,
)

load_dotenv()

class Settings(BaseSettings):
    # 로깅 (revision 별 로그 분기 대신 레벨 하나로 제어)
    log_level: str = "INFO"

    # 자격 증명 후보 환경 변수 이름 (JSON 리스트로 덮어쓰기 가능)
    api_key_env_names: List[str] = Field(default_factory=lambda: list(API_KEY_ENV_NAMES))
    host_env_names: List[str] = Field(default_factory=lambda: list(HOST_ENV_NAMES))

    # Pinecone API
    pinecone_api_version: str = PINECONE_API_VERSION
    default_rerank_model: str = DEFAULT_RERANK_MODEL

    # 타임아웃 (초)
    search_timeout: float = 30.0
    diagnostic_timeout: float = 10.0

    # 진단 엔드포인트가 순회할 네임스페이스
    diagnostic_namespaces: List[str] = Field(default_factory=lambda: [DEFAULT_NAMESPACE])

    # CORS
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").upper()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def load_environment() -> Dict[str, str]:
    """자격 증명 해석에 쓰일 환경 변수 스냅샷 (.env 반영 후)."""
    return dict(os.environ)
