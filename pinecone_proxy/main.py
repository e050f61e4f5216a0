"""FastAPI 진입점 및 전역 초기화 모듈."""
from typing import Mapping, Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import sys
import time
from pinecone_proxy.config.settings import Settings, get_settings, load_environment
from pinecone_proxy.config.pinecone_config import EXAMPLE_REQUESTS
from pinecone_proxy.routers.search_router import router as search_router
from pinecone_proxy.routers.system_router import router as system_router
from pinecone_proxy.services.search_service import SearchService
from pinecone_proxy.utils.errors import SearchProxyError
from pinecone_proxy.utils.pinecone_client import PineconeClient

logger = logging.getLogger(__name__)

_CONSOLE_HANDLER_NAME = "pinecone_proxy.console"


# 로깅 설정
def setup_logging(level: str = "INFO"):
    # 로그 포맷 설정
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # 루트 로거 구성
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level, logging.INFO))

    # 콘솔 핸들러 추가 (create_app 재호출 시 중복 방지)
    if not any(h.get_name() == _CONSOLE_HANDLER_NAME for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(_CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(console_handler)

    # 기타 로거 설정
    logging.getLogger("httpx").setLevel(logging.WARNING)  # httpx 로그 줄이기


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(SearchProxyError)
    async def _search_proxy_error(request: Request, exc: SearchProxyError):
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        # pydantic 검증 실패도 400 + 요청 예시로 응답
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({
                "error": "Invalid search request body.",
                "details": exc.errors(),
                "example": EXAMPLE_REQUESTS["text"],
            }),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            logger.info(f"404 - Route not found: {request.url.path}")
            return JSONResponse(status_code=404, content={"error": f"Cannot {request.method} {request.url.path}"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(
    settings: Optional[Settings] = None,
    environment: Optional[Mapping[str, str]] = None,
    client: Optional[PineconeClient] = None,
) -> FastAPI:
    settings = settings or get_settings()  # .env 로부터 환경 변수 로드

    # 로깅 설정 초기화
    setup_logging(settings.log_level)

    app = FastAPI(title="Pinecone Search Proxy", version="0.1.0")

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
        return response

    # 설정은 시작 시 한 번만 만들어 서비스에 주입
    app.state.settings = settings
    app.state.search_service = SearchService(
        settings=settings,
        environment=environment if environment is not None else load_environment(),
        client=client,
    )

    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(system_router, tags=["System"])
    app.include_router(search_router, tags=["Search"])

    return app


app = create_app()
