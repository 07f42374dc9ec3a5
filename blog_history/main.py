"""FastAPI 애플리케이션 진입점. 로깅, 미들웨어, 예외 핸들러, API 라우터를 등록합니다."""

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from blog_history.config import settings
from blog_history.database import Base, engine
from blog_history.exceptions import DomainError
import blog_history.models  # noqa: F401 - 모델 import로 metadata 등록
from blog_history.routers import auth, blogs, versions


def _setup_logging():
    fmt = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=fmt,
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


_setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Blog Version History",
    description="게시글 스냅샷 버전 관리(캡처/조회/복원/보존 정책) API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def handle_domain_error(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError):
    # 내부 오류 내용은 로그에만 남기고 응답에는 노출하지 않는다.
    logger.exception("[storage] unhandled database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth.router)
app.include_router(blogs.router)
app.include_router(versions.router)


@app.on_event("startup")
def ensure_schema():
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Blog Version History"}
