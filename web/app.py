"""
FastAPI 애플리케이션

라우터 등록, 예외 처리, 앱 설정.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from core.config.loader import get_settings
from core.constants import APP_VERSION
from core.exceptions import InventoryError, StorageError
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web", console_level=get_settings().log_level, file_level=get_settings().log_level)

from web.routes import (
    health,
    inventory,
    suggestions,
    transactions,
)

logger = logging.getLogger(__name__)

# 경로 설정
WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    시작 시 스키마를 만들고 원장 기준으로 재고 스냅샷을 재계산한다.
    """
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
    from core.inventory.reconciler import StockReconciler

    settings = get_settings()

    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)
        result = await StockReconciler(db).rebuild()

    logger.info(
        "Web 시작",
        extra={"db_path": str(settings.db_path), "positions": result.positions},
    )

    yield

    logger.info("Web 종료")


app = FastAPI(
    title="PartStock API",
    description="부품 입출고 원장 및 재고 조회 API",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 정적 파일 및 템플릿 설정
if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

templates = Jinja2Templates(directory=str(TEMPLATES_DIR)) if TEMPLATES_DIR.exists() else None


# =========================================================================
# 예외 처리
# =========================================================================


def _validation_message(exc: RequestValidationError) -> str:
    """요청 검증 오류를 기존 클라이언트가 쓰던 메시지로 변환"""
    errors = exc.errors()

    if any(error["type"] in ("missing", "string_too_short") for error in errors):
        return "Missing required fields"

    if any("quantity" in error.get("loc", ()) for error in errors):
        return "Invalid quantity value"

    query_fields = [str(error["loc"][-1]) for error in errors if error.get("loc", ())[:1] == ("query",)]
    if query_fields:
        return f"Invalid query parameter: {', '.join(query_fields)}"

    return "Invalid data format"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.info(
        f"요청 검증 실패: {message}",
        extra={"path": request.url.path},
    )
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    # StorageError 원인은 storage_errors에서 이미 기록됨
    if not isinstance(exc, StorageError):
        logger.info(
            f"요청 거부: {exc}",
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(transactions.router)
app.include_router(inventory.router)
app.include_router(suggestions.router)


# =========================================================================
# 페이지 라우트 (HTML)
# =========================================================================


@app.get("/", include_in_schema=False)
async def home(request: Request):
    """재고 관리 페이지"""
    if templates is None:
        return {"error": "Templates not configured"}
    return templates.TemplateResponse(
        request,
        "index.html",
        {"version": APP_VERSION},
    )
