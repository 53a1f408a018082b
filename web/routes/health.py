"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

import logging

import aiosqlite
from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import APP_VERSION, Tables
from web.dependencies import get_db
from web.models.responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(db: SQLiteAdapter = Depends(get_db)) -> HealthResponse:
    """서버 상태 확인

    DB 연결과 스키마(inventory 테이블)가 모두 있어야 database="ok".

    Returns:
        HealthResponse: status, version, database 상태
    """
    try:
        database = "ok" if await db.table_exists(Tables.INVENTORY) else "error"
        if database != "ok":
            logger.warning("헬스 체크: inventory 테이블 없음")
    except aiosqlite.Error:
        logger.warning("헬스 체크: DB 조회 실패", exc_info=True)
        database = "error"

    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        version=APP_VERSION,
        database=database,
    )
