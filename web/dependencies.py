"""
의존성 주입

FastAPI의 Depends를 사용한 DB 세션 / 서비스 제공.

조회는 읽기 전용 연결, 등록/수정/삭제/재계산은 쓰기 연결을 쓴다.
요청마다 연결을 열고 응답 후 닫는다.
"""

from typing import AsyncGenerator

from fastapi import Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from web.services.inventory_service import InventoryService
from web.services.transaction_service import TransactionService


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (읽기 전용)"""
    async with SQLiteAdapter(settings.db_path, readonly=True) as db:
        yield db


async def get_db_write(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (쓰기 가능)"""
    async with SQLiteAdapter(settings.db_path, readonly=False) as db:
        yield db


# =========================================================================
# 서비스
# =========================================================================


def get_inventory_reader(db: SQLiteAdapter = Depends(get_db)) -> InventoryService:
    """재고 조회용 서비스"""
    return InventoryService(db)


def get_inventory_writer(db: SQLiteAdapter = Depends(get_db_write)) -> InventoryService:
    """재고 삭제/재계산용 서비스"""
    return InventoryService(db)


def get_transaction_reader(db: SQLiteAdapter = Depends(get_db)) -> TransactionService:
    """입출고 검색용 서비스"""
    return TransactionService(db)


def get_transaction_writer(db: SQLiteAdapter = Depends(get_db_write)) -> TransactionService:
    """입출고 등록/수정용 서비스"""
    return TransactionService(db)
