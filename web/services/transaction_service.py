"""
입출고 서비스

입고/출고 일괄 등록, 수정, 검색, 월간 기록 조회.
등록/수정이 끝나면 재고 스냅샷을 재계산한 뒤 성공을 반환한다.
"""

import logging
from datetime import date
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter, storage_errors
from core.exceptions import NotFoundError, ValidationError
from core.inventory.ledger_store import LedgerStore
from core.inventory.models import NewTransaction
from core.inventory.reconciler import StockReconciler
from core.types import LedgerType
from core.utils.formatting import format_quantity
from core.utils.timezone import month_range
from web.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)


class TransactionService:
    """입출고 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.ledger_store = LedgerStore(db)
        self.reconciler = StockReconciler(db)
        self.inventory = InventoryService(db)

    async def create(self, ledger: LedgerType, items: list[NewTransaction]) -> int:
        """입고/출고 일괄 등록

        출고는 저장 전에 모든 항목의 재고를 검사하고, 하나라도 부족하면
        아무 행도 저장하지 않는다. 검사와 저장은 BEGIN IMMEDIATE 트랜잭션
        하나에서 수행되므로 다른 쓰기 요청이 그 사이에 끼어들 수 없다.

        Args:
            ledger: 입고/출고
            items: 등록할 항목

        Returns:
            저장된 항목 수

        Raises:
            ValidationError: 빈 목록
            InsufficientStockError: 출고 재고 부족
            StorageError: 저장 또는 재계산 실패
        """
        if not items:
            raise ValidationError("Invalid data format")

        with storage_errors("save data"):
            async with self.db.transaction(immediate=True):
                if ledger == LedgerType.OUTBOUND:
                    # 항목별 독립 검사 (같은 배치 안에서 재고를 예약하지 않음)
                    for item in items:
                        await self.inventory.check_sufficiency(item.key, item.quantity)

                await self.ledger_store.insert_many(ledger, items)

        logger.info(
            f"{ledger.value} 등록: {len(items)}건",
            extra={"count": len(items)},
        )

        await self.reconciler.rebuild()

        return len(items)

    async def update(
        self,
        ledger: LedgerType,
        record_id: str,
        item: NewTransaction,
    ) -> None:
        """원장 행 수정

        Raises:
            NotFoundError: 해당 id 없음
            StorageError: 저장 또는 재계산 실패
        """
        with storage_errors("update data"):
            async with self.db.transaction(immediate=True):
                previous = await self.ledger_store.get(ledger, record_id)
                if previous is None:
                    raise NotFoundError("Record not found")
                await self.ledger_store.update(ledger, record_id, item)

        # 키가 바뀌면 두 재고 위치가 함께 달라진다
        moved = not previous.key.matches(item.key)
        logger.info(
            f"{ledger.value} 수정" + (" (재고 위치 이동)" if moved else ""),
            extra={"record_id": record_id, "moved": moved},
        )

        await self.reconciler.rebuild()

    async def search(
        self,
        ledger: LedgerType,
        search: str | None = None,
        on_date: date | None = None,
    ) -> list[dict[str, Any]]:
        """원장 검색 (수량은 천 단위 구분 문자열)"""
        with storage_errors("fetch data"):
            records = await self.ledger_store.search(ledger, search, on_date)

        results = []
        for record in records:
            data = record.to_dict()
            data["quantity"] = format_quantity(record.quantity)
            results.append(data)

        return results

    async def monthly_records(self, year: int, month: int) -> dict[str, list[dict[str, Any]]]:
        """해당 월의 입출고 기록

        Raises:
            ValidationError: month 범위 오류
        """
        try:
            start, end = month_range(year, month)
        except ValueError as e:
            raise ValidationError(f"Invalid year or month: {year}-{month}") from e

        result: dict[str, list[dict[str, Any]]] = {}
        with storage_errors("fetch data"):
            for ledger in LedgerType:
                records = await self.ledger_store.find_in_period(ledger, start, end)
                result[ledger.value] = [
                    {"type": ledger.value, **record.to_dict()} for record in records
                ]

        return result
