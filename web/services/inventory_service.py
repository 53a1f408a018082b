"""
재고 조회 서비스

스냅샷 조회 + 원장 조인, 현재 재고 계산, 출고 가능 여부 검사,
자동완성, 조건 삭제
"""

import logging
import math
from collections import defaultdict
from typing import Any, Iterable

import aiosqlite

from adapters.db.sqlite_adapter import SQLiteAdapter, storage_errors
from core.constants import Defaults
from core.exceptions import InsufficientStockError, NotFoundError, StorageError
from core.inventory.keys import PartKey
from core.inventory.ledger_store import LedgerStore
from core.inventory.models import TransactionRecord
from core.inventory.reconciler import ReconcileResult, StockReconciler
from core.inventory.stock_store import StockFilter, StockStore
from core.types import LedgerType, SuggestField

logger = logging.getLogger(__name__)


def _partition_by_key(
    records: Iterable[TransactionRecord],
) -> dict[tuple[str, ...], list[dict[str, Any]]]:
    """원장 행을 PartKey 그룹별로 분배 (입력 순서 유지)"""
    grouped: dict[tuple[str, ...], list[dict[str, Any]]] = defaultdict(list)
    for record in records:
        grouped[record.key.group_key].append(record.to_dict())
    return grouped


class InventoryService:
    """재고 조회 서비스

    inventory 스냅샷과 입출고 원장을 함께 다룬다.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.stock_store = StockStore(db)
        self.ledger_store = LedgerStore(db)
        self.reconciler = StockReconciler(db)

    async def list_positions(
        self,
        filters: StockFilter,
        page: int = 1,
        page_size: int = Defaults.PAGE_SIZE,
    ) -> dict[str, Any]:
        """재고 목록 조회 (페이지네이션 + 입출고 내역 조인)

        한 페이지의 모든 위치에 대해 원장별 쿼리 1회로 내역을 가져온다.
        범위를 벗어난 페이지는 빈 items와 올바른 전체 개수를 반환한다.

        Args:
            filters: 검색 필터
            page: 페이지 번호 (1부터)
            page_size: 페이지 크기

        Returns:
            items, totalItems, totalPages, currentPage
        """
        offset = (page - 1) * page_size

        with storage_errors("fetch data"):
            total_items = await self.stock_store.count_positions(filters)
            # 범위 밖 페이지는 조회 생략 (offset이 SQLite 정수 범위를 넘을 수 있음)
            if offset < total_items:
                positions = await self.stock_store.list_positions(
                    filters,
                    limit=page_size,
                    offset=offset,
                )
            else:
                positions = []

            if positions:
                keys = [position.key for position in positions]
                inbound = await self.ledger_store.find_matching(LedgerType.INBOUND, keys)
                outbound = await self.ledger_store.find_matching(LedgerType.OUTBOUND, keys)
            else:
                inbound, outbound = [], []

        inbound_by_key = _partition_by_key(inbound)
        outbound_by_key = _partition_by_key(outbound)

        items = [
            {
                **position.to_dict(),
                "inbound": inbound_by_key.get(position.key.group_key, []),
                "outbound": outbound_by_key.get(position.key.group_key, []),
            }
            for position in positions
        ]

        return {
            "items": items,
            "totalItems": total_items,
            "totalPages": math.ceil(total_items / page_size),
            "currentPage": page,
        }

    async def find_products(self, filters: StockFilter) -> list[dict[str, Any]]:
        """스냅샷 조회 (원장 조인 없음)"""
        with storage_errors("fetch data"):
            positions = await self.stock_store.list_positions(filters)
        return [position.to_dict() for position in positions]

    async def current_stock(self, key: PartKey) -> int:
        """원장 기준 현재 재고 (스냅샷 아님)"""
        with storage_errors("check stock"):
            return await self.ledger_store.current_stock(key)

    async def check_sufficiency(self, key: PartKey, requested: int) -> int:
        """출고 가능 여부 검사

        Returns:
            검사에 사용한 현재 재고

        Raises:
            InsufficientStockError: requested > 현재 재고
        """
        current = await self.current_stock(key)
        if requested > current:
            raise InsufficientStockError(key.specification, current, requested)
        return current

    async def suggest(
        self,
        field: SuggestField,
        term: str,
        limit: int = Defaults.SUGGESTION_LIMIT,
    ) -> list[str]:
        """도번/규격 자동완성"""
        with storage_errors("fetch suggestions"):
            return await self.stock_store.suggest(field, term, limit)

    async def delete_by_condition(self, key: PartKey) -> None:
        """PartKey 조건으로 재고 위치 삭제

        스냅샷 삭제 성공이 이 작업의 성공 기준이다.
        원장 정리는 최선 노력이며 실패해도 로그만 남긴다.

        Raises:
            NotFoundError: 일치하는 재고 위치 없음
        """
        with storage_errors("delete inventory"):
            async with self.db.transaction():
                deleted = await self.stock_store.delete_matching(key)

        if deleted == 0:
            raise NotFoundError("Inventory item not found")

        logger.info(
            "재고 위치 삭제",
            extra={"key": key.group_key, "deleted": deleted},
        )

        ledgers_cleaned = True
        for ledger in LedgerType:
            try:
                async with self.db.transaction():
                    removed = await self.ledger_store.delete_matching(ledger, key)
                logger.info(
                    f"{ledger.value} 원장 정리: {removed}건",
                    extra={"key": key.group_key},
                )
            except aiosqlite.Error:
                ledgers_cleaned = False
                logger.warning(
                    f"{ledger.value} 원장 정리 실패",
                    extra={"key": key.group_key},
                    exc_info=True,
                )

        if not ledgers_cleaned:
            return

        # 원장 정리 후 재계산 (스냅샷 삭제는 이미 확정되었으므로 실패는 로그만)
        try:
            await self.reconciler.rebuild()
        except StorageError:
            logger.warning("조건 삭제 후 재계산 실패", exc_info=True)

    async def delete_position(self, position_id: str) -> None:
        """스냅샷 행 id로 삭제

        id는 재계산마다 바뀌므로 직전 조회 결과의 id만 유효하다.

        Raises:
            NotFoundError: 해당 id 없음
        """
        with storage_errors("delete inventory"):
            async with self.db.transaction():
                deleted = await self.stock_store.delete_by_id(position_id)

        if not deleted:
            raise NotFoundError("Inventory item not found")

        logger.info("재고 행 삭제", extra={"position_id": position_id})

    async def rebuild(self) -> ReconcileResult:
        """스냅샷 수동 재계산"""
        return await self.reconciler.rebuild()
