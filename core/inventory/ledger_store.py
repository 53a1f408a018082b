"""
입출고 원장 저장소

inbound / outbound 테이블 저장 및 조회.

쓰기 메서드는 커밋하지 않는다. 호출자가 SQLiteAdapter.transaction() 으로 묶는다.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING, Iterable

from core.inventory.keys import PartKey, key_match_clause, keys_match_clause
from core.inventory.models import NewTransaction, TransactionRecord
from core.types import LedgerType
from core.utils.formatting import like_pattern
from core.utils.timezone import format_created_at

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

_COLUMNS = (
    "id, drawing_number, specification, quantity, "
    "finishing, supplier, note, date, created_at"
)


class LedgerStore:
    """입출고 원장 저장소

    두 원장은 같은 스키마를 가지며 LedgerType으로 구분한다.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # -------------------------------------------------------------------------
    # 쓰기
    # -------------------------------------------------------------------------

    async def insert_many(
        self,
        ledger: LedgerType,
        items: list[NewTransaction],
    ) -> list[str]:
        """원장 행 일괄 추가

        id(UUID4)와 created_at을 여기서 발급한다.

        Returns:
            발급된 id 목록 (items 순서)
        """
        created_at = format_created_at()
        ids = [str(uuid.uuid4()) for _ in items]

        rows = [
            (
                record_id,
                item.key.drawing_number,
                item.key.specification,
                item.quantity,
                item.key.finishing,
                item.key.supplier,
                item.key.note,
                item.date.isoformat(),
                created_at,
            )
            for record_id, item in zip(ids, items)
        ]

        await self.db.executemany(
            f"INSERT INTO {ledger.table} ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            rows,
        )

        return ids

    async def update(
        self,
        ledger: LedgerType,
        record_id: str,
        item: NewTransaction,
    ) -> bool:
        """원장 행 전체 수정 (원장 이동 없음)

        Returns:
            수정 대상이 있었는지 여부
        """
        cursor = await self.db.execute(
            f"""
            UPDATE {ledger.table}
            SET
                drawing_number = ?,
                specification = ?,
                quantity = ?,
                finishing = ?,
                supplier = ?,
                note = ?,
                date = ?
            WHERE id = ?
            """,
            (
                item.key.drawing_number,
                item.key.specification,
                item.quantity,
                item.key.finishing,
                item.key.supplier,
                item.key.note,
                item.date.isoformat(),
                record_id,
            ),
        )
        return cursor.rowcount > 0

    async def delete_matching(self, ledger: LedgerType, key: PartKey) -> int:
        """PartKey가 일치하는 원장 행 삭제

        Returns:
            삭제된 행 수
        """
        cursor = await self.db.execute(
            f"DELETE FROM {ledger.table} WHERE {key_match_clause()}",
            key.to_params(),
        )
        return cursor.rowcount

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get(self, ledger: LedgerType, record_id: str) -> TransactionRecord | None:
        """id로 단건 조회"""
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM {ledger.table} WHERE id = ?",
            (record_id,),
        )
        return TransactionRecord.from_row(row) if row else None

    async def search(
        self,
        ledger: LedgerType,
        search: str | None = None,
        on_date: date | None = None,
    ) -> list[TransactionRecord]:
        """원장 검색

        Args:
            ledger: 입고/출고
            search: 도번/규격/공급처 부분 일치
            on_date: 일자 정확히 일치

        Returns:
            최근 일자 순 목록
        """
        conditions: list[str] = []
        params: list[str] = []

        if search:
            pattern = like_pattern(search)
            conditions.append(
                "(drawing_number LIKE ? ESCAPE '\\' "
                "OR specification LIKE ? ESCAPE '\\' "
                "OR supplier LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])

        if on_date:
            conditions.append("date = ?")
            params.append(on_date.isoformat())

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        rows = await self.db.fetchall(
            f"""
            SELECT {_COLUMNS} FROM {ledger.table}
            {where_clause}
            ORDER BY date DESC, created_at DESC
            """,
            tuple(params),
        )
        return [TransactionRecord.from_row(row) for row in rows]

    async def find_matching(
        self,
        ledger: LedgerType,
        keys: Iterable[PartKey],
    ) -> list[TransactionRecord]:
        """여러 PartKey에 해당하는 원장 행을 한 번에 조회

        재고 목록 한 페이지의 모든 위치를 단일 쿼리로 조인한다.

        Returns:
            일자 내림차순 목록 (호출자가 PartKey별로 분배)
        """
        clause, params = keys_match_clause(keys)
        if not params:
            return []

        rows = await self.db.fetchall(
            f"""
            SELECT {_COLUMNS} FROM {ledger.table}
            WHERE {clause}
            ORDER BY date DESC, created_at DESC
            """,
            params,
        )
        return [TransactionRecord.from_row(row) for row in rows]

    async def find_in_period(
        self,
        ledger: LedgerType,
        start: date,
        end: date,
    ) -> list[TransactionRecord]:
        """기간 내 원장 행 (양 끝 포함)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_COLUMNS} FROM {ledger.table}
            WHERE date BETWEEN ? AND ?
            ORDER BY date DESC, created_at DESC
            """,
            (start.isoformat(), end.isoformat()),
        )
        return [TransactionRecord.from_row(row) for row in rows]

    async def current_stock(self, key: PartKey) -> int:
        """원장에서 직접 계산한 현재 재고

        스냅샷은 마지막 재계산 시점 기준이므로 출고 검증에는 이 값을 쓴다.
        단일 SELECT 한 번으로 두 원장을 같은 시점에서 읽는다.
        """
        clause = key_match_clause()
        row = await self.db.fetchone(
            f"""
            SELECT
                COALESCE((SELECT SUM(quantity) FROM {LedgerType.INBOUND.table} WHERE {clause}), 0)
                - COALESCE((SELECT SUM(quantity) FROM {LedgerType.OUTBOUND.table} WHERE {clause}), 0)
                AS current_stock
            """,
            key.to_params() * 2,
        )
        return int(row["current_stock"]) if row else 0
