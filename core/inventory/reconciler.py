"""
재고 스냅샷 재계산

inventory 테이블은 입출고 원장의 캐시다.
재계산은 항상 전체를 다시 만든다 (증분 갱신 없음).

1. 입고(+수량)와 출고(-수량)를 합친다
2. PartKey 규칙으로 그룹핑 (선택 필드의 NULL과 ''는 같은 그룹)
3. 그룹별 합계 = 재고
4. 재고 <= 0 인 그룹 제외
5. 기존 스냅샷을 지우고 새 스냅샷을 넣는다

1~5는 BEGIN IMMEDIATE 트랜잭션 하나로 실행된다.
WAL 모드의 다른 연결은 재계산 중에도 이전 스냅샷 전체를 보며,
실패 시 롤백되어 이전 스냅샷이 그대로 남는다.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from adapters.db.sqlite_adapter import storage_errors
from core.constants import Tables
from core.inventory.keys import PartKey, group_by_columns
from core.types import LedgerType

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


AGGREGATE_SQL = f"""
    SELECT
        drawing_number,
        specification,
        COALESCE(finishing, '') AS finishing_key,
        COALESCE(supplier, '') AS supplier_key,
        COALESCE(note, '') AS note_key,
        SUM(signed_quantity) AS stock
    FROM (
        SELECT drawing_number, specification, finishing, supplier, note,
               quantity * {LedgerType.INBOUND.sign} AS signed_quantity
        FROM {LedgerType.INBOUND.table}
        UNION ALL
        SELECT drawing_number, specification, finishing, supplier, note,
               quantity * {LedgerType.OUTBOUND.sign} AS signed_quantity
        FROM {LedgerType.OUTBOUND.table}
    ) AS combined
    GROUP BY {group_by_columns()}
    HAVING SUM(signed_quantity) > 0
    ORDER BY drawing_number, specification
"""

INSERT_SQL = f"""
    INSERT INTO {Tables.INVENTORY} (id, drawing_number, specification, stock, finishing, supplier, note)
    VALUES (?, ?, ?, ?, ?, ?, ?)
"""


@dataclass(frozen=True)
class ReconcileResult:
    """재계산 결과"""

    positions: int
    elapsed_ms: float


class StockReconciler:
    """재고 스냅샷 재계산기

    입고/출고/수정/조건 삭제 직후와 앱 시작 시 호출된다.
    실패는 로그를 남기고 StorageError로 호출자에게 전달한다 (자동 재시도 없음).

    Args:
        db: SQLite 어댑터 (쓰기 가능)
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def compute_positions(self) -> list[tuple[PartKey, int]]:
        """원장 기준 재고 위치 계산 (저장하지 않음)

        Returns:
            (PartKey, 재고) 목록. 재고 > 0 인 위치만, 도번/규격 순.
        """
        rows = await self.db.fetchall(AGGREGATE_SQL)
        return [
            (
                PartKey(
                    row["drawing_number"],
                    row["specification"],
                    row["finishing_key"],
                    row["supplier_key"],
                    row["note_key"],
                ),
                int(row["stock"]),
            )
            for row in rows
        ]

    async def rebuild(self) -> ReconcileResult:
        """스냅샷 전체 재생성

        Returns:
            ReconcileResult

        Raises:
            StorageError: 재계산 실패 (이전 스냅샷 유지)
        """
        started = time.perf_counter()

        with storage_errors("rebuild inventory"):
            async with self.db.transaction(immediate=True):
                positions = await self.compute_positions()

                await self.db.execute(f"DELETE FROM {Tables.INVENTORY}")
                await self.db.executemany(
                    INSERT_SQL,
                    [
                        (
                            str(uuid.uuid4()),
                            key.drawing_number,
                            key.specification,
                            stock,
                            key.finishing,
                            key.supplier,
                            key.note,
                        )
                        for key, stock in positions
                    ],
                )

        result = ReconcileResult(
            positions=len(positions),
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )

        logger.info(
            f"재고 스냅샷 재계산 완료: {result.positions}개 위치",
            extra={"elapsed_ms": result.elapsed_ms},
        )

        return result
