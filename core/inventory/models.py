"""
입출고 원장 / 재고 위치 레코드
"""

from dataclasses import dataclass
from datetime import date as date_type
from typing import Any, Mapping

from core.exceptions import ValidationError
from core.inventory.keys import PartKey


@dataclass(frozen=True)
class NewTransaction:
    """저장 전 입출고 항목 (id/created_at 미할당)

    Args:
        key: 재고 위치 복합키
        quantity: 수량 (양수)
        date: 입출고 일자 (업무 일자)
    """

    key: PartKey
    quantity: int
    date: date_type

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError("Invalid quantity value")
        if self.quantity <= 0:
            raise ValidationError("Invalid quantity value")


@dataclass(frozen=True)
class TransactionRecord:
    """저장된 입출고 원장 행"""

    id: str
    key: PartKey
    quantity: int
    date: str
    created_at: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TransactionRecord":
        return cls(
            id=row["id"],
            key=PartKey.from_row(row),
            quantity=int(row["quantity"]),
            date=row["date"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict[str, Any]:
        """API 응답용 dict (camelCase)"""
        return {
            "id": self.id,
            "drawingNumber": self.key.drawing_number,
            "specification": self.key.specification,
            "quantity": self.quantity,
            "finishing": self.key.finishing,
            "supplier": self.key.supplier,
            "note": self.key.note,
            "date": self.date,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class StockPosition:
    """재고 스냅샷 행

    id는 재계산할 때마다 새로 발급되므로 재계산 전후로 같은 위치를 가리키지 않는다.
    """

    id: str
    key: PartKey
    stock: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "StockPosition":
        return cls(
            id=row["id"],
            key=PartKey.from_row(row),
            stock=int(row["stock"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """API 응답용 dict (camelCase)"""
        return {
            "id": self.id,
            "drawingNumber": self.key.drawing_number,
            "specification": self.key.specification,
            "stock": self.stock,
            "finishing": self.key.finishing,
            "supplier": self.key.supplier,
            "note": self.key.note,
        }
