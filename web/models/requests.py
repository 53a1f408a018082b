"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증

필드 이름은 camelCase(drawingNumber)로 받으며, 기존 클라이언트가 보내던
drowingnumber / Finishing 표기도 허용한다.
"""

from datetime import date as date_type

from pydantic import AliasChoices, BaseModel, Field, field_validator

from core.inventory.keys import PartKey, normalize_optional
from core.inventory.models import NewTransaction


class TransactionItemRequest(BaseModel):
    """입고/출고 항목"""

    drawing_number: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("drawingNumber", "drowingnumber", "drawing_number"),
        description="도번",
    )
    specification: str = Field(..., min_length=1, description="규격/품명")
    quantity: int = Field(..., gt=0, description="수량 (양수)")
    finishing: str | None = Field(
        default=None,
        validation_alias=AliasChoices("finishing", "Finishing"),
        description="후처리",
    )
    supplier: str | None = Field(default=None, description="공급처")
    note: str | None = Field(default=None, description="비고")
    date: date_type = Field(..., description="입출고 일자 (YYYY-MM-DD)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "drawingNumber": "A-1001",
                    "specification": "M8 볼트",
                    "quantity": 10,
                    "finishing": "아연도금",
                    "supplier": "대성정밀",
                    "note": None,
                    "date": "2024-01-01",
                }
            ]
        }
    }

    @field_validator("finishing", "supplier", "note")
    @classmethod
    def _empty_to_none(cls, value: str | None) -> str | None:
        return normalize_optional(value)

    def to_new_transaction(self) -> NewTransaction:
        """도메인 객체로 변환"""
        return NewTransaction(
            key=PartKey(
                self.drawing_number,
                self.specification,
                self.finishing,
                self.supplier,
                self.note,
            ),
            quantity=self.quantity,
            date=self.date,
        )


class DeleteConditionRequest(BaseModel):
    """조건 삭제 요청 (PartKey)

    선택 필드의 null과 ''는 같은 조건("비어 있음")으로 처리된다.
    """

    drawing_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("drawingNumber", "drowingnumber", "drawing_number"),
        description="도번",
    )
    specification: str | None = Field(default=None, description="규격/품명")
    finishing: str | None = Field(
        default=None,
        validation_alias=AliasChoices("finishing", "Finishing"),
        description="후처리",
    )
    supplier: str | None = Field(default=None, description="공급처")
    note: str | None = Field(default=None, description="비고")

    def to_part_key(self) -> PartKey:
        """PartKey로 변환

        Raises:
            ValidationError: 도번 또는 규격 누락
        """
        return PartKey(
            self.drawing_number or "",
            self.specification or "",
            self.finishing,
            self.supplier,
            self.note,
        )
