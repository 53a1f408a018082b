"""
web/models/requests.py 테스트
"""

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from core.inventory.keys import PartKey
from web.models.requests import DeleteConditionRequest, TransactionItemRequest


class TestTransactionItemRequest:
    """TransactionItemRequest 테스트"""

    def test_camel_case(self) -> None:
        """camelCase 입력"""
        item = TransactionItemRequest.model_validate(
            {
                "drawingNumber": "A-1",
                "specification": "볼트",
                "quantity": 3,
                "finishing": "",
                "date": "2024-01-01",
            }
        )

        assert item.drawing_number == "A-1"
        assert item.finishing is None
        assert item.date == date(2024, 1, 1)

    def test_legacy_aliases(self) -> None:
        """drowingnumber / Finishing"""
        item = TransactionItemRequest.model_validate(
            {
                "drowingnumber": "A-1",
                "specification": "볼트",
                "quantity": 3,
                "Finishing": "도금",
                "date": "2024-01-01",
            }
        )

        assert item.drawing_number == "A-1"
        assert item.finishing == "도금"

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity(self, quantity: int) -> None:
        """0 이하 수량"""
        with pytest.raises(PydanticValidationError):
            TransactionItemRequest.model_validate(
                {"drawingNumber": "A", "specification": "B", "quantity": quantity, "date": "2024-01-01"}
            )

    def test_invalid_date(self) -> None:
        """날짜 형식 오류"""
        with pytest.raises(PydanticValidationError):
            TransactionItemRequest.model_validate(
                {"drawingNumber": "A", "specification": "B", "quantity": 1, "date": "2024-13-01"}
            )

    def test_to_new_transaction(self) -> None:
        """도메인 객체 변환"""
        item = TransactionItemRequest.model_validate(
            {
                "drawingNumber": "A-1",
                "specification": "볼트",
                "quantity": 3,
                "supplier": "대성",
                "date": "2024-01-01",
            }
        )

        tx = item.to_new_transaction()

        assert tx.key == PartKey("A-1", "볼트", supplier="대성")
        assert tx.quantity == 3
        assert tx.date == date(2024, 1, 1)


class TestDeleteConditionRequest:
    """DeleteConditionRequest 테스트"""

    def test_to_part_key(self) -> None:
        """null과 ''는 같은 조건"""
        request = DeleteConditionRequest.model_validate(
            {"drawingNumber": "A", "specification": "B", "finishing": "", "note": None}
        )

        assert request.to_part_key() == PartKey("A", "B")

    def test_missing_required(self) -> None:
        """도번/규격 누락은 도메인 ValidationError"""
        request = DeleteConditionRequest.model_validate({"specification": "B"})

        with pytest.raises(ValidationError, match="drawingNumber and specification are required"):
            request.to_part_key()
