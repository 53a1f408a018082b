"""
도메인 예외

HTTP 계층에서 상태 코드로 매핑된다 (web/app.py 참고).
- ValidationError, InsufficientStockError → 400
- NotFoundError → 404
- StorageError → 500
"""


class InventoryError(Exception):
    """재고 시스템 기본 예외"""

    status_code: int = 500


class ValidationError(InventoryError):
    """입력값 검증 실패 (필수 필드 누락, 수량 오류 등)"""

    status_code = 400


class InsufficientStockError(InventoryError):
    """출고 요청 수량이 현재 재고보다 많음

    Args:
        specification: 품명
        current: 현재 재고
        requested: 요청 수량
    """

    status_code = 400

    def __init__(self, specification: str, current: int, requested: int):
        self.specification = specification
        self.current = current
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {specification}. "
            f"Current: {current}, Requested: {requested}"
        )


class NotFoundError(InventoryError):
    """수정/삭제 대상 없음"""

    status_code = 404


class StorageError(InventoryError):
    """DB 조회/연결 실패

    호출자에게는 일반 메시지만 노출하고 원인은 서버 로그에 남긴다.
    """

    status_code = 500
