"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum

from core.constants import Tables


class LedgerType(str, Enum):
    """원장 종류 (입고 / 출고)"""

    INBOUND = "inbound"
    OUTBOUND = "outbound"

    @property
    def table(self) -> str:
        """원장 테이블 이름"""
        if self == LedgerType.INBOUND:
            return Tables.INBOUND
        return Tables.OUTBOUND

    @property
    def sign(self) -> int:
        """재고 계산 시 부호 (입고 +, 출고 -)"""
        return 1 if self == LedgerType.INBOUND else -1


class SuggestField(str, Enum):
    """자동완성 대상 컬럼"""

    DRAWING_NUMBER = "drawing_number"
    SPECIFICATION = "specification"
