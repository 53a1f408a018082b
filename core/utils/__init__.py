"""
유틸리티 패키지

시간/일자 처리, 검색 패턴, 표시 포맷 등 공통 유틸리티
"""

from core.utils.formatting import format_quantity, like_pattern
from core.utils.timezone import format_created_at, month_range, now_utc

__all__ = [
    "format_quantity",
    "like_pattern",
    "format_created_at",
    "month_range",
    "now_utc",
]
