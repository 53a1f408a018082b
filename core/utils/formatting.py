"""
표시/검색 포맷 유틸리티
"""

LIKE_ESCAPE = "\\"


def format_quantity(quantity: int) -> str:
    """수량을 천 단위 구분 문자열로 변환

    Example:
        >>> format_quantity(1234567)
        '1,234,567'
    """
    return f"{quantity:,}"


def like_pattern(term: str) -> str:
    """부분 일치 LIKE 패턴 생성

    %, _ 는 문자 그대로 검색되도록 이스케이프한다.
    SQL 쪽에서 ESCAPE '\\' 와 함께 사용.

    Example:
        >>> like_pattern("50%")
        '%50\\\\%%'
    """
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
