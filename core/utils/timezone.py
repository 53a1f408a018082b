"""
시간/일자 유틸리티

내부 저장: UTC (created_at) | 업무 일자: 달력 날짜 (date)
"""

import calendar
from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)"""
    return datetime.now(timezone.utc)


def format_created_at(dt: datetime | None = None) -> str:
    """created_at 저장 포맷 (UTC, 초 단위)

    Example:
        >>> format_created_at(datetime(2024, 1, 2, 3, 4, 5, 678, tzinfo=timezone.utc))
        '2024-01-02 03:04:05'
    """
    if dt is None:
        dt = now_utc()
    elif dt.tzinfo is None:
        # naive datetime은 UTC로 간주
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def month_range(year: int, month: int) -> tuple[date, date]:
    """해당 월의 첫날과 마지막 날

    Raises:
        ValueError: month가 1~12 범위를 벗어난 경우

    Example:
        >>> month_range(2024, 2)
        (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
