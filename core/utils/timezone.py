"""
타임존 유틸리티

내부 비교: aware datetime | 날짜만 있는 항목: 로컬(기본 PKT) 자정 기준
"""

from datetime import datetime, timezone, timedelta

from core.constants import Defaults

# PKT 타임존 (UTC+5)
PKT = timezone(timedelta(hours=Defaults.UTC_OFFSET_HOURS))


def local_timezone(utc_offset_hours: float) -> timezone:
    """UTC 오프셋(시간)으로 고정 타임존 생성

    Args:
        utc_offset_hours: UTC 대비 오프셋 (예: 5, -3.5)

    Returns:
        고정 오프셋 timezone
    """
    return timezone(timedelta(hours=utc_offset_hours))


def ensure_aware(dt: datetime, tz: timezone = PKT) -> datetime:
    """naive datetime에 타임존 부여

    naive datetime은 로컬 시각으로 간주 (원장 입력은 로컬 기준).

    Args:
        dt: datetime 객체
        tz: naive일 때 부여할 타임존

    Returns:
        aware datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def utc_from_timestamp_ms(ts_ms: int | float) -> datetime:
    """밀리초 타임스탬프를 UTC datetime으로 변환

    Args:
        ts_ms: Unix 타임스탬프 (밀리초)

    Returns:
        UTC datetime

    Example:
        >>> utc_from_timestamp_ms(1708444800000)
        datetime(2024, 2, 20, 16, 0, 0, tzinfo=timezone.utc)
    """
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc)

