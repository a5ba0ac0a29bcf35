"""
타임스탬프 결정 (TimestampResolver)

장부마다 시각 정보의 형태가 달라 best-effort로 절대 시각을 결정.

우선순위 (먼저 일치하는 규칙 사용):
    1. 명시적 생성 시각(created_at)이 유효하면 그대로 사용
    2. 날짜 + 시각 문자열: AM/PM 표기를 제거하고 HH:MM 정수 파싱,
       날짜의 로컬 자정 + 시:분 (파싱 실패 시 3으로)
    3. 날짜만: 로컬 자정

어떤 입력에도 예외를 발생시키지 않음. 날짜까지 파싱할 수 없으면
TIMESTAMP_SENTINEL(Unix epoch)을 반환하여 가장 오래된 위치로 정렬되게 함.

주의: AM/PM은 제거만 하고 12시간 보정은 하지 않음 ("02:30 PM" → 02:30).
기존 데이터의 관대한 해석을 그대로 유지.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from core.types import TimestampSource
from core.utils.timezone import PKT, ensure_aware, utc_from_timestamp_ms

logger = logging.getLogger(__name__)

TIMESTAMP_SENTINEL = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MERIDIEM_RE = re.compile(r"\s*(AM|PM)\s*", re.IGNORECASE)


@dataclass(frozen=True)
class ResolvedTimestamp:
    """결정된 시각과 결정 근거"""

    value: datetime
    source: TimestampSource

    @property
    def is_sentinel(self) -> bool:
        return self.source == TimestampSource.SENTINEL


def _parse_iso(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    # Python 3.10 fromisoformat은 "Z" 접미사 미지원
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_instant(
    value: str | datetime | int | float | None,
    tz: timezone = PKT,
) -> datetime | None:
    """명시적 생성 시각 파싱

    Args:
        value: ISO-8601 문자열, datetime, 또는 epoch 밀리초
        tz: naive 값에 부여할 로컬 타임존

    Returns:
        aware datetime, 파싱 불가 시 None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_aware(value, tz)
    if isinstance(value, (int, float)):
        try:
            return utc_from_timestamp_ms(value)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        parsed = _parse_iso(value)
        return ensure_aware(parsed, tz) if parsed else None
    return None


def parse_calendar_date(value: str | date | None) -> date | None:
    """날짜 파싱 (YYYY-MM-DD 또는 ISO 타임스탬프의 날짜 부분)

    Returns:
        date, 파싱 불가 시 None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    parsed = _parse_iso(text)
    return parsed.date() if parsed else None


def parse_time_of_day(value: str | None) -> tuple[int, int] | None:
    """시각 문자열에서 (시, 분) 정수 파싱

    AM/PM 표기는 제거만 함. "HH:MM" 형태가 아니면 None.

    Example:
        >>> parse_time_of_day("10:45 AM")
        (10, 45)
        >>> parse_time_of_day("noon") is None
        True
    """
    if not value or not isinstance(value, str):
        return None
    stripped = _MERIDIEM_RE.sub("", value, count=1)
    parts = stripped.split(":")
    if len(parts) < 2:
        return None
    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        return None


def local_midnight(day: date, tz: timezone = PKT) -> datetime:
    """날짜의 로컬 자정"""
    return datetime.combine(day, time.min, tzinfo=tz)


def resolve(
    created_at: str | datetime | int | float | None = None,
    date_value: str | date | None = None,
    time_value: str | None = None,
    tz: timezone = PKT,
) -> ResolvedTimestamp:
    """절대 시각 결정 (근거 포함)

    Args:
        created_at: 명시적 생성 시각
        date_value: 날짜
        time_value: 시각 문자열
        tz: 로컬 타임존 (날짜 기반 규칙에 사용)

    Returns:
        ResolvedTimestamp (예외 없음)
    """
    instant = parse_instant(created_at, tz)
    if instant is not None:
        return ResolvedTimestamp(instant, TimestampSource.CREATED_AT)

    day = parse_calendar_date(date_value)
    if day is None:
        logger.debug(
            f"타임스탬프 결정 불가, sentinel 사용: created_at={created_at!r}, date={date_value!r}"
        )
        return ResolvedTimestamp(TIMESTAMP_SENTINEL, TimestampSource.SENTINEL)

    midnight = local_midnight(day, tz)

    hours_minutes = parse_time_of_day(time_value)
    if hours_minutes is not None:
        hours, minutes = hours_minutes
        try:
            return ResolvedTimestamp(
                midnight + timedelta(hours=hours, minutes=minutes),
                TimestampSource.DATE_TIME,
            )
        except OverflowError:
            pass

    return ResolvedTimestamp(midnight, TimestampSource.DATE_ONLY)


def resolve_timestamp(
    created_at: str | datetime | int | float | None = None,
    date_value: str | date | None = None,
    time_value: str | None = None,
    tz: timezone = PKT,
) -> datetime:
    """절대 시각 결정 (resolve()의 값만 반환)"""
    return resolve(created_at, date_value, time_value, tz).value
