"""
유틸리티 패키지

타임존 처리, 금액 표시 등 공통 유틸리티
"""

from core.utils.formatting import (
    format_number,
    format_signed,
    round_money,
)
from core.utils.timezone import (
    PKT,
    ensure_aware,
    local_timezone,
    now_utc,
    utc_from_timestamp_ms,
)

__all__ = [
    "PKT",
    "ensure_aware",
    "local_timezone",
    "now_utc",
    "utc_from_timestamp_ms",
    "format_number",
    "format_signed",
    "round_money",
]
