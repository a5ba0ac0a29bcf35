"""
활동 피드 병합 (ActivityMerger)

세 장부(해외 송금, 특수 잔액, 트레이더 은행 원장)의 서로 다른 항목을
공통 ActivityItem으로 정규화한 뒤, 시각 내림차순으로 정렬하여 limit개만 반환.

정규화 규칙:
    해외 송금  → submitted > 0 이면 debit, 아니면 credit
                 금액 = -submitted (대상 통화)
    특수 잔액  → balance >= 0 이면 credit, 아니면 debit
                 금액 = balance (부호 포함)
    은행 원장  → delta >= 0 이면 credit(Deposit), 아니면 debit(Withdrawal)
                 금액 = delta (부호 포함)

시각을 결정할 수 없는 항목은 sentinel 시각으로 가장 뒤에 정렬될 뿐,
병합 전체를 실패시키지 않음. 같은 시각의 항목은 입력 순서를 유지.

사용 예시:
```python
feed = merge_activity(foreign_entries, special_entries, traders, limit=4)
for item in feed:
    print(item.label, item.amount, item.time_label)
```
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from core.constants import Defaults
from core.ledger.exceptions import InvalidEntryError
from core.ledger.formula import ZERO, ledger_entry_delta, special_entry_balance
from core.ledger.models import (
    BankAccount,
    ForeignTransferEntry,
    LedgerEntry,
    SpecialBalanceEntry,
    Trader,
)
from core.ledger.timestamp import ResolvedTimestamp, resolve
from core.types import ActivityKind, EntryCategory, TimestampSource
from core.utils.timezone import PKT, ensure_aware, now_utc

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class ActivityItem:
    """정규화된 활동 항목

    Attributes:
        kind: credit / debit
        label: 표시 라벨
        amount: 부호 포함 표시 금액
        currency: 금액 통화
        timestamp: 결정된 절대 시각
        time_label: 상대 시각 ("10 minutes ago")
        category: 원본 장부 종류
        entry_id: 원본 항목 ID
        timestamp_source: 시각 결정 근거
    """

    kind: ActivityKind
    label: str
    amount: Decimal
    currency: str
    timestamp: datetime
    time_label: str
    category: EntryCategory
    entry_id: str
    timestamp_source: TimestampSource


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit if count == 1 else unit + 's'} ago"


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """상대 시각 라벨

    <60초 "Just now", <1시간 "N minute(s) ago", <24시간 "N hour(s) ago",
    그 외 "N day(s) ago". 미래 시각은 "Just now".

    Args:
        timestamp: 대상 시각 (aware)
        now: 기준 시각 (None이면 현재 UTC)
    """
    now = now or now_utc()
    diff_seconds = math.floor((now - timestamp).total_seconds())

    if diff_seconds < SECONDS_PER_MINUTE:
        return "Just now"
    if diff_seconds < SECONDS_PER_HOUR:
        return _plural(diff_seconds // SECONDS_PER_MINUTE, "minute")
    if diff_seconds < SECONDS_PER_DAY:
        return _plural(diff_seconds // SECONDS_PER_HOUR, "hour")
    return _plural(diff_seconds // SECONDS_PER_DAY, "day")


def _require_id(entry_id: str, kind: str) -> None:
    if not entry_id:
        raise InvalidEntryError(f"{kind} 항목 id 누락")


def _make_item(
    kind: ActivityKind,
    label: str,
    amount: Decimal,
    currency: str,
    resolved: ResolvedTimestamp,
    category: EntryCategory,
    entry_id: str,
    now: datetime,
) -> ActivityItem:
    if resolved.is_sentinel:
        logger.debug(f"시각 미확정 항목: {category.value}/{entry_id}")
    return ActivityItem(
        kind=kind,
        label=label,
        amount=amount,
        currency=currency,
        timestamp=resolved.value,
        time_label=format_relative_time(resolved.value, now),
        category=category,
        entry_id=entry_id,
        timestamp_source=resolved.source,
    )


def foreign_transfer_activity(
    entry: ForeignTransferEntry,
    now: datetime,
    tz: timezone = PKT,
    currency: str = Defaults.FOREIGN_CURRENCY,
) -> ActivityItem:
    """해외 송금 항목 → ActivityItem"""
    if not isinstance(entry, ForeignTransferEntry):
        raise InvalidEntryError(f"ForeignTransferEntry가 아닌 항목: {type(entry).__name__}")
    _require_id(entry.id, "해외 송금")

    kind = ActivityKind.DEBIT if entry.submitted_amount > ZERO else ActivityKind.CREDIT
    return _make_item(
        kind=kind,
        label=f"Foreign Transfer - {entry.ref_no}",
        amount=-entry.submitted_amount,
        currency=currency,
        resolved=resolve(entry.created_at, entry.date, entry.time, tz),
        category=EntryCategory.FOREIGN_TRANSFER,
        entry_id=entry.id,
        now=now,
    )


def special_activity(
    entry: SpecialBalanceEntry,
    now: datetime,
    tz: timezone = PKT,
    currency: str = Defaults.LOCAL_CURRENCY,
) -> ActivityItem:
    """특수 잔액 항목 → ActivityItem"""
    if not isinstance(entry, SpecialBalanceEntry):
        raise InvalidEntryError(f"SpecialBalanceEntry가 아닌 항목: {type(entry).__name__}")
    _require_id(entry.id, "특수 잔액")

    balance = special_entry_balance(entry)
    kind = ActivityKind.CREDIT if balance >= ZERO else ActivityKind.DEBIT
    return _make_item(
        kind=kind,
        label=f"{entry.user_name} - {entry.balance_type.value}",
        amount=balance,
        currency=currency,
        resolved=resolve(entry.created_at, entry.date, None, tz),
        category=EntryCategory.SPECIAL,
        entry_id=entry.id,
        now=now,
    )


def ledger_activity(
    trader: Trader,
    bank: BankAccount,
    entry: LedgerEntry,
    now: datetime,
    tz: timezone = PKT,
    currency: str = Defaults.LOCAL_CURRENCY,
) -> ActivityItem:
    """은행 원장 항목 → ActivityItem"""
    if not isinstance(entry, LedgerEntry):
        raise InvalidEntryError(f"LedgerEntry가 아닌 항목: {type(entry).__name__}")
    _require_id(entry.id, "은행 원장")

    delta = ledger_entry_delta(entry)
    if delta >= ZERO:
        kind, action = ActivityKind.CREDIT, "Deposit"
    else:
        kind, action = ActivityKind.DEBIT, "Withdrawal"
    return _make_item(
        kind=kind,
        label=f"{trader.name} - {bank.name} {action}",
        amount=delta,
        currency=currency,
        resolved=resolve(entry.created_at, entry.date, None, tz),
        category=EntryCategory.BANK_LEDGER,
        entry_id=entry.id,
        now=now,
    )


def collect_activity(
    foreign_entries: Iterable[ForeignTransferEntry],
    special_entries: Iterable[SpecialBalanceEntry],
    traders: Iterable[Trader],
    now: datetime,
    tz: timezone = PKT,
    foreign_currency: str = Defaults.FOREIGN_CURRENCY,
    local_currency: str = Defaults.LOCAL_CURRENCY,
) -> list[ActivityItem]:
    """모든 장부 항목을 정규화 (정렬 전, 입력 순서)"""
    items: list[ActivityItem] = []

    for entry in foreign_entries:
        items.append(foreign_transfer_activity(entry, now, tz, foreign_currency))

    for entry in special_entries:
        items.append(special_activity(entry, now, tz, local_currency))

    for trader in traders:
        if not isinstance(trader, Trader):
            raise InvalidEntryError(f"Trader가 아닌 항목: {type(trader).__name__}")
        for bank in trader.banks:
            for entry in bank.entries:
                items.append(ledger_activity(trader, bank, entry, now, tz, local_currency))

    return items


def merge_activity(
    foreign_entries: Iterable[ForeignTransferEntry],
    special_entries: Iterable[SpecialBalanceEntry],
    traders: Iterable[Trader],
    limit: int = Defaults.ACTIVITY_LIMIT,
    now: datetime | None = None,
    tz: timezone = PKT,
    foreign_currency: str = Defaults.FOREIGN_CURRENCY,
    local_currency: str = Defaults.LOCAL_CURRENCY,
) -> list[ActivityItem]:
    """최근 활동 피드 생성

    Args:
        foreign_entries: 해외 송금 항목
        special_entries: 특수 잔액 항목
        traders: 트레이더 (은행/원장 항목 포함)
        limit: 최대 항목 수
        now: 상대 시각 기준 (None이면 현재 UTC, naive면 tz 기준 로컬 시각)
        tz: 날짜 기반 시각의 로컬 타임존
        foreign_currency: 해외 송금 표시 통화
        local_currency: 특수/원장 표시 통화

    Returns:
        최신순 ActivityItem 목록 (길이 = min(limit, 전체 항목 수))

    Raises:
        ValueError: limit < 0
        InvalidEntryError: 구조적으로 유효하지 않은 항목
    """
    if limit < 0:
        raise ValueError(f"limit은 0 이상이어야 합니다: {limit}")

    now = now or now_utc()
    now = ensure_aware(now, tz)
    items = collect_activity(
        foreign_entries,
        special_entries,
        traders,
        now,
        tz,
        foreign_currency,
        local_currency,
    )

    # sorted(reverse=True)도 안정 정렬
    items.sort(key=lambda item: item.timestamp, reverse=True)
    return items[:limit]
