"""
누적 잔액 계산 (RunningBalanceAccumulator)

한 은행 계좌의 원장 항목을 날짜 오름차순으로 안정 정렬한 뒤
좌측 누적합으로 항목별 누적 잔액과 최종 잔액을 계산.

    running_balance[i] = running_balance[i-1] + (added[i] - withdrawn[i])
    running_balance[-1] = 0 (seed)

같은 날짜의 항목은 입력 순서를 유지하므로, 동일 입력에 대해 항상
동일한 결과를 반환함 (결정적, 멱등).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from core.ledger.exceptions import InvalidEntryError
from core.ledger.formula import ZERO, ledger_entry_delta
from core.ledger.models import LedgerEntry
from core.ledger.timestamp import parse_calendar_date


@dataclass(frozen=True)
class RunningBalanceRow:
    """누적 잔액이 부여된 원장 항목"""

    entry: LedgerEntry
    delta: Decimal
    running_balance: Decimal


@dataclass(frozen=True)
class RunningBalanceResult:
    """누적 잔액 계산 결과

    Attributes:
        rows: 정렬된 항목과 누적 잔액
        total_balance: 마지막 누적 잔액 (항목이 없으면 0)
    """

    rows: tuple[RunningBalanceRow, ...]
    total_balance: Decimal

    @property
    def entry_count(self) -> int:
        return len(self.rows)

    @property
    def running_balances(self) -> list[Decimal]:
        return [row.running_balance for row in self.rows]


def _sort_key(entry: LedgerEntry) -> date:
    # 파싱 불가 날짜는 가장 앞으로
    return parse_calendar_date(entry.date) or date.min


def order_entries(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """날짜 오름차순 안정 정렬 (같은 날짜는 입력 순서 유지)"""
    return sorted(entries, key=_sort_key)


def compute_running_balances(entries: Iterable[LedgerEntry]) -> RunningBalanceResult:
    """항목별 누적 잔액 및 최종 잔액 계산

    Args:
        entries: 한 은행 계좌의 원장 항목

    Returns:
        RunningBalanceResult

    Raises:
        InvalidEntryError: LedgerEntry가 아니거나 id가 비어 있는 항목
    """
    ordered = order_entries(_validated(entries))

    rows: list[RunningBalanceRow] = []
    running = ZERO
    for entry in ordered:
        delta = ledger_entry_delta(entry)
        running = running + delta
        rows.append(RunningBalanceRow(entry=entry, delta=delta, running_balance=running))

    return RunningBalanceResult(rows=tuple(rows), total_balance=running)


def _validated(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    validated = []
    for entry in entries:
        if not isinstance(entry, LedgerEntry):
            raise InvalidEntryError(
                f"LedgerEntry가 아닌 항목: {type(entry).__name__}"
            )
        if not entry.id:
            raise InvalidEntryError("원장 항목 id 누락")
        validated.append(entry)
    return validated
