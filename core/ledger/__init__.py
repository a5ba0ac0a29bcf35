"""
원장 잔액 계산 및 활동 집계 엔진

저장소 스냅샷을 받아 읽기 시점에 잔액을 파생하는 순수 함수 모음.
상태를 보관하지 않으므로 여러 호출자가 동시에 사용해도 안전.

사용 예시:
```python
from core.ledger import compute_running_balances, summarize_trader, merge_activity

result = compute_running_balances(bank.entries)
result.total_balance

summary = summarize_trader(trader)
summary.total_balance, summary.bank_count

feed = merge_activity(foreign_entries, special_entries, traders, limit=4)
```
"""

from core.ledger.activity import (
    ActivityItem,
    format_relative_time,
    merge_activity,
)
from core.ledger.exceptions import InvalidEntryError, LedgerError
from core.ledger.formula import (
    ForeignTransferBalance,
    evaluate_foreign_transfer,
    foreign_transfer_amount,
    foreign_transfer_balance,
    is_rate_computable,
    ledger_delta,
    special_balance,
)
from core.ledger.models import (
    BankAccount,
    ForeignTransferEntry,
    LedgerEntry,
    SpecialBalanceEntry,
    Trader,
)
from core.ledger.rollup import (
    BankSummary,
    TraderSummary,
    compute_trader_total,
    summarize_bank,
    summarize_trader,
)
from core.ledger.running_balance import (
    RunningBalanceResult,
    RunningBalanceRow,
    compute_running_balances,
)
from core.ledger.timestamp import TIMESTAMP_SENTINEL, ResolvedTimestamp, resolve, resolve_timestamp

__all__ = [
    # 모델
    "ForeignTransferEntry",
    "SpecialBalanceEntry",
    "LedgerEntry",
    "BankAccount",
    "Trader",
    # 잔액 공식
    "foreign_transfer_amount",
    "foreign_transfer_balance",
    "is_rate_computable",
    "evaluate_foreign_transfer",
    "ForeignTransferBalance",
    "special_balance",
    "ledger_delta",
    # 누적 잔액 / 집계
    "compute_running_balances",
    "RunningBalanceResult",
    "RunningBalanceRow",
    "compute_trader_total",
    "summarize_bank",
    "summarize_trader",
    "BankSummary",
    "TraderSummary",
    # 타임스탬프
    "resolve",
    "resolve_timestamp",
    "ResolvedTimestamp",
    "TIMESTAMP_SENTINEL",
    # 활동 피드
    "merge_activity",
    "format_relative_time",
    "ActivityItem",
    # 예외
    "LedgerError",
    "InvalidEntryError",
]
