"""
트레이더 집계 (TraderRollup)

은행별 최종 잔액(RunningBalanceAccumulator 결과)을 트레이더 잔액으로 합산.
합산은 순서와 무관 (은행 순서가 결과에 영향을 주지 않음).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from core.ledger.formula import ZERO
from core.ledger.models import BankAccount, Trader
from core.ledger.running_balance import RunningBalanceResult, compute_running_balances


@dataclass(frozen=True)
class BankSummary:
    """은행 계좌 요약"""

    bank_id: str
    name: str
    code: str
    total_balance: Decimal
    entry_count: int


@dataclass(frozen=True)
class TraderSummary:
    """트레이더 요약

    Attributes:
        total_balance: 소유 은행 잔액 합계
        bank_count: 은행 계좌 수
        entry_count: 전체 원장 항목 수
        banks: 은행별 요약 (트레이더가 정의한 순서)
    """

    trader_id: str
    name: str
    short_name: str
    color: str
    total_balance: Decimal
    bank_count: int
    entry_count: int
    banks: tuple[BankSummary, ...]


def compute_trader_total(bank_totals: Iterable[Decimal]) -> Decimal:
    """은행 잔액 합계 (은행이 없으면 0)"""
    return sum(bank_totals, ZERO)


def summarize_bank(
    bank: BankAccount,
    result: RunningBalanceResult | None = None,
) -> BankSummary:
    """은행 계좌 요약

    Args:
        bank: 은행 계좌
        result: 이미 계산된 누적 잔액 결과 (None이면 새로 계산)
    """
    if result is None:
        result = compute_running_balances(bank.entries)
    return BankSummary(
        bank_id=bank.id,
        name=bank.name,
        code=bank.code,
        total_balance=result.total_balance,
        entry_count=result.entry_count,
    )


def summarize_trader(trader: Trader) -> TraderSummary:
    """트레이더 요약 (은행별 잔액 계산 후 합산)"""
    banks = tuple(summarize_bank(bank) for bank in trader.banks)
    return TraderSummary(
        trader_id=trader.id,
        name=trader.name,
        short_name=trader.short_name,
        color=trader.color,
        total_balance=compute_trader_total(b.total_balance for b in banks),
        bank_count=len(banks),
        entry_count=sum(b.entry_count for b in banks),
        banks=banks,
    )
