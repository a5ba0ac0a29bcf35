"""
장부별 잔액 공식

항목 종류별 순수 함수. 입력을 변경하지 않으며 예외를 발생시키지 않음.
나눗셈은 Decimal 컨텍스트 전체 정밀도를 유지하고, 반올림은 표시 시점에만 수행.

공식:
    해외 송금: (source_amount / rate) - submitted_amount
    특수 잔액: name_amount - submitted_amount
    은행 원장: amount_added - amount_withdrawn
"""

from dataclasses import dataclass
from decimal import Decimal

from core.ledger.models import ForeignTransferEntry, LedgerEntry, SpecialBalanceEntry

ZERO = Decimal("0")


def is_rate_computable(rate: Decimal) -> bool:
    """환율로 대상 통화 금액을 계산할 수 있는지 여부 (rate > 0)"""
    return rate > ZERO


def foreign_transfer_amount(source_amount: Decimal, rate: Decimal) -> Decimal:
    """대상 통화 금액 (source / rate)

    rate <= 0 이면 0 반환 (계산 불가).
    """
    if not is_rate_computable(rate):
        return ZERO
    return source_amount / rate


def foreign_transfer_balance(
    source_amount: Decimal,
    rate: Decimal,
    submitted: Decimal,
) -> Decimal:
    """해외 송금 잔액

    Args:
        source_amount: 송금 원화 금액
        rate: 환율
        submitted: 제출된 대상 통화 금액

    Returns:
        (source_amount / rate) - submitted, rate <= 0 이면 0
    """
    if not is_rate_computable(rate):
        return ZERO
    return foreign_transfer_amount(source_amount, rate) - submitted


def special_balance(name_amount: Decimal, submitted_amount: Decimal) -> Decimal:
    """특수 잔액 (name_amount - submitted_amount)"""
    return name_amount - submitted_amount


def ledger_delta(amount_added: Decimal, amount_withdrawn: Decimal) -> Decimal:
    """원장 변동액 (amount_added - amount_withdrawn)"""
    return amount_added - amount_withdrawn


@dataclass(frozen=True)
class ForeignTransferBalance:
    """해외 송금 파생 값

    computable=False 이면 환율이 0 이하라 target_amount, balance 모두 0.
    호출자는 이를 데이터 품질 경고로 표시해야 함.
    """

    target_amount: Decimal
    balance: Decimal
    computable: bool


def evaluate_foreign_transfer(entry: ForeignTransferEntry) -> ForeignTransferBalance:
    """해외 송금 항목의 대상 통화 금액/잔액/계산 가능 여부"""
    return ForeignTransferBalance(
        target_amount=foreign_transfer_amount(entry.source_amount, entry.rate),
        balance=foreign_transfer_balance(
            entry.source_amount, entry.rate, entry.submitted_amount
        ),
        computable=is_rate_computable(entry.rate),
    )


def special_entry_balance(entry: SpecialBalanceEntry) -> Decimal:
    return special_balance(entry.name_amount, entry.submitted_amount)


def ledger_entry_delta(entry: LedgerEntry) -> Decimal:
    return ledger_delta(entry.amount_added, entry.amount_withdrawn)
