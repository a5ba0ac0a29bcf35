"""
core/ledger/rollup.py 테스트

은행 → 트레이더 잔액 합산
"""

import itertools
from dataclasses import replace
from decimal import Decimal

from core.ledger.models import BankAccount, LedgerEntry, Trader
from core.ledger.rollup import compute_trader_total, summarize_bank, summarize_trader
from core.types import ReferenceType


class TestComputeTraderTotal:
    """트레이더 합계 테스트"""

    def test_sum(self) -> None:
        totals = [Decimal("350000"), Decimal("-20000"), Decimal("0.5")]

        assert compute_trader_total(totals) == Decimal("330000.5")

    def test_no_banks(self) -> None:
        """은행이 없으면 0"""
        assert compute_trader_total([]) == Decimal("0")

    def test_order_independent(self) -> None:
        """은행 순서와 무관"""
        totals = [Decimal("1.10"), Decimal("-2.25"), Decimal("300"), Decimal("0")]
        expected = compute_trader_total(totals)

        for perm in itertools.permutations(totals):
            assert compute_trader_total(perm) == expected


class TestSummaries:
    """은행/트레이더 요약 테스트"""

    def test_summarize_bank(self, sample_trader: Trader) -> None:
        summary = summarize_bank(sample_trader.banks[0])

        assert summary.bank_id == "bk1"
        assert summary.total_balance == Decimal("350000")
        assert summary.entry_count == 3

    def test_summarize_empty_bank(self) -> None:
        """항목 없는 은행은 0"""
        summary = summarize_bank(BankAccount(id="b", name="UBL", code="UBL"))

        assert summary.total_balance == Decimal("0")
        assert summary.entry_count == 0

    def test_summarize_trader(self, sample_trader: Trader) -> None:
        summary = summarize_trader(sample_trader)

        assert summary.total_balance == Decimal("350000")
        assert summary.bank_count == 2
        assert summary.entry_count == 3
        assert [b.name for b in summary.banks] == ["HBL", "MCB"]

    def test_trader_without_banks(self) -> None:
        trader = Trader(id="t", name="Empty", short_name="EMPTY")

        summary = summarize_trader(trader)

        assert summary.total_balance == Decimal("0")
        assert summary.bank_count == 0

    def test_bank_order_does_not_change_total(self, sample_trader: Trader) -> None:
        extra = BankAccount(
            id="bk3",
            name="UBL",
            code="UBL-01",
            entries=(
                LedgerEntry(
                    id="u1",
                    date="2024-12-01",
                    reference_type=ReferenceType.CASH,
                    amount_withdrawn=Decimal("5000"),
                ),
            ),
        )
        trader = replace(sample_trader, banks=sample_trader.banks + (extra,))
        reordered = replace(trader, banks=tuple(reversed(trader.banks)))

        assert summarize_trader(trader).total_balance == Decimal("345000")
        assert summarize_trader(reordered).total_balance == Decimal("345000")
