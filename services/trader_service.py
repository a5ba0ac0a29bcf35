"""
트레이더 서비스

트레이더 목록/상세와 은행 원장(누적 잔액)을 조회.
"""

import logging

from adapters.interfaces import HisaabApiError, IHisaabStore
from core.ledger.models import BankAccount
from core.ledger.rollup import summarize_trader
from core.ledger.running_balance import compute_running_balances
from core.utils.formatting import format_number
from services.models import (
    BankLedgerResponse,
    LedgerRowResponse,
    TraderDetailResponse,
    TraderSummaryResponse,
    money,
)

logger = logging.getLogger(__name__)


class TraderService:
    """트레이더 서비스

    Args:
        store: 원장 저장소
    """

    def __init__(self, store: IHisaabStore):
        self.store = store

    async def list_traders(self) -> list[TraderSummaryResponse]:
        """트레이더 목록 (트레이더별 잔액 합계 포함)"""
        traders = await self.store.list_traders()
        return [TraderSummaryResponse.from_summary(summarize_trader(t)) for t in traders]

    async def get_trader(self, trader_id: str) -> TraderDetailResponse | None:
        """트레이더 상세 (은행별 잔액 포함). 없으면 None"""
        trader = await self.store.get_trader(trader_id)
        if trader is None:
            return None
        return TraderDetailResponse.from_summary(summarize_trader(trader))

    async def get_bank_ledger(self, trader_id: str, bank_id: str) -> BankLedgerResponse | None:
        """은행 원장 조회

        항목을 날짜순으로 정렬하여 누적 잔액을 계산.
        저장소가 보고한 잔액과 다르면 drift로 기록하고 계산값을 사용.

        Returns:
            BankLedgerResponse (트레이더/은행이 없으면 None)
        """
        trader = await self.store.get_trader(trader_id)
        if trader is None:
            return None

        bank: BankAccount | None = next((b for b in trader.banks if b.id == bank_id), None)
        if bank is None:
            return None

        try:
            page = await self.store.list_ledger_entries(trader_id, bank_id)
        except HisaabApiError as e:
            if e.is_not_found:
                return None
            raise

        result = compute_running_balances(page.entries)

        drift = page.reported_total is not None and page.reported_total != result.total_balance
        if drift:
            logger.warning(
                f"잔액 불일치 (drift): trader={trader_id}, bank={bank_id}, "
                f"computed={result.total_balance}, reported={page.reported_total}"
            )

        return BankLedgerResponse(
            trader_id=trader_id,
            bank_id=bank_id,
            bank_name=bank.name,
            entries=[
                LedgerRowResponse(
                    id=row.entry.id,
                    date=row.entry.date,
                    reference_type=row.entry.reference_type.value,
                    amount_added=money(row.entry.amount_added),
                    amount_withdrawn=money(row.entry.amount_withdrawn),
                    running_balance=money(row.running_balance),
                    display_running_balance=format_number(row.running_balance),
                )
                for row in result.rows
            ],
            total_balance=money(result.total_balance),
            display_total=format_number(result.total_balance),
            reported_total=None if page.reported_total is None else money(page.reported_total),
            drift=drift,
        )
