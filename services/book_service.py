"""
장부 조회 서비스

해외 송금 장부와 특수 잔액 장부를 파생 잔액과 함께 조회.
"""

import logging

from adapters.interfaces import IHisaabStore
from core.ledger.formula import ZERO, evaluate_foreign_transfer, special_entry_balance
from core.types import ActivityKind
from core.utils.formatting import format_number
from services.models import (
    ForeignTransferBookResponse,
    ForeignTransferRow,
    SpecialBookResponse,
    SpecialRow,
    money,
)

logger = logging.getLogger(__name__)


class LedgerBookService:
    """장부 조회 서비스

    Args:
        store: 원장 저장소
    """

    def __init__(self, store: IHisaabStore):
        self.store = store

    async def get_foreign_transfers(self) -> ForeignTransferBookResponse:
        """해외 송금 장부 (환산 금액, 잔액, 계산 가능 여부 포함)

        환율이 0 이하인 항목은 잔액 합계에서 제외하고 경고 목록에 추가.
        """
        entries = await self.store.list_foreign_transfers()

        rows: list[ForeignTransferRow] = []
        warnings: list[str] = []
        total = ZERO
        for entry in entries:
            evaluated = evaluate_foreign_transfer(entry)
            if evaluated.computable:
                total += evaluated.balance
            else:
                logger.warning(f"환율이 유효하지 않은 해외 송금 항목: {entry.id} (rate={entry.rate})")
                warnings.append(entry.id)

            rows.append(
                ForeignTransferRow(
                    id=entry.id,
                    date=entry.date,
                    time=entry.time,
                    ref_no=entry.ref_no,
                    source_amount=money(entry.source_amount),
                    rate=str(entry.rate),
                    target_amount=money(evaluated.target_amount),
                    submitted_amount=money(entry.submitted_amount),
                    balance=money(evaluated.balance),
                    computable=evaluated.computable,
                )
            )

        return ForeignTransferBookResponse(
            entries=rows,
            total_balance=money(total),
            display_total=format_number(total),
            data_quality_warnings=warnings,
        )

    async def get_special_entries(self) -> SpecialBookResponse:
        """특수 잔액 장부 (잔액, credit/debit 분류 포함)"""
        entries = await self.store.list_special_entries()

        rows: list[SpecialRow] = []
        total = ZERO
        for entry in entries:
            balance = special_entry_balance(entry)
            total += balance
            kind = ActivityKind.CREDIT if balance >= ZERO else ActivityKind.DEBIT
            rows.append(
                SpecialRow(
                    id=entry.id,
                    user_name=entry.user_name,
                    date=entry.date,
                    balance_type=entry.balance_type.value,
                    name_amount=money(entry.name_amount),
                    submitted_amount=money(entry.submitted_amount),
                    balance=money(balance),
                    kind=kind.value,
                )
            )

        return SpecialBookResponse(
            entries=rows,
            total_balance=money(total),
            display_total=format_number(total),
            user_count=len({e.user_name for e in entries}),
        )
