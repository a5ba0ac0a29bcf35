"""
응답 스키마 (Pydantic)

서비스 조회 결과 직렬화. 금액은 소수 2자리 문자열로 표현하고,
화면 표시용 display_* 필드는 천 단위 구분 문자열.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from core.ledger.activity import ActivityItem
from core.ledger.rollup import BankSummary, TraderSummary
from core.utils.formatting import format_number, format_signed, round_money


def money(amount: Decimal) -> str:
    """Decimal → 소수 2자리 문자열 (구분자 없음)"""
    return f"{round_money(amount):.2f}"


class ActivityItemResponse(BaseModel):
    """최근 활동 항목 응답"""

    kind: str = Field(..., description="credit / debit")
    label: str = Field(..., description="표시 라벨")
    amount: str = Field(..., description="부호 포함 금액")
    display_amount: str = Field(..., description="표시용 금액 (예: -6,000.00 SAR)")
    currency: str = Field(..., description="통화")
    timestamp: str = Field(..., description="결정된 시각 (ISO 8601)")
    time_label: str = Field(..., description="상대 시각")
    category: str = Field(..., description="원본 장부")
    entry_id: str = Field(..., description="원본 항목 ID")

    @classmethod
    def from_item(cls, item: ActivityItem) -> "ActivityItemResponse":
        return cls(
            kind=item.kind.value,
            label=item.label,
            amount=money(item.amount),
            display_amount=format_signed(item.amount, item.currency),
            currency=item.currency,
            timestamp=item.timestamp.isoformat(),
            time_label=item.time_label,
            category=item.category.value,
            entry_id=item.entry_id,
        )


class DashboardResponse(BaseModel):
    """대시보드 응답

    장부별 건수, 최근 활동, 데이터 품질 경고.
    """

    foreign_entry_count: int = Field(..., description="해외 송금 항목 수")
    active_trader_count: int = Field(..., description="트레이더 수")
    special_user_count: int = Field(..., description="특수 잔액 항목 수")
    recent_activity: list[ActivityItemResponse] = Field(
        default_factory=list, description="최근 활동 (최신순)"
    )
    data_quality_warnings: list[str] = Field(
        default_factory=list, description="환율이 유효하지 않은 항목 ID"
    )
    unavailable_sources: list[str] = Field(
        default_factory=list, description="조회 실패한 출처"
    )


class ForeignTransferRow(BaseModel):
    """해외 송금 행"""

    id: str = Field(..., description="항목 ID")
    date: str = Field(..., description="날짜")
    time: str = Field(default="", description="시각")
    ref_no: str = Field(..., description="참조 번호")
    source_amount: str = Field(..., description="원 통화 금액")
    rate: str = Field(..., description="환율")
    target_amount: str = Field(..., description="환산 금액")
    submitted_amount: str = Field(..., description="제출 금액")
    balance: str = Field(..., description="잔액 (환산 - 제출)")
    computable: bool = Field(..., description="환율 유효 여부")


class ForeignTransferBookResponse(BaseModel):
    """해외 송금 장부 응답"""

    entries: list[ForeignTransferRow] = Field(default_factory=list, description="항목 목록")
    total_balance: str = Field(..., description="계산 가능한 항목 잔액 합계")
    display_total: str = Field(..., description="표시용 잔액 합계")
    data_quality_warnings: list[str] = Field(
        default_factory=list, description="환율이 유효하지 않은 항목 ID"
    )


class SpecialRow(BaseModel):
    """특수 잔액 행"""

    id: str = Field(..., description="항목 ID")
    user_name: str = Field(..., description="사용자 이름")
    date: str = Field(..., description="날짜")
    balance_type: str = Field(..., description="Online / Cash")
    name_amount: str = Field(..., description="명의 금액")
    submitted_amount: str = Field(..., description="제출 금액")
    balance: str = Field(..., description="잔액")
    kind: str = Field(..., description="credit / debit")


class SpecialBookResponse(BaseModel):
    """특수 잔액 장부 응답"""

    entries: list[SpecialRow] = Field(default_factory=list, description="항목 목록")
    total_balance: str = Field(..., description="잔액 합계")
    display_total: str = Field(..., description="표시용 잔액 합계")
    user_count: int = Field(..., description="사용자 수")


class BankSummaryResponse(BaseModel):
    """은행 계좌 요약 응답"""

    bank_id: str = Field(..., description="은행 계좌 ID")
    name: str = Field(..., description="은행 이름")
    code: str = Field(..., description="은행 코드")
    total_balance: str = Field(..., description="최종 잔액")
    display_total: str = Field(..., description="표시용 최종 잔액")
    entry_count: int = Field(..., description="원장 항목 수")

    @classmethod
    def from_summary(cls, summary: BankSummary) -> "BankSummaryResponse":
        return cls(
            bank_id=summary.bank_id,
            name=summary.name,
            code=summary.code,
            total_balance=money(summary.total_balance),
            display_total=format_number(summary.total_balance),
            entry_count=summary.entry_count,
        )


class TraderSummaryResponse(BaseModel):
    """트레이더 요약 응답"""

    trader_id: str = Field(..., description="트레이더 ID")
    name: str = Field(..., description="이름")
    short_name: str = Field(..., description="약칭")
    color: str = Field(default="", description="표시 색상")
    total_balance: str = Field(..., description="은행 잔액 합계")
    display_total: str = Field(..., description="표시용 잔액 합계")
    bank_count: int = Field(..., description="은행 계좌 수")
    entry_count: int = Field(..., description="원장 항목 수")

    @classmethod
    def from_summary(cls, summary: TraderSummary) -> "TraderSummaryResponse":
        return cls(
            trader_id=summary.trader_id,
            name=summary.name,
            short_name=summary.short_name,
            color=summary.color,
            total_balance=money(summary.total_balance),
            display_total=format_number(summary.total_balance),
            bank_count=summary.bank_count,
            entry_count=summary.entry_count,
        )


class TraderDetailResponse(TraderSummaryResponse):
    """트레이더 상세 응답 (은행별 잔액 포함)"""

    banks: list[BankSummaryResponse] = Field(default_factory=list, description="은행 목록")

    @classmethod
    def from_summary(cls, summary: TraderSummary) -> "TraderDetailResponse":
        base = TraderSummaryResponse.from_summary(summary)
        return cls(
            **base.model_dump(),
            banks=[BankSummaryResponse.from_summary(b) for b in summary.banks],
        )


class LedgerRowResponse(BaseModel):
    """원장 행 응답"""

    id: str = Field(..., description="항목 ID")
    date: str = Field(..., description="날짜")
    reference_type: str = Field(..., description="Online / Cash")
    amount_added: str = Field(..., description="입금액")
    amount_withdrawn: str = Field(..., description="출금액")
    running_balance: str = Field(..., description="누적 잔액")
    display_running_balance: str = Field(..., description="표시용 누적 잔액")


class BankLedgerResponse(BaseModel):
    """은행 원장 응답"""

    trader_id: str = Field(..., description="트레이더 ID")
    bank_id: str = Field(..., description="은행 계좌 ID")
    bank_name: str = Field(..., description="은행 이름")
    entries: list[LedgerRowResponse] = Field(default_factory=list, description="날짜순 원장 행")
    total_balance: str = Field(..., description="계산된 최종 잔액")
    display_total: str = Field(..., description="표시용 최종 잔액")
    reported_total: str | None = Field(default=None, description="저장소 보고 잔액")
    drift: bool = Field(default=False, description="계산 잔액과 보고 잔액 불일치 여부")
