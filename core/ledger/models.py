"""
원장 도메인 모델

저장소에서 받은 스냅샷을 표현하는 불변 데이터 구조.
모든 금액은 Decimal 사용. 파생 값(잔액, 누적 잔액)은 저장하지 않음.

소유 관계:
    Trader ─owns→ BankAccount ─owns→ LedgerEntry
    (tuple 구성, 역참조 없음)
"""

from dataclasses import dataclass, field
from decimal import Decimal

from core.types import BalanceType, ReferenceType


@dataclass(frozen=True)
class ForeignTransferEntry:
    """해외 송금 항목

    Attributes:
        id: 항목 ID
        date: 날짜 문자열 (YYYY-MM-DD)
        time: 시각 문자열 (HH:MM, AM/PM 접미사 허용)
        ref_no: 참조 번호
        source_amount: 송금 원화 금액 (PKR)
        rate: 환율 (source / rate = 대상 통화 금액)
        submitted_amount: 제출된 대상 통화 금액 (SAR)
        reference2: 보조 참조
        created_at: 생성 시각 (ISO-8601, 없을 수 있음)
    """

    id: str
    date: str
    time: str
    ref_no: str
    source_amount: Decimal
    rate: Decimal
    submitted_amount: Decimal
    reference2: str = ""
    created_at: str | None = None


@dataclass(frozen=True)
class SpecialBalanceEntry:
    """특수 잔액 항목

    Attributes:
        id: 항목 ID
        user_name: 사용자 표시 이름
        date: 날짜 문자열
        balance_type: Online / Cash
        name_amount: 사용자 명의 금액
        submitted_amount: 제출 금액
        created_at: 생성 시각 (없을 수 있음)
    """

    id: str
    user_name: str
    date: str
    balance_type: BalanceType
    name_amount: Decimal
    submitted_amount: Decimal
    created_at: str | None = None


@dataclass(frozen=True)
class LedgerEntry:
    """은행 원장 항목

    누적 잔액은 RunningBalanceAccumulator가 읽기 시점에 계산.
    """

    id: str
    date: str
    reference_type: ReferenceType
    amount_added: Decimal = Decimal("0")
    amount_withdrawn: Decimal = Decimal("0")
    created_at: str | None = None


@dataclass(frozen=True)
class BankAccount:
    """은행 계좌 (원장 항목 소유)"""

    id: str
    name: str
    code: str
    entries: tuple[LedgerEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Trader:
    """트레이더 (은행 계좌 소유)

    Attributes:
        id: 트레이더 ID
        name: 표시 이름
        short_name: 약칭 (최대 10자)
        color: 표시 색상 토큰
        banks: 소유 은행 계좌
    """

    id: str
    name: str
    short_name: str
    color: str = ""
    banks: tuple[BankAccount, ...] = field(default_factory=tuple)

    @property
    def entry_count(self) -> int:
        """전체 은행의 원장 항목 수"""
        return sum(len(bank.entries) for bank in self.banks)
