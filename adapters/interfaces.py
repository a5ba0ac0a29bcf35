"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Protocol, runtime_checkable

from adapters.models import LedgerPage
from core.ledger.models import (
    BankAccount,
    ForeignTransferEntry,
    LedgerEntry,
    SpecialBalanceEntry,
    Trader,
)


class HisaabApiError(Exception):
    """원장 저장소 에러

    모든 IHisaabStore 구현체가 실패 시 발생시키는 공통 에러.
    status_code는 HTTP 상태 코드 의미를 따름 (404 = 대상 없음).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


@runtime_checkable
class IHisaabStore(Protocol):
    """원장 저장소 인터페이스

    id 기반 컬렉션 연산 (조회/생성/수정/삭제).
    은행은 trader_id, 원장 항목은 trader_id + bank_id 범위.
    금액은 반드시 Decimal 타입 사용.
    """

    # -------------------------------------------------------------------------
    # 해외 송금
    # -------------------------------------------------------------------------

    async def list_foreign_transfers(self) -> list[ForeignTransferEntry]:
        """해외 송금 전체 조회"""
        ...

    async def get_foreign_transfer(self, entry_id: str) -> ForeignTransferEntry | None:
        """해외 송금 단건 조회 (없으면 None)"""
        ...

    async def create_foreign_transfer(self, entry: ForeignTransferEntry) -> ForeignTransferEntry:
        """해외 송금 생성 (entry.id는 무시, 저장소가 부여)"""
        ...

    async def update_foreign_transfer(self, entry: ForeignTransferEntry) -> ForeignTransferEntry:
        """해외 송금 수정"""
        ...

    async def delete_foreign_transfer(self, entry_id: str) -> None:
        """해외 송금 삭제"""
        ...

    # -------------------------------------------------------------------------
    # 특수 잔액
    # -------------------------------------------------------------------------

    async def list_special_entries(self) -> list[SpecialBalanceEntry]:
        """특수 잔액 전체 조회"""
        ...

    async def get_special_entry(self, entry_id: str) -> SpecialBalanceEntry | None:
        """특수 잔액 단건 조회 (없으면 None)"""
        ...

    async def create_special_entry(self, entry: SpecialBalanceEntry) -> SpecialBalanceEntry:
        """특수 잔액 생성"""
        ...

    async def update_special_entry(self, entry: SpecialBalanceEntry) -> SpecialBalanceEntry:
        """특수 잔액 수정"""
        ...

    async def delete_special_entry(self, entry_id: str) -> None:
        """특수 잔액 삭제"""
        ...

    # -------------------------------------------------------------------------
    # 트레이더
    # -------------------------------------------------------------------------

    async def list_traders(self) -> list[Trader]:
        """트레이더 전체 조회 (은행/원장 항목 포함)"""
        ...

    async def get_trader(self, trader_id: str) -> Trader | None:
        """트레이더 단건 조회 (없으면 None)"""
        ...

    async def create_trader(self, trader: Trader) -> Trader:
        """트레이더 생성"""
        ...

    async def update_trader(self, trader: Trader) -> Trader:
        """트레이더 수정 (이름/약칭/색상)"""
        ...

    async def delete_trader(self, trader_id: str) -> None:
        """트레이더 삭제 (소유 은행/원장 함께 삭제)"""
        ...

    # -------------------------------------------------------------------------
    # 은행 계좌 (trader 범위)
    # -------------------------------------------------------------------------

    async def list_banks(self, trader_id: str) -> list[BankAccount]:
        """트레이더의 은행 계좌 조회"""
        ...

    async def create_bank(self, trader_id: str, bank: BankAccount) -> BankAccount:
        """은행 계좌 생성"""
        ...

    async def update_bank(self, trader_id: str, bank: BankAccount) -> BankAccount:
        """은행 계좌 수정 (이름/코드)"""
        ...

    async def delete_bank(self, trader_id: str, bank_id: str) -> None:
        """은행 계좌 삭제 (소유 원장 함께 삭제)"""
        ...

    # -------------------------------------------------------------------------
    # 원장 항목 (trader + bank 범위)
    # -------------------------------------------------------------------------

    async def list_ledger_entries(self, trader_id: str, bank_id: str) -> LedgerPage:
        """은행 원장 조회"""
        ...

    async def create_ledger_entry(
        self, trader_id: str, bank_id: str, entry: LedgerEntry
    ) -> LedgerEntry:
        """원장 항목 생성"""
        ...

    async def update_ledger_entry(
        self, trader_id: str, bank_id: str, entry: LedgerEntry
    ) -> LedgerEntry:
        """원장 항목 수정"""
        ...

    async def delete_ledger_entry(self, trader_id: str, bank_id: str, entry_id: str) -> None:
        """원장 항목 삭제"""
        ...
