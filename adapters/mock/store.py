"""
Mock 원장 저장소

테스트/데모용 메모리 내 저장소.
IHisaabStore Protocol 준수. 출처별 장애 시뮬레이션 지원.
"""

import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal

from adapters.interfaces import HisaabApiError
from adapters.models import LedgerPage
from core.constants import Defaults
from core.ledger.models import (
    BankAccount,
    ForeignTransferEntry,
    LedgerEntry,
    SpecialBalanceEntry,
    Trader,
)
from core.utils.timezone import now_utc

# 장애 시뮬레이션 대상 이름
SOURCE_FOREIGN = "foreign"
SOURCE_SPECIAL = "special"
SOURCE_TRADERS = "traders"


@dataclass
class MockState:
    """Mock 상태 (메모리 내 저장, 삽입 순서 유지)"""

    foreign_transfers: dict[str, ForeignTransferEntry] = field(default_factory=dict)
    special_entries: dict[str, SpecialBalanceEntry] = field(default_factory=dict)
    traders: dict[str, Trader] = field(default_factory=dict)

    # 원장별 저장소 보고 잔액 (None이면 보고하지 않음)
    reported_totals: dict[tuple[str, str], Decimal] = field(default_factory=dict)

    # 실패시킬 출처 (SOURCE_* 상수)
    failing_sources: set[str] = field(default_factory=set)


def _new_id() -> str:
    return uuid.uuid4().hex[:24]


def _created_at() -> str:
    return now_utc().isoformat()


class MockHisaabStore:
    """Mock 원장 저장소

    사용 예시:
    ```python
    store = MockHisaabStore()
    store.add_trader(trader)
    store.fail_source("special")   # 특수 잔액 조회 실패 시뮬레이션
    ```
    """

    def __init__(self, state: MockState | None = None):
        self.state = state or MockState()

    # -------------------------------------------------------------------------
    # 테스트 헬퍼
    # -------------------------------------------------------------------------

    def add_foreign_transfer(self, entry: ForeignTransferEntry) -> None:
        self.state.foreign_transfers[entry.id] = entry

    def add_special_entry(self, entry: SpecialBalanceEntry) -> None:
        self.state.special_entries[entry.id] = entry

    def add_trader(self, trader: Trader) -> None:
        self.state.traders[trader.id] = trader

    def set_reported_total(self, trader_id: str, bank_id: str, total: Decimal) -> None:
        self.state.reported_totals[(trader_id, bank_id)] = total

    def fail_source(self, source: str) -> None:
        self.state.failing_sources.add(source)

    def recover_source(self, source: str) -> None:
        self.state.failing_sources.discard(source)

    def _check(self, source: str) -> None:
        if source in self.state.failing_sources:
            raise HisaabApiError(f"Mock failure: {source}", status_code=503)

    def _validate_trader(self, trader: Trader) -> None:
        if len(trader.short_name) > Defaults.TRADER_SHORT_NAME_MAX:
            raise HisaabApiError(
                f"shortName은 {Defaults.TRADER_SHORT_NAME_MAX}자 이하여야 합니다", status_code=400
            )

    def _require_trader(self, trader_id: str) -> Trader:
        trader = self.state.traders.get(trader_id)
        if trader is None:
            raise HisaabApiError(f"Trader not found: {trader_id}", status_code=404)
        return trader

    def _require_bank(self, trader: Trader, bank_id: str) -> BankAccount:
        for bank in trader.banks:
            if bank.id == bank_id:
                return bank
        raise HisaabApiError(f"Bank not found: {bank_id}", status_code=404)

    def _replace_bank(self, trader: Trader, bank: BankAccount) -> None:
        banks = tuple(bank if b.id == bank.id else b for b in trader.banks)
        self.state.traders[trader.id] = replace(trader, banks=banks)

    # -------------------------------------------------------------------------
    # 해외 송금
    # -------------------------------------------------------------------------

    async def list_foreign_transfers(self) -> list[ForeignTransferEntry]:
        self._check(SOURCE_FOREIGN)
        return list(self.state.foreign_transfers.values())

    async def get_foreign_transfer(self, entry_id: str) -> ForeignTransferEntry | None:
        self._check(SOURCE_FOREIGN)
        return self.state.foreign_transfers.get(entry_id)

    async def create_foreign_transfer(self, entry: ForeignTransferEntry) -> ForeignTransferEntry:
        self._check(SOURCE_FOREIGN)
        created = replace(
            entry, id=_new_id(), ref_no=entry.ref_no.upper(), created_at=_created_at()
        )
        self.state.foreign_transfers[created.id] = created
        return created

    async def update_foreign_transfer(self, entry: ForeignTransferEntry) -> ForeignTransferEntry:
        self._check(SOURCE_FOREIGN)
        if entry.id not in self.state.foreign_transfers:
            raise HisaabApiError(f"Entry not found: {entry.id}", status_code=404)
        self.state.foreign_transfers[entry.id] = entry
        return entry

    async def delete_foreign_transfer(self, entry_id: str) -> None:
        self._check(SOURCE_FOREIGN)
        self.state.foreign_transfers.pop(entry_id, None)

    # -------------------------------------------------------------------------
    # 특수 잔액
    # -------------------------------------------------------------------------

    async def list_special_entries(self) -> list[SpecialBalanceEntry]:
        self._check(SOURCE_SPECIAL)
        return list(self.state.special_entries.values())

    async def get_special_entry(self, entry_id: str) -> SpecialBalanceEntry | None:
        self._check(SOURCE_SPECIAL)
        return self.state.special_entries.get(entry_id)

    async def create_special_entry(self, entry: SpecialBalanceEntry) -> SpecialBalanceEntry:
        self._check(SOURCE_SPECIAL)
        created = replace(entry, id=_new_id(), created_at=_created_at())
        self.state.special_entries[created.id] = created
        return created

    async def update_special_entry(self, entry: SpecialBalanceEntry) -> SpecialBalanceEntry:
        self._check(SOURCE_SPECIAL)
        if entry.id not in self.state.special_entries:
            raise HisaabApiError(f"Entry not found: {entry.id}", status_code=404)
        self.state.special_entries[entry.id] = entry
        return entry

    async def delete_special_entry(self, entry_id: str) -> None:
        self._check(SOURCE_SPECIAL)
        self.state.special_entries.pop(entry_id, None)

    # -------------------------------------------------------------------------
    # 트레이더
    # -------------------------------------------------------------------------

    async def list_traders(self) -> list[Trader]:
        self._check(SOURCE_TRADERS)
        return list(self.state.traders.values())

    async def get_trader(self, trader_id: str) -> Trader | None:
        self._check(SOURCE_TRADERS)
        return self.state.traders.get(trader_id)

    async def create_trader(self, trader: Trader) -> Trader:
        self._check(SOURCE_TRADERS)
        self._validate_trader(trader)
        created = replace(trader, id=_new_id(), banks=())
        self.state.traders[created.id] = created
        return created

    async def update_trader(self, trader: Trader) -> Trader:
        self._check(SOURCE_TRADERS)
        self._validate_trader(trader)
        current = self._require_trader(trader.id)
        updated = replace(
            current, name=trader.name, short_name=trader.short_name, color=trader.color
        )
        self.state.traders[updated.id] = updated
        return updated

    async def delete_trader(self, trader_id: str) -> None:
        self._check(SOURCE_TRADERS)
        self.state.traders.pop(trader_id, None)
        for key in [k for k in self.state.reported_totals if k[0] == trader_id]:
            del self.state.reported_totals[key]

    # -------------------------------------------------------------------------
    # 은행 계좌
    # -------------------------------------------------------------------------

    async def list_banks(self, trader_id: str) -> list[BankAccount]:
        self._check(SOURCE_TRADERS)
        return list(self._require_trader(trader_id).banks)

    async def create_bank(self, trader_id: str, bank: BankAccount) -> BankAccount:
        self._check(SOURCE_TRADERS)
        trader = self._require_trader(trader_id)
        created = replace(bank, id=_new_id(), entries=())
        self.state.traders[trader_id] = replace(trader, banks=trader.banks + (created,))
        return created

    async def update_bank(self, trader_id: str, bank: BankAccount) -> BankAccount:
        self._check(SOURCE_TRADERS)
        trader = self._require_trader(trader_id)
        current = self._require_bank(trader, bank.id)
        updated = replace(current, name=bank.name, code=bank.code)
        self._replace_bank(trader, updated)
        return updated

    async def delete_bank(self, trader_id: str, bank_id: str) -> None:
        self._check(SOURCE_TRADERS)
        trader = self._require_trader(trader_id)
        banks = tuple(b for b in trader.banks if b.id != bank_id)
        self.state.traders[trader_id] = replace(trader, banks=banks)
        self.state.reported_totals.pop((trader_id, bank_id), None)

    # -------------------------------------------------------------------------
    # 원장 항목
    # -------------------------------------------------------------------------

    async def list_ledger_entries(self, trader_id: str, bank_id: str) -> LedgerPage:
        self._check(SOURCE_TRADERS)
        bank = self._require_bank(self._require_trader(trader_id), bank_id)
        return LedgerPage(
            entries=bank.entries,
            reported_total=self.state.reported_totals.get((trader_id, bank_id)),
        )

    async def create_ledger_entry(
        self, trader_id: str, bank_id: str, entry: LedgerEntry
    ) -> LedgerEntry:
        self._check(SOURCE_TRADERS)
        trader = self._require_trader(trader_id)
        bank = self._require_bank(trader, bank_id)
        created = replace(entry, id=_new_id(), created_at=_created_at())
        self._replace_bank(trader, replace(bank, entries=bank.entries + (created,)))
        return created

    async def update_ledger_entry(
        self, trader_id: str, bank_id: str, entry: LedgerEntry
    ) -> LedgerEntry:
        self._check(SOURCE_TRADERS)
        trader = self._require_trader(trader_id)
        bank = self._require_bank(trader, bank_id)
        if all(e.id != entry.id for e in bank.entries):
            raise HisaabApiError(f"Entry not found: {entry.id}", status_code=404)
        entries = tuple(entry if e.id == entry.id else e for e in bank.entries)
        self._replace_bank(trader, replace(bank, entries=entries))
        return entry

    async def delete_ledger_entry(self, trader_id: str, bank_id: str, entry_id: str) -> None:
        self._check(SOURCE_TRADERS)
        trader = self._require_trader(trader_id)
        bank = self._require_bank(trader, bank_id)
        entries = tuple(e for e in bank.entries if e.id != entry_id)
        self._replace_bank(trader, replace(bank, entries=entries))
