"""
Hisaab REST API 클라이언트

원장 저장소 백엔드와 통신하는 클라이언트. IHisaabStore Protocol 구현.
응답은 {"data": ...} 형태로 감싸져 있으며, 에러는 {"error": "..."}.

사용 예시:
```python
client = HisaabRestClient(base_url="http://localhost:5000/api", auth_token="xxx")
traders = await client.list_traders()
await client.close()
```
"""

import logging
from typing import Any

import httpx

from adapters.hisaab_api.mapper import (
    bank_from_api,
    bank_to_api,
    foreign_transfer_from_api,
    foreign_transfer_to_api,
    ledger_entry_from_api,
    ledger_entry_to_api,
    ledger_page_from_api,
    special_entry_from_api,
    special_entry_to_api,
    trader_from_api,
    trader_to_api,
)
from adapters.interfaces import HisaabApiError
from adapters.models import LedgerPage
from core.constants import Defaults, StoreEndpoints
from core.ledger.models import (
    BankAccount,
    ForeignTransferEntry,
    LedgerEntry,
    SpecialBalanceEntry,
    Trader,
)

logger = logging.getLogger(__name__)


class HisaabRestClient:
    """Hisaab REST API 클라이언트

    Args:
        base_url: API 기본 URL (예: http://localhost:5000/api)
        auth_token: Bearer 토큰 (비어 있으면 헤더 생략)
        timeout: HTTP 요청 타임아웃 (초)
    """

    def __init__(
        self,
        base_url: str = Defaults.STORE_BASE_URL,
        auth_token: str = "",
        timeout: float = Defaults.STORE_TIMEOUT_SEC,
    ):
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 반환 (lazy init)"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HisaabRestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """API 요청 실행

        Args:
            method: HTTP 메서드
            endpoint: API 엔드포인트 (예: /traders)
            body: 요청 본문 (POST/PUT용)

        Returns:
            API 응답 JSON

        Raises:
            HisaabApiError: API 에러 또는 네트워크 에러
        """
        client = await self._get_client()
        url = f"{self.base_url}{endpoint}"

        try:
            response = await client.request(
                method, url, json=body, headers=self._headers()
            )
        except httpx.RequestError as e:
            logger.error(f"Hisaab API request error: {method} {endpoint} - {e}")
            raise HisaabApiError(f"Network error: {e}") from e

        if response.status_code >= 400:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            error_msg = (
                error_data.get("error") if isinstance(error_data, dict) else None
            ) or "Request failed"
            logger.error(
                f"Hisaab API error: {response.status_code} - {error_msg}",
                extra={"endpoint": endpoint},
            )
            raise HisaabApiError(error_msg, response.status_code)

        return response.json() if response.content else {}

    async def _get_data(self, endpoint: str) -> Any:
        payload = await self._request("GET", endpoint)
        return payload.get("data") if isinstance(payload, dict) else None

    async def _get_optional(self, endpoint: str) -> dict[str, Any] | None:
        try:
            data = await self._get_data(endpoint)
        except HisaabApiError as e:
            if e.is_not_found:
                return None
            raise
        return data or None

    async def _send(self, method: str, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        payload = await self._request(method, endpoint, body)
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise HisaabApiError(f"Unexpected response body for {method} {endpoint}")
        return data

    # =========================================================================
    # 해외 송금
    # =========================================================================

    async def list_foreign_transfers(self) -> list[ForeignTransferEntry]:
        data = await self._get_data(StoreEndpoints.FOREIGN_TRANSFERS)
        return [foreign_transfer_from_api(item) for item in data or []]

    async def get_foreign_transfer(self, entry_id: str) -> ForeignTransferEntry | None:
        data = await self._get_optional(f"{StoreEndpoints.FOREIGN_TRANSFERS}/{entry_id}")
        return foreign_transfer_from_api(data) if data else None

    async def create_foreign_transfer(self, entry: ForeignTransferEntry) -> ForeignTransferEntry:
        body = foreign_transfer_to_api(entry)
        body["refNo"] = body["refNo"].upper()
        data = await self._send("POST", StoreEndpoints.FOREIGN_TRANSFERS, body)
        return foreign_transfer_from_api(data)

    async def update_foreign_transfer(self, entry: ForeignTransferEntry) -> ForeignTransferEntry:
        data = await self._send(
            "PUT",
            f"{StoreEndpoints.FOREIGN_TRANSFERS}/{entry.id}",
            foreign_transfer_to_api(entry),
        )
        return foreign_transfer_from_api(data)

    async def delete_foreign_transfer(self, entry_id: str) -> None:
        await self._request("DELETE", f"{StoreEndpoints.FOREIGN_TRANSFERS}/{entry_id}")

    # =========================================================================
    # 특수 잔액
    # =========================================================================

    async def list_special_entries(self) -> list[SpecialBalanceEntry]:
        data = await self._get_data(StoreEndpoints.SPECIAL_ENTRIES)
        return [special_entry_from_api(item) for item in data or []]

    async def get_special_entry(self, entry_id: str) -> SpecialBalanceEntry | None:
        data = await self._get_optional(f"{StoreEndpoints.SPECIAL_ENTRIES}/{entry_id}")
        return special_entry_from_api(data) if data else None

    async def create_special_entry(self, entry: SpecialBalanceEntry) -> SpecialBalanceEntry:
        data = await self._send(
            "POST", StoreEndpoints.SPECIAL_ENTRIES, special_entry_to_api(entry)
        )
        return special_entry_from_api(data)

    async def update_special_entry(self, entry: SpecialBalanceEntry) -> SpecialBalanceEntry:
        data = await self._send(
            "PUT",
            f"{StoreEndpoints.SPECIAL_ENTRIES}/{entry.id}",
            special_entry_to_api(entry),
        )
        return special_entry_from_api(data)

    async def delete_special_entry(self, entry_id: str) -> None:
        await self._request("DELETE", f"{StoreEndpoints.SPECIAL_ENTRIES}/{entry_id}")

    # =========================================================================
    # 트레이더
    # =========================================================================

    async def list_traders(self) -> list[Trader]:
        data = await self._get_data(StoreEndpoints.TRADERS)
        return [trader_from_api(item) for item in data or []]

    async def get_trader(self, trader_id: str) -> Trader | None:
        data = await self._get_optional(f"{StoreEndpoints.TRADERS}/{trader_id}")
        return trader_from_api(data) if data else None

    async def create_trader(self, trader: Trader) -> Trader:
        data = await self._send("POST", StoreEndpoints.TRADERS, trader_to_api(trader))
        return trader_from_api(data)

    async def update_trader(self, trader: Trader) -> Trader:
        data = await self._send(
            "PUT", f"{StoreEndpoints.TRADERS}/{trader.id}", trader_to_api(trader)
        )
        return trader_from_api(data)

    async def delete_trader(self, trader_id: str) -> None:
        await self._request("DELETE", f"{StoreEndpoints.TRADERS}/{trader_id}")

    # =========================================================================
    # 은행 계좌
    # =========================================================================

    async def list_banks(self, trader_id: str) -> list[BankAccount]:
        data = await self._get_data(StoreEndpoints.BANKS.format(trader_id=trader_id))
        return [bank_from_api(item) for item in data or []]

    async def create_bank(self, trader_id: str, bank: BankAccount) -> BankAccount:
        data = await self._send(
            "POST", StoreEndpoints.BANKS.format(trader_id=trader_id), bank_to_api(bank)
        )
        return bank_from_api(data)

    async def update_bank(self, trader_id: str, bank: BankAccount) -> BankAccount:
        endpoint = StoreEndpoints.BANKS.format(trader_id=trader_id)
        data = await self._send("PUT", f"{endpoint}/{bank.id}", bank_to_api(bank))
        return bank_from_api(data)

    async def delete_bank(self, trader_id: str, bank_id: str) -> None:
        endpoint = StoreEndpoints.BANKS.format(trader_id=trader_id)
        await self._request("DELETE", f"{endpoint}/{bank_id}")

    # =========================================================================
    # 원장 항목
    # =========================================================================

    async def list_ledger_entries(self, trader_id: str, bank_id: str) -> LedgerPage:
        endpoint = StoreEndpoints.LEDGER.format(trader_id=trader_id, bank_id=bank_id)
        payload = await self._request("GET", endpoint)
        return ledger_page_from_api(payload if isinstance(payload, dict) else {})

    async def create_ledger_entry(
        self, trader_id: str, bank_id: str, entry: LedgerEntry
    ) -> LedgerEntry:
        endpoint = StoreEndpoints.LEDGER.format(trader_id=trader_id, bank_id=bank_id)
        data = await self._send("POST", endpoint, ledger_entry_to_api(entry))
        return ledger_entry_from_api(data)

    async def update_ledger_entry(
        self, trader_id: str, bank_id: str, entry: LedgerEntry
    ) -> LedgerEntry:
        endpoint = StoreEndpoints.LEDGER.format(trader_id=trader_id, bank_id=bank_id)
        data = await self._send("PUT", f"{endpoint}/{entry.id}", ledger_entry_to_api(entry))
        return ledger_entry_from_api(data)

    async def delete_ledger_entry(self, trader_id: str, bank_id: str, entry_id: str) -> None:
        endpoint = StoreEndpoints.LEDGER.format(trader_id=trader_id, bank_id=bank_id)
        await self._request("DELETE", f"{endpoint}/{entry_id}")
