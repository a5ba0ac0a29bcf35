"""
Hisaab REST 클라이언트 테스트

HisaabRestClient HTTP 요청 테스트 (httpx mock 사용).
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from adapters.hisaab_api.rest_client import HisaabApiError, HisaabRestClient
from adapters.interfaces import HisaabApiError as StoreError
from adapters.interfaces import IHisaabStore
from core.ledger.models import ForeignTransferEntry, Trader


def _response(status_code: int, payload) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = b"{}"
    response.json.return_value = payload
    return response


class TestHisaabRestClientBasics:
    """기본 동작 테스트"""

    def test_implements_protocol(self) -> None:
        assert isinstance(HisaabRestClient(), IHisaabStore)

    def test_base_url_trailing_slash(self) -> None:
        client = HisaabRestClient(base_url="http://store.test/api/")

        assert client.base_url == "http://store.test/api"

    def test_auth_header(self) -> None:
        """토큰이 있으면 Bearer 헤더"""
        client = HisaabRestClient(auth_token="tok")

        assert client._headers()["Authorization"] == "Bearer tok"

    def test_no_auth_header_without_token(self) -> None:
        assert "Authorization" not in HisaabRestClient()._headers()


class TestHisaabRestClientRequests:
    """요청/응답 처리 테스트"""

    @pytest.mark.asyncio
    async def test_list_traders(self) -> None:
        client = HisaabRestClient(base_url="http://store.test/api")
        payload = {
            "data": [
                {"_id": "t1", "name": "Ahmed Traders", "shortName": "AHMED", "banks": []}
            ]
        }

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = _response(200, payload)
            mock_get_client.return_value = mock_http_client

            traders = await client.list_traders()

            assert [t.id for t in traders] == ["t1"]
            args, _ = mock_http_client.request.call_args
            assert args == ("GET", "http://store.test/api/traders")

    @pytest.mark.asyncio
    async def test_list_ledger_entries_with_total(self) -> None:
        client = HisaabRestClient(base_url="http://store.test/api")
        payload = {
            "data": [{"_id": "e1", "date": "2024-12-18", "amountAdded": 100}],
            "totalBalance": 100,
        }

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = _response(200, payload)
            mock_get_client.return_value = mock_http_client

            page = await client.list_ledger_entries("t1", "b1")

            assert page.reported_total == Decimal("100")
            args, _ = mock_http_client.request.call_args
            assert args[1] == "http://store.test/api/traders/t1/banks/b1/ledger"

    @pytest.mark.asyncio
    async def test_create_foreign_transfer_uppercases_ref(self) -> None:
        """참조 번호는 대문자로 전송"""
        client = HisaabRestClient()
        entry = ForeignTransferEntry(
            id="",
            date="2024-12-20",
            time="10:00",
            ref_no="ref001",
            source_amount=Decimal("500000"),
            rate=Decimal("75.5"),
            submitted_amount=Decimal("6000"),
        )
        created = {"_id": "new1", "refNo": "REF001", "pkrAmount": 500000, "riyalRate": 75.5}

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = _response(201, {"data": created})
            mock_get_client.return_value = mock_http_client

            result = await client.create_foreign_transfer(entry)

            assert result.id == "new1"
            _, kwargs = mock_http_client.request.call_args
            assert kwargs["json"]["refNo"] == "REF001"

    @pytest.mark.asyncio
    async def test_error_response(self) -> None:
        """4xx 응답 → HisaabApiError (서버 메시지 사용)"""
        client = HisaabRestClient()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = _response(400, {"error": "Invalid data"})
            mock_get_client.return_value = mock_http_client

            with pytest.raises(HisaabApiError) as exc_info:
                await client.list_special_entries()

            assert exc_info.value.status_code == 400
            assert str(exc_info.value) == "Invalid data"

    @pytest.mark.asyncio
    async def test_error_is_store_interface_error(self) -> None:
        """REST 에러는 인터페이스 공통 에러 타입"""
        client = HisaabRestClient()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = _response(404, {"error": "Not found"})
            mock_get_client.return_value = mock_http_client

            with pytest.raises(StoreError) as exc_info:
                await client.list_banks("missing")

            assert exc_info.value.is_not_found

    @pytest.mark.asyncio
    async def test_get_not_found_returns_none(self) -> None:
        client = HisaabRestClient()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = _response(404, {"error": "Not found"})
            mock_get_client.return_value = mock_http_client

            assert await client.get_trader("missing") is None

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        """네트워크 에러 → HisaabApiError"""
        client = HisaabRestClient()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.side_effect = httpx.ConnectError("refused")
            mock_get_client.return_value = mock_http_client

            with pytest.raises(HisaabApiError, match="Network error"):
                await client.list_foreign_transfers()

    @pytest.mark.asyncio
    async def test_unexpected_body_on_create(self) -> None:
        client = HisaabRestClient()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = _response(200, {"data": None})
            mock_get_client.return_value = mock_http_client

            with pytest.raises(HisaabApiError):
                await client.create_trader(Trader(id="", name="New", short_name="NEW"))

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        client = HisaabRestClient()
        http_client = await client._get_client()

        await client.close()

        assert http_client.is_closed
        assert client._client is None
