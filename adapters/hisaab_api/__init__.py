"""
Hisaab REST API 어댑터

원장 저장소 백엔드 클라이언트 및 응답 매퍼.
"""

from adapters.hisaab_api.rest_client import HisaabApiError, HisaabRestClient

__all__ = [
    "HisaabApiError",
    "HisaabRestClient",
]
