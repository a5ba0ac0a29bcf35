"""
원장 엔진 예외

엔진은 계약 위반(식별 필드 누락 등)에서만 예외를 발생시킴.
계산 불가 입력과 타임스탬프 파싱 실패는 로컬에서 복구.
"""


class LedgerError(Exception):
    """원장 엔진 기본 예외"""

    pass


class InvalidEntryError(LedgerError):
    """구조적으로 유효하지 않은 항목

    호출자가 엔진 호출 전에 걸러야 하는 항목이 전달된 경우.

    Args:
        message: 에러 메시지
        entry_id: 문제 항목 ID (알 수 있는 경우)
    """

    def __init__(self, message: str, entry_id: str | None = None):
        super().__init__(message)
        self.entry_id = entry_id
