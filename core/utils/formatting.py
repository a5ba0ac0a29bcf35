"""
금액 표시 유틸리티

계산은 전체 정밀도 Decimal로 수행하고, 표시 시점에만 소수 2자리로 반올림.
"""

from decimal import ROUND_HALF_UP, Decimal

from core.constants import DisplayPrecision

MONEY_QUANT = Decimal(1).scaleb(-DisplayPrecision.MONEY_PLACES)  # Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """표시용 반올림 (소수 2자리, ROUND_HALF_UP)

    Example:
        >>> round_money(Decimal("6622.516556"))
        Decimal('6622.52')
    """
    return amount.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def format_number(amount: Decimal) -> str:
    """천 단위 구분 + 소수 2자리 고정 문자열

    Example:
        >>> format_number(Decimal("350000"))
        '350,000.00'
    """
    return f"{round_money(amount):,.2f}"


def format_signed(amount: Decimal, currency: str) -> str:
    """부호 포함 금액 문자열

    양수는 "+", 음수는 "-", 0은 부호 없음.

    Example:
        >>> format_signed(Decimal("-15000"), "PKR")
        '-15,000.00 PKR'
    """
    rounded = round_money(amount)
    if rounded > 0:
        sign = "+"
    elif rounded < 0:
        sign = "-"
    else:
        sign = ""
    return f"{sign}{format_number(abs(rounded))} {currency}"
