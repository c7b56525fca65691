"""
기록 표시 형식 변환

- 트랙: 10150 → "10.15", 109230 → "1:49.23"
- 필드: 742 → "7.42m" (미터), 742 → 24' 4.13" (피트/인치)
- 로케일과 무관하게 항상 소수점 둘째 자리까지 표시
"""
import re
from decimal import Decimal, ROUND_HALF_UP

from .calculator import InvalidPerformance, validate_performance


_TIME_PATTERN = re.compile(r"^(?:(\d+):)?(\d+)\.(\d{1,2})$")
_DISTANCE_PATTERN = re.compile(r"^(\d+)(?:\.(\d{1,2}))?\s*m$")


def _to_decimal(value) -> Decimal:
    # Fraction 등 str()이 소수 표기가 아닌 Real 타입도 처리
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(repr(float(value)))


def _hundredths(value, divisor: int) -> int:
    """value / divisor 를 1/100 단위 정수로 반올림 (half-up)"""
    quantized = (_to_decimal(value) * 100 / divisor).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(quantized)


def format_time(ms) -> str:
    """밀리초 → 시간 문자열"""
    validate_performance(ms)
    hundredths = _hundredths(ms, 1000)
    minutes, rest = divmod(hundredths, 6000)
    seconds, fraction = divmod(rest, 100)

    if minutes > 0:
        return f"{minutes}:{seconds:02d}.{fraction:02d}"
    return f"{seconds}.{fraction:02d}"


def format_distance(cm) -> str:
    """센티미터 → 미터 문자열"""
    validate_performance(cm)
    hundredths = _hundredths(cm, 100)
    meters, fraction = divmod(hundredths, 100)
    return f"{meters}.{fraction:02d}m"


def format_distance_imperial(cm) -> str:
    """센티미터 → 피트/인치 문자열"""
    validate_performance(cm)
    total_inches = _to_decimal(cm) / Decimal("2.54")
    feet = int(total_inches // 12)
    inches = (total_inches - feet * 12).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if inches >= 12:
        feet, inches = feet + 1, inches - 12
    return f"{feet}' {inches}\""


def format_performance(value, is_field_event: bool) -> str:
    if is_field_event:
        return format_distance(value)
    return format_time(value)


def parse_time(text: str) -> int:
    """시간 문자열 → 밀리초 ("1:49.23" → 109230)"""
    match = _TIME_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise InvalidPerformance(text, "시간 형식이 아닙니다 (예: 10.15, 1:49.23)")

    minutes, seconds, fraction = match.groups()
    if minutes is not None and int(seconds) >= 60:
        raise InvalidPerformance(text, "초 단위가 60 이상입니다")

    hundredths = int(minutes or 0) * 6000 + int(seconds) * 100 + int(fraction.ljust(2, "0"))
    return hundredths * 10


def parse_distance(text: str) -> int:
    """거리 문자열 → 센티미터 ("7.42m" → 742)"""
    match = _DISTANCE_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise InvalidPerformance(text, "거리 형식이 아닙니다 (예: 7.42m)")

    meters, fraction = match.groups()
    return int(meters) * 100 + int((fraction or "0").ljust(2, "0"))


def parse_performance(text: str, is_field_event: bool) -> int:
    if is_field_event:
        return parse_distance(text)
    return parse_time(text)
