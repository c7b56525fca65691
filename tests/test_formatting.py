"""
기록 표시 형식 테스트
"""

from fractions import Fraction

import pytest

from ranking.calculator import InvalidPerformance
from ranking.formatting import (
    format_time,
    format_distance,
    format_distance_imperial,
    format_performance,
    parse_time,
    parse_distance,
    parse_performance,
)


class TestFormatTime:
    """시간 형식 테스트"""

    @pytest.mark.parametrize("ms,expected", [
        (10150, "10.15"),
        (10480, "10.48"),
        (9580, "9.58"),
        (59990, "59.99"),
        (60000, "1:00.00"),
        (109230, "1:49.23"),
        (245000, "4:05.00"),
        (840000, "14:00.00"),
        (0, "0.00"),
    ])
    def test_format(self, ms, expected):
        assert format_time(ms) == expected

    def test_rounds_half_up_to_hundredths(self):
        assert format_time(10155) == "10.16"
        assert format_time(10154) == "10.15"

    def test_rounding_carries_into_minutes(self):
        assert format_time(59995) == "1:00.00"

    def test_fraction_value(self):
        assert format_time(Fraction(20301, 2)) == "10.15"
        assert format_time(Fraction(109230, 1)) == "1:49.23"

    def test_invalid(self):
        with pytest.raises(InvalidPerformance):
            format_time(-1)


class TestFormatDistance:
    """거리 형식 테스트"""

    @pytest.mark.parametrize("cm,expected", [
        (742, "7.42m"),
        (760, "7.60m"),
        (1900, "19.00m"),
        (95, "0.95m"),
        (742.5, "7.43m"),
    ])
    def test_metric(self, cm, expected):
        assert format_distance(cm) == expected

    def test_imperial(self):
        assert format_distance_imperial(742) == "24' 4.13\""
        assert format_distance_imperial(30.48) == "1' 0.00\""
        assert format_distance_imperial(Fraction(742, 1)) == "24' 4.13\""
        assert format_distance(Fraction(1485, 2)) == "7.43m"

    def test_dispatch(self):
        assert format_performance(742, True) == "7.42m"
        assert format_performance(10150, False) == "10.15"


class TestParse:
    """문자열 → 기록 변환 테스트"""

    def test_parse_time(self):
        assert parse_time("10.15") == 10150
        assert parse_time("1:49.23") == 109230
        assert parse_time(" 9.5 ") == 9500

    def test_parse_distance(self):
        assert parse_distance("7.42m") == 742
        assert parse_distance("7.4m") == 740
        assert parse_distance("19m") == 1900

    @pytest.mark.parametrize("text", ["abc", "10", "1:75.00", "", "10.123"])
    def test_parse_time_invalid(self, text):
        with pytest.raises(InvalidPerformance):
            parse_time(text)

    @pytest.mark.parametrize("text", ["7.42", "m", "-7.42m", "seven"])
    def test_parse_distance_invalid(self, text):
        with pytest.raises(InvalidPerformance):
            parse_distance(text)

    @pytest.mark.parametrize("ms", [10150, 10487, 59999, 61234, 109230, 599999])
    def test_time_round_trip_within_hundredth(self, ms):
        assert abs(parse_performance(format_time(ms), False) - ms) <= 10

    @pytest.mark.parametrize("cm", [742, 742.4, 1550, 6000.6])
    def test_distance_round_trip_within_hundredth(self, cm):
        assert abs(parse_performance(format_distance(cm), True) - cm) <= 1
