"""
티어 분류 테이블

종목별 기록 기준표 + 티어 메타데이터
- 트랙 종목: 밀리초(ms), 낮을수록 좋음
- 필드 종목: 센티미터(cm), 높을수록 좋음
- 도메인 데이터(기준 기록, 최소 포인트)와 표시용 데이터(이모지, 색상)는 분리
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from loguru import logger


# =====================================================
# 티어 정의
# =====================================================

class Tier(str, Enum):
    """실력 티어 (낮은 순 → 높은 순)"""
    ROOKIE = "ROOKIE"
    JV = "JV"
    VARSITY = "VARSITY"
    ELITE = "ELITE"
    ALL_STATE = "ALL_STATE"
    NATIONAL = "NATIONAL"
    WORLD_CLASS = "WORLD_CLASS"
    GODSPEED = "GODSPEED"

    @property
    def level(self) -> int:
        """실력 순서 (ROOKIE=0 ... GODSPEED=7)"""
        return TIER_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.level < other.level

    def __le__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.level <= other.level

    def __gt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.level > other.level

    def __ge__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.level >= other.level


TIER_ORDER: List[Tier] = list(Tier)

# 티어별 최소 포인트 (도메인)
TIER_MIN_POINTS: Dict[Tier, int] = {
    Tier.ROOKIE: 0,
    Tier.JV: 100,
    Tier.VARSITY: 250,
    Tier.ELITE: 500,
    Tier.ALL_STATE: 750,
    Tier.NATIONAL: 900,
    Tier.WORLD_CLASS: 975,
    Tier.GODSPEED: 995,
}

MAX_POINTS = 1000

# 티어별 표시 정보 (UI용)
TIER_STYLES: Dict[Tier, Dict[str, str]] = {
    Tier.ROOKIE: {
        "display_name": "Rookie", "emoji": "🌱", "color": "gray",
        "description": "Just getting started",
    },
    Tier.JV: {
        "display_name": "JV", "emoji": "📈", "color": "green",
        "description": "Junior Varsity level",
    },
    Tier.VARSITY: {
        "display_name": "Varsity", "emoji": "🎽", "color": "blue",
        "description": "Varsity competitor",
    },
    Tier.ELITE: {
        "display_name": "Elite", "emoji": "💎", "color": "purple",
        "description": "Top of your school",
    },
    Tier.ALL_STATE: {
        "display_name": "All-State", "emoji": "⭐", "color": "orange",
        "description": "State-level competitor",
    },
    Tier.NATIONAL: {
        "display_name": "National", "emoji": "🇺🇸", "color": "red",
        "description": "National caliber athlete",
    },
    Tier.WORLD_CLASS: {
        "display_name": "World Class", "emoji": "🌍", "color": "yellow",
        "description": "World-class performer",
    },
    Tier.GODSPEED: {
        "display_name": "GODSPEED", "emoji": "⚡", "color": "gold",
        "description": "Legendary. Untouchable. GODSPEED.",
    },
}


@dataclass(frozen=True)
class TierInfo:
    """티어 메타데이터"""
    tier: Tier
    display_name: str
    emoji: str
    color: str
    description: str
    min_points: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "tier": self.tier.value,
            "display_name": self.display_name,
            "emoji": self.emoji,
            "color": self.color,
            "description": self.description,
            "min_points": self.min_points,
        }


def metadata_for(tier: Tier) -> TierInfo:
    """티어 메타데이터 반환 (모든 티어에 대해 항상 성공)"""
    tier = Tier(tier)
    style = TIER_STYLES[tier]
    return TierInfo(
        tier=tier,
        display_name=style["display_name"],
        emoji=style["emoji"],
        color=style["color"],
        description=style["description"],
        min_points=TIER_MIN_POINTS[tier],
    )


# =====================================================
# 종목 정의
# =====================================================

@dataclass(frozen=True)
class EventDefinition:
    """종목 정보"""
    short_name: str
    name: str
    category: str
    unit: str  # TIME / DISTANCE / HEIGHT
    is_field_event: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "short_name": self.short_name,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "is_field_event": self.is_field_event,
        }


EVENTS: Dict[str, EventDefinition] = {
    "100m": EventDefinition("100m", "100 Meters", "SPRINT", "TIME", False),
    "200m": EventDefinition("200m", "200 Meters", "SPRINT", "TIME", False),
    "400m": EventDefinition("400m", "400 Meters", "SPRINT", "TIME", False),
    "800m": EventDefinition("800m", "800 Meters", "DISTANCE", "TIME", False),
    "1600m": EventDefinition("1600m", "1600 Meters", "DISTANCE", "TIME", False),
    "3200m": EventDefinition("3200m", "3200 Meters", "DISTANCE", "TIME", False),
    "110H": EventDefinition("110H", "110m Hurdles", "HURDLES", "TIME", False),
    "300H": EventDefinition("300H", "300m Hurdles", "HURDLES", "TIME", False),
    "HJ": EventDefinition("HJ", "High Jump", "JUMPS", "HEIGHT", True),
    "LJ": EventDefinition("LJ", "Long Jump", "JUMPS", "DISTANCE", True),
    "TJ": EventDefinition("TJ", "Triple Jump", "JUMPS", "DISTANCE", True),
    "PV": EventDefinition("PV", "Pole Vault", "JUMPS", "HEIGHT", True),
    "SP": EventDefinition("SP", "Shot Put", "THROWS", "DISTANCE", True),
    "DT": EventDefinition("DT", "Discus", "THROWS", "DISTANCE", True),
}

# 별칭 → 표준 종목명 (소문자 비교)
EVENT_ALIASES: Dict[str, str] = {
    "100 meters": "100m",
    "200 meters": "200m",
    "400 meters": "400m",
    "800 meters": "800m",
    "1600 meters": "1600m",
    "3200 meters": "3200m",
    "110 hurdles": "110H",
    "110m hurdles": "110H",
    "300 hurdles": "300H",
    "300m hurdles": "300H",
    "high jump": "HJ",
    "long jump": "LJ",
    "triple jump": "TJ",
    "pole vault": "PV",
    "shot put": "SP",
    "discus": "DT",
    "discus throw": "DT",
}

DEFAULT_TIMED_EVENT = "100m"
DEFAULT_FIELD_EVENT = "LJ"

# 종목별 티어 기준 기록 (JV → GODSPEED 순)
# ROOKIE는 하한 티어로 기준 기록 없음
_THRESHOLD_TIERS = TIER_ORDER[1:]

_RAW_THRESHOLDS: Dict[str, Tuple[float, ...]] = {
    # 트랙 (ms)
    "100m": (12500, 12000, 11500, 11200, 10800, 10500, 10200),
    "200m": (25500, 24500, 23500, 22800, 22000, 21200, 20500),
    "400m": (58000, 55000, 53000, 51000, 49000, 47500, 46000),
    "800m": (150000, 140000, 132000, 125000, 118000, 112000, 108000),        # 2:30 ~ 1:48
    "1600m": (360000, 330000, 305000, 285000, 268000, 255000, 245000),       # 6:00 ~ 4:05
    "3200m": (840000, 750000, 690000, 640000, 600000, 570000, 540000),       # 14:00 ~ 9:00
    "110H": (18500, 17000, 16000, 15200, 14500, 14000, 13500),
    "300H": (51000, 47000, 44000, 42000, 40000, 38500, 37000),
    # 필드 (cm)
    "HJ": (160, 170, 180, 190, 200, 210, 220),
    "LJ": (500, 560, 600, 640, 680, 720, 760),
    "TJ": (1050, 1160, 1240, 1320, 1400, 1480, 1550),
    "PV": (300, 360, 400, 430, 460, 490, 520),
    "SP": (1000, 1150, 1300, 1450, 1600, 1750, 1900),
    "DT": (3000, 3500, 4000, 4500, 5000, 5500, 6000),
}


def _build_threshold_table() -> Dict[str, Tuple[Tuple[Tier, float], ...]]:
    """기준표 구성 + 단조성 검증"""
    table = {}
    for short_name, values in _RAW_THRESHOLDS.items():
        is_field = EVENTS[short_name].is_field_event
        if len(values) != len(_THRESHOLD_TIERS):
            raise ValueError(f"{short_name}: 기준 기록 개수 오류 ({len(values)})")

        for lower, higher in zip(values, values[1:]):
            improving = higher > lower if is_field else higher < lower
            if not improving:
                raise ValueError(f"{short_name}: 기준 기록이 단조롭지 않음 ({lower} → {higher})")

        floor = 0.0 if is_field else math.inf
        table[short_name] = ((Tier.ROOKIE, floor),) + tuple(zip(_THRESHOLD_TIERS, values))
    return table


TIER_THRESHOLDS = _build_threshold_table()


# =====================================================
# 조회 함수
# =====================================================

@dataclass(frozen=True)
class ThresholdLookup:
    """기준표 조회 결과"""
    requested: str
    event: str
    is_field_event: bool
    unit: str
    thresholds: Tuple[Tuple[Tier, float], ...]
    used_fallback: bool = False
    overrode_kind: bool = False  # 요청한 is_field_event가 기준표 구분과 달라 무시됨

    def threshold_of(self, tier: Tier) -> float:
        for t, value in self.thresholds:
            if t == tier:
                return value
        raise KeyError(tier)


def resolve_event(event: Optional[str]) -> Optional[str]:
    """종목명/별칭을 표준 종목명으로 변환 (모르는 종목이면 None)"""
    if not event:
        return None
    name = event.strip()
    if name in EVENTS:
        return name

    lowered = name.lower()
    for short_name in EVENTS:
        if short_name.lower() == lowered:
            return short_name
    return EVENT_ALIASES.get(lowered)


def is_field_event(event: str) -> Optional[bool]:
    """필드 종목 여부 (모르는 종목이면 None)"""
    short_name = resolve_event(event)
    if short_name is None:
        return None
    return EVENTS[short_name].is_field_event


def thresholds_for(event: str, is_field_event: Optional[bool] = None) -> ThresholdLookup:
    """
    종목 기준표 조회

    모르는 종목은 실패하지 않고 기본 종목으로 대체된다.
    - is_field_event=True  → 멀리뛰기(LJ)
    - 그 외                → 100m

    알려진 종목은 기준표의 종목 구분이 우선한다 (기준 기록의 방향이 고정이므로).
    """
    short_name = resolve_event(event)
    used_fallback = short_name is None

    if used_fallback:
        short_name = DEFAULT_FIELD_EVENT if is_field_event else DEFAULT_TIMED_EVENT
        logger.warning(f"알 수 없는 종목 '{event}' → 기본 종목 {short_name} 기준 적용")

    definition = EVENTS[short_name]
    overrode_kind = is_field_event is not None and is_field_event != definition.is_field_event
    if overrode_kind:
        logger.warning(
            f"{short_name}: 종목 구분 불일치 (요청 is_field_event={is_field_event}) → 기준표 구분 사용"
        )

    return ThresholdLookup(
        requested=event,
        event=short_name,
        is_field_event=definition.is_field_event,
        unit=definition.unit,
        thresholds=TIER_THRESHOLDS[short_name],
        used_fallback=used_fallback,
        overrode_kind=overrode_kind,
    )


def list_events() -> List[EventDefinition]:
    """전체 종목 목록"""
    return list(EVENTS.values())
