from __future__ import annotations

from enum import Enum


class WhyCode(Enum):
    """Reason a plate appearance ended, as picked by the scorer."""

    K = "K"
    KK = "KK"
    GO = "GO"
    FO = "FO"
    LO = "LO"
    FB = "FB"
    SF = "SF"
    SB = "SB"
    SH = "SH"
    H = "H"
    HH = "HH"
    S = "S"
    HR = "HR"
    GS = "GS"
    BB = "BB"
    HBP = "HBP"
    E = "E"
    FC = "FC"
    B = "B"

    @classmethod
    def parse(cls, raw: object) -> WhyCode | None:
        """Map a raw API value to a code; blank or unknown values are undecided."""
        if raw is None:
            return None
        text = str(raw).strip().upper()
        if not text:
            return None
        text = _LEGACY_ALIASES.get(text, text)
        try:
            return cls(text)
        except ValueError:
            return None


# Older scorebook rows recorded fielder's choice as "C".
_LEGACY_ALIASES: dict[str, str] = {"C": "FC"}

STRIKEOUT_CODES: frozenset[WhyCode] = frozenset({WhyCode.K, WhyCode.KK})

OUT_CODES: frozenset[WhyCode] = frozenset(
    {
        WhyCode.K,
        WhyCode.KK,
        WhyCode.GO,
        WhyCode.FO,
        WhyCode.LO,
        WhyCode.FB,
        WhyCode.SF,
        WhyCode.SB,
        WhyCode.SH,
    }
)

# Out codes shown verbatim on the scorecard; anything else with base 0 reads "OUT".
VERBATIM_OUT_CODES: frozenset[WhyCode] = OUT_CODES - {WhyCode.SH}

REACH_FIRST_CODES: frozenset[WhyCode] = frozenset(
    {WhyCode.H, WhyCode.HH, WhyCode.S, WhyCode.BB, WhyCode.HBP, WhyCode.E, WhyCode.FC}
)

HOME_RUN_CODES: frozenset[WhyCode] = frozenset({WhyCode.HR, WhyCode.GS})

# No batted ball to locate on the field for these.
NO_HIT_LOCATION_CODES: frozenset[WhyCode] = frozenset({WhyCode.BB, WhyCode.HBP, WhyCode.K, WhyCode.KK})

# Codes that count as a quality at-bat when a row is loaded.
QUALITY_AT_BAT_CODES: frozenset[WhyCode] = frozenset({WhyCode.SF, WhyCode.SB, WhyCode.HH})


class StrikeType(Enum):
    WATCHING = "strikes_watching"
    SWINGING = "strikes_swinging"
    UNSURE = "strikes_unsure"
    BALL_SWINGING = "ball_swinging"


class Category(Enum):
    HIT = "hit"
    OUT = "out"
    WALK = "walk"
    ERROR = "error"
    BUNT = "bunt"
    OTHER = "other"


class ColorTag(Enum):
    PURPLE = "purple"
    RED = "red"
    BLACK = "black"


class StatCounter(Enum):
    WILD_PITCH = "wild_pitch"
    PASSED_BALL = "passed_ball"
    RBI = "rbi"
    LATE_SWINGS = "late_swings"


class QualityIndicator(Enum):
    QAB = "qab"
    HARD_HIT = "hard_hit"
    SLAP = "slap"
    SAC = "sac"
    BUNT = "bunt"


MAX_BALLS = 3
MAX_STRIKES = 2
HOME_PLATE = 4
ADVANCEMENT_BASES: frozenset[int] = frozenset({2, 3, 4})
FIELD_POSITIONS: frozenset[int] = frozenset(range(1, 10))
