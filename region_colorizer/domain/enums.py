"""Domain enums for rule operators, result statuses and modes."""

from enum import Enum


class ComparisonOperator(str, Enum):
    """Threshold rule comparison operator."""

    EQ = "="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="

    @classmethod
    def _missing_(cls, value: object) -> "ComparisonOperator | None":
        if not isinstance(value, str):
            return None
        symbol = value.strip()
        aliases = {"==": cls.EQ, "≤": cls.LE, "≥": cls.GE}
        if symbol in aliases:
            return aliases[symbol]
        for member in cls:
            if member.value == symbol:
                return member
        return None


class ResultStatus(str, Enum):
    """Outcome of a polygon pipeline run."""

    MATCHED = "matched"
    NO_RULE_MATCH = "no_rule_match"
    NO_DATA = "no_data"
    SOURCE_DISABLED = "source_disabled"
    ERROR = "error"


class SeriesMode(str, Enum):
    """Which path the series provider takes."""

    SIMULATION = "simulation"
    LIVE = "live"


class TimelineMode(str, Enum):
    """Timeline handle mode."""

    SINGLE = "single"
    RANGE = "range"
