"""Threshold rule evaluation."""

import operator
from collections.abc import Sequence
from typing import Callable

import pandas as pd

from region_colorizer.domain.constants import EQUALITY_TOLERANCE
from region_colorizer.domain.entities import ThresholdRule
from region_colorizer.domain.enums import ComparisonOperator


def _approx_equal(value: float, threshold: float) -> bool:
    return abs(value - threshold) < EQUALITY_TOLERANCE


_COMPARISONS: dict[ComparisonOperator, Callable[[float, float], bool]] = {
    ComparisonOperator.EQ: _approx_equal,
    ComparisonOperator.LT: operator.lt,
    ComparisonOperator.GT: operator.gt,
    ComparisonOperator.LE: operator.le,
    ComparisonOperator.GE: operator.ge,
}


def is_missing(value: float | None) -> bool:
    """True for None, NaN and pandas NA."""
    return value is None or bool(pd.isna(value))


def evaluate_rule(value: float, rule: ThresholdRule) -> bool:
    """Test a single rule against a value."""
    comparison = _COMPARISONS.get(rule.operator)
    if comparison is None:
        return False
    return comparison(value, rule.value)


def match_rule(value: float | None, rules: Sequence[ThresholdRule]) -> ThresholdRule | None:
    """First rule satisfied by value, in sequence order."""
    if is_missing(value):
        return None
    for rule in rules:
        if evaluate_rule(value, rule):
            return rule
    return None


def resolve_color(
    value: float | None,
    rules: Sequence[ThresholdRule],
    base_color: str,
) -> str:
    """Color of the first matching rule; base color for missing values or no match."""
    rule = match_rule(value, rules)
    if rule is None:
        return base_color
    return rule.color
