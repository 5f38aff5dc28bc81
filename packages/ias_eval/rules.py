import math
from typing import Any, List, Optional

# Sub-scores, job-fit and role-competency scores share a 0..10 scale
SUB_SCORE_MAX = 10.0


def to_number(value: Any) -> float:
    """
    Coerces an evaluator value to a finite float.
    Raises ValueError for anything that is not a number.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_score(value: Any, max_score: float) -> float:
    """Score bound to [0, max_score] whatever the evaluator returned."""
    return clamp(to_number(value), 0.0, max_score)


def clamp_sub_score(value: Any) -> float:
    """
    Sub-score bound to [0, 10]. Missing or unparseable values count as 0.
    """
    if value is None:
        return 0.0
    try:
        return clamp(to_number(value), 0.0, SUB_SCORE_MAX)
    except (TypeError, ValueError):
        return 0.0


def optional_sub_score(value: Any) -> Optional[float]:
    """Like clamp_sub_score, but absent stays absent."""
    if value is None:
        return None
    try:
        return clamp(to_number(value), 0.0, SUB_SCORE_MAX)
    except (TypeError, ValueError):
        return None


def clamp_time_spent(time_spent: float, time_limit: float) -> float:
    return clamp(time_spent, 0.0, float(time_limit))


def as_text_list(value: Any) -> List[str]:
    """Evaluator lists may arrive as a single string or contain blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(item).strip() for item in value if str(item).strip()]
