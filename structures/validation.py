"""Input checks shared by the structure engines."""

import math
from typing import Any

from steps import Message, StepGenerator


def is_number(value: Any) -> bool:
    """True for finite ints/floats.  bool is rejected even though it subclasses int."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def reject_value(value: Any) -> StepGenerator:
    """Single diagnostic step for a non-numeric operand; no structural change."""
    yield Message(message=f"Invalid value {value!r}: a number is required.", code_line=0)
    return None
