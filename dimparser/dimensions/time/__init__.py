"""
Time expressions: "tomorrow at 3pm", "last Monday of March", "in 2 days",
"from 3 to 5pm", "3pm CET".

Resolution lives in :mod:`dimparser.dimensions.time.resolve`.
"""

from .data import TimeData, is_valid_date
from .rules_en import rules

__all__ = ["TimeData", "is_valid_date", "rules"]
