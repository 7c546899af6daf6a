"""
Statistics pipeline: period resolution, local aggregation and response
formatting. Every function here is pure given its inputs.
"""

from .formatter import format_response
from .local_aggregation import aggregate_locally, calculate_change
from .periods import current_period_start, date_range, previous_date_range

__all__ = [
    "aggregate_locally",
    "calculate_change",
    "current_period_start",
    "date_range",
    "format_response",
    "previous_date_range",
]
