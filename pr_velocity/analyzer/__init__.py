"""Pure report computation: classification and aggregation."""

from .classification import classify_pull_requests
from .core import generate_report
from .reviews import ReviewTally, rank_top_reviewers
from .statistics import format_stat, hours_between, safe_average

__all__ = [
    'classify_pull_requests',
    'generate_report',
    'ReviewTally',
    'rank_top_reviewers',
    'format_stat',
    'hours_between',
    'safe_average',
]
