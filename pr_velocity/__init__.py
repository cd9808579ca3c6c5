"""PR Velocity Report - engineering velocity metrics from GitHub pull requests."""

from .models import PullRequest, Review, Reviewer, ReviewerStats, TopReviewer, VelocityReport
from .analyzer import classify_pull_requests, generate_report, safe_average, format_stat
from .api_client import GitHubAPIClient
from .config import Settings
from .fetcher import PullRequestFetcher
from .output import ReportFormatter, render_json
from .service import ReportRequest, ReportService

__all__ = [
    'PullRequest',
    'Review',
    'Reviewer',
    'ReviewerStats',
    'TopReviewer',
    'VelocityReport',
    'classify_pull_requests',
    'generate_report',
    'safe_average',
    'format_stat',
    'GitHubAPIClient',
    'Settings',
    'PullRequestFetcher',
    'ReportFormatter',
    'render_json',
    'ReportRequest',
    'ReportService',
]
