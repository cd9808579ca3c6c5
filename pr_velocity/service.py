"""Request-level orchestration: parse input, fetch, aggregate."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from .analyzer import generate_report
from .api_client import GitHubAPIClient
from .config import Settings
from .errors import InvalidRequestError
from .fetcher import PullRequestFetcher, parse_date, parse_repository, validate_date_range
from .models import VelocityReport


@dataclass(frozen=True)
class ReportRequest:
    """A validated report request."""
    owner: str
    name: str
    start: date
    end: date

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, repo: str, from_date: str, to_date: str, max_range_days: int) -> 'ReportRequest':
        """Validate raw query values.

        Raises:
            InvalidRequestError: On missing or malformed values
            DateRangeTooLargeError: If the window exceeds max_range_days
        """
        if not repo or not from_date or not to_date:
            raise InvalidRequestError("Missing required query params: repo, from, to")
        owner, name = parse_repository(repo)
        start = parse_date(from_date)
        end = parse_date(to_date)
        validate_date_range(start, end, max_range_days)
        return cls(owner=owner, name=name, start=start, end=end)


class ReportService:
    """Builds reports for requests using one settings object."""

    def __init__(self, settings: Settings, api_client: GitHubAPIClient = None):
        """Initialize the service.

        Args:
            settings: Runtime settings
            api_client: Client to reuse; a new one is built per report when None
        """
        self.settings = settings
        self.api_client = api_client

    def _client(self) -> GitHubAPIClient:
        if self.api_client is not None:
            return self.api_client
        return GitHubAPIClient(
            self.settings.github_token,
            base_url=self.settings.github_api_url,
            timeout=self.settings.request_timeout,
        )

    def build_report(self, request: ReportRequest, now: datetime = None) -> VelocityReport:
        """Fetch the PRs for a request and aggregate them.

        Args:
            request: Validated request
            now: Reference time for open PR age; current UTC time when None

        Returns:
            The computed VelocityReport
        """
        fetcher = PullRequestFetcher(
            self._client(),
            max_range_days=self.settings.max_range_days,
            max_workers=self.settings.review_fetch_workers,
        )
        pull_requests = fetcher.fetch_with_reviews(request.owner, request.name, request.start, request.end)
        report = generate_report(pull_requests, now or datetime.now(timezone.utc))
        logging.info(
            f"Report for {request.repository}: {report.total_prs} PRs, "
            f"{report.merged_prs} merged, {report.open_prs} open"
        )
        return report
