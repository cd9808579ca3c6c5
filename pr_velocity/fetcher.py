"""Retrieval of pull requests and their reviews for a report window."""

import re
import logging
from datetime import date, datetime, time, timezone
from typing import Dict, List, Tuple
from concurrent.futures import ThreadPoolExecutor

from .api_client import GitHubAPIClient
from .config import DEFAULT_MAX_RANGE_DAYS, DEFAULT_REVIEW_FETCH_WORKERS
from .errors import DateRangeTooLargeError, GitHubError, InvalidRequestError
from .models import parse_timestamp

_REPO_PATTERN = re.compile(
    r'^(?:https?://(?:www\.)?github\.com/)?(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?/?$'
)


def parse_repository(value: str) -> Tuple[str, str]:
    """Split ``owner/name`` or a github.com URL into owner and name.

    Raises:
        InvalidRequestError: If the value is not a repository reference
    """
    match = _REPO_PATTERN.match((value or '').strip())
    if not match:
        raise InvalidRequestError(f"Invalid repository '{value}'. Use owner/name or a GitHub URL.")
    return match.group('owner'), match.group('name')


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` date.

    Raises:
        InvalidRequestError: If the value is not a valid date
    """
    try:
        return datetime.strptime((value or '').strip(), '%Y-%m-%d').date()
    except ValueError:
        raise InvalidRequestError("Invalid date format. Use YYYY-MM-DD") from None


def validate_date_range(start: date, end: date, max_days: int = DEFAULT_MAX_RANGE_DAYS):
    """Reject reversed windows and windows longer than max_days."""
    if end < start:
        raise InvalidRequestError("Invalid date range: 'from' must not be after 'to'.")
    span = (end - start).days
    if span > max_days:
        raise DateRangeTooLargeError(
            f"Date range too large ({span} days). Maximum allowed is {max_days} days."
        )


def window_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """Inclusive UTC bounds covering whole days from start to end."""
    return (
        datetime.combine(start, time.min, tzinfo=timezone.utc),
        datetime.combine(end, time.max, tzinfo=timezone.utc),
    )


class PullRequestFetcher:
    """Fetches the pull requests relevant to a window, with reviews attached."""

    def __init__(self, api_client: GitHubAPIClient,
                 max_range_days: int = DEFAULT_MAX_RANGE_DAYS,
                 max_workers: int = DEFAULT_REVIEW_FETCH_WORKERS):
        """Initialize the fetcher.

        Args:
            api_client: Client used for every request
            max_range_days: Longest window accepted
            max_workers: Thread pool size for review requests
        """
        self.api_client = api_client
        self.max_range_days = max_range_days
        self.max_workers = max_workers

    def fetch_pull_requests(self, owner: str, repo: str, start: date, end: date) -> List[Dict]:
        """Fetch PRs merged in the window, or still open and created in it.

        Args:
            owner: Repository owner
            repo: Repository name
            start: First day of the window
            end: Last day of the window (inclusive)

        Returns:
            Raw PR dicts in API order
        """
        logging.info(f"Fetching PRs for {owner}/{repo} from {start:%Y-%m-%d} to {end:%Y-%m-%d}")
        validate_date_range(start, end, self.max_range_days)
        window_start, window_end = window_bounds(start, end)

        def updated_since_start(page: List[Dict]) -> bool:
            # Results are sorted by updated_at desc; merged_at and created_at
            # never exceed updated_at, so older pages cannot match
            updated_at = parse_timestamp(page[-1].get('updated_at'))
            return updated_at is None or updated_at >= window_start

        all_prs = self.api_client.get_paginated(
            f"/repos/{owner}/{repo}/pulls",
            {'state': 'all', 'sort': 'updated', 'direction': 'desc'},
            should_continue=updated_since_start,
        )

        relevant_prs = []
        for pr in all_prs:
            merged_at = parse_timestamp(pr.get('merged_at'))
            created_at = parse_timestamp(pr.get('created_at'))

            merged_in_range = merged_at is not None and window_start <= merged_at <= window_end
            open_in_range = (pr.get('state') == 'open' and created_at is not None
                             and window_start <= created_at <= window_end)

            if merged_in_range or open_in_range:
                relevant_prs.append(pr)
            else:
                logging.debug(f"Skipping PR #{pr.get('number')} outside the report window")

        logging.info(f"Found {len(relevant_prs)} relevant PRs (merged or open) out of {len(all_prs)} fetched")
        return relevant_prs

    def fetch_reviews(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """Fetch the reviews of one PR; failures yield an empty list."""
        try:
            return self.api_client.get_paginated(f"/repos/{owner}/{repo}/pulls/{pr_number}/reviews")
        except GitHubError as e:
            logging.error(f"Failed to fetch reviews for PR #{pr_number}: {e}")
            return []

    def fetch_with_reviews(self, owner: str, repo: str, start: date, end: date) -> List[Dict]:
        """Fetch relevant PRs and attach a ``reviews`` list to each.

        Returns:
            New PR dicts in the same order as fetch_pull_requests
        """
        prs = self.fetch_pull_requests(owner, repo, start, end)
        if not prs:
            return []

        max_workers = min(self.max_workers, len(prs))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            reviews_per_pr = list(executor.map(
                lambda pr: self.fetch_reviews(owner, repo, pr['number']),
                prs
            ))

        return [{**pr, 'reviews': reviews} for pr, reviews in zip(prs, reviews_per_pr)]
