"""Data models for pull request velocity analysis."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a GitHub ISO-8601 timestamp into a timezone-aware datetime.

    Returns None for missing, empty, or unparseable values. Naive values are
    taken to be UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _count(value: Any) -> int:
    """Line counts must be plain non-negative ints, anything else counts as 0."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


@dataclass(frozen=True)
class Reviewer:
    """Identity of a review author."""
    login: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Reviewer']:
        if not isinstance(data, dict):
            return None
        login = data.get('login')
        if not isinstance(login, str) or not login:
            return None
        avatar_url = data.get('avatar_url')
        return cls(login=login, avatar_url=avatar_url if isinstance(avatar_url, str) else None)


@dataclass(frozen=True)
class Review:
    """A single review event on a pull request."""
    state: str = ''
    submitted_at: Optional[datetime] = None
    author: Optional[Reviewer] = None

    @property
    def is_approval(self) -> bool:
        return self.state == 'APPROVED'

    @classmethod
    def from_dict(cls, data: Dict) -> 'Review':
        state = data.get('state')
        return cls(
            state=state if isinstance(state, str) else '',
            submitted_at=parse_timestamp(data.get('submitted_at')),
            author=Reviewer.from_dict(data.get('user')),
        )


@dataclass(frozen=True)
class PullRequest:
    """A pull request together with the reviews attached to it."""
    number: Optional[int] = None
    created_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None
    state: str = ''
    additions: int = 0
    deletions: int = 0
    reviews: Tuple[Review, ...] = ()
    # Set when the payload carried a merge timestamp, even one we could not parse
    merge_recorded: bool = False

    @property
    def is_merged(self) -> bool:
        return self.merged_at is not None or self.merge_recorded

    @property
    def lines_changed(self) -> int:
        return self.additions + self.deletions

    @classmethod
    def from_dict(cls, data: Dict) -> 'PullRequest':
        """Build a PullRequest from a raw GitHub API payload.

        Every field falls back to a neutral default when it is missing or has
        the wrong type, so a malformed record never raises here.
        """
        number = data.get('number')
        state = data.get('state')
        raw_merged_at = data.get('merged_at')
        raw_reviews = data.get('reviews')
        if not isinstance(raw_reviews, list):
            raw_reviews = []

        return cls(
            number=number if isinstance(number, int) and not isinstance(number, bool) else None,
            created_at=parse_timestamp(data.get('created_at')),
            merged_at=parse_timestamp(raw_merged_at),
            state=state if isinstance(state, str) else '',
            additions=_count(data.get('additions')),
            deletions=_count(data.get('deletions')),
            # Malformed entries still count as reviews, with no author or timestamp
            reviews=tuple(Review.from_dict(r) if isinstance(r, dict) else Review() for r in raw_reviews),
            merge_recorded=bool(raw_merged_at),
        )


@dataclass
class ReviewerStats:
    """Review activity of one reviewer across merged PRs."""
    total_reviews: int = 0
    approvals: int = 0
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class TopReviewer:
    """A ranked reviewer entry in a report."""
    user: str
    approvals: int
    reviews: int
    avatar_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'user': self.user,
            'approvals': self.approvals,
            'reviews': self.reviews,
            'avatar_url': self.avatar_url,
        }


@dataclass(frozen=True)
class VelocityReport:
    """Aggregate velocity metrics for one batch of pull requests."""
    total_prs: int = 0
    merged_prs: int = 0
    declined_prs: int = 0
    open_prs: int = 0
    unclassified_prs: int = 0
    avg_open_pr_age: str = '0.00'  # hours
    avg_time_to_merge: str = '0.00'  # hours
    avg_lines_changed: str = '0.00'
    avg_reviews_per_pr: str = '0.00'
    avg_time_to_first_review: str = '0.00'  # hours
    total_approvals: int = 0
    prs_with_no_reviews: int = 0
    prs_with_no_approvals: int = 0
    top_reviewers: Tuple[TopReviewer, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-compatible wire representation."""
        return {
            'totalPRs': self.total_prs,
            'mergedPRs': self.merged_prs,
            'declinedPRs': self.declined_prs,
            'openPRs': self.open_prs,
            'unclassifiedPRs': self.unclassified_prs,
            'avgOpenPrAge': self.avg_open_pr_age,
            'avgTimeToMerge': self.avg_time_to_merge,
            'avgLinesChanged': self.avg_lines_changed,
            'avgReviewsPerPR': self.avg_reviews_per_pr,
            'avgTimeToFirstReview': self.avg_time_to_first_review,
            'totalApprovals': self.total_approvals,
            'prsWithNoReviews': self.prs_with_no_reviews,
            'prsWithNoApprovals': self.prs_with_no_approvals,
            'topReviewers': [reviewer.to_dict() for reviewer in self.top_reviewers],
        }


@dataclass
class PRCategories:
    """Pull requests partitioned by outcome."""
    merged: List[PullRequest] = field(default_factory=list)
    declined: List[PullRequest] = field(default_factory=list)
    open: List[PullRequest] = field(default_factory=list)
    unclassified: int = 0
