"""Review processing for merged pull requests."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..models import PullRequest, ReviewerStats, TopReviewer
from .statistics import hours_between

TOP_REVIEWER_LIMIT = 5


@dataclass
class ReviewTally:
    """Running review totals for one report. Built fresh per call."""
    total_reviews: int = 0
    total_approvals: int = 0
    prs_with_no_reviews: int = 0
    prs_with_no_approvals: int = 0
    time_to_first_review: List[float] = field(default_factory=list)
    # Insertion order doubles as first-seen order for ranking ties
    reviewer_stats: Dict[str, ReviewerStats] = field(default_factory=lambda: defaultdict(ReviewerStats))

    def add_pull_request(self, pr: PullRequest):
        """Fold the reviews of one merged PR into the tally.

        Args:
            pr: A merged pull request
        """
        reviews = pr.reviews
        self.total_reviews += len(reviews)

        if not reviews:
            self.prs_with_no_reviews += 1
            self.prs_with_no_approvals += 1
            return

        if not any(review.is_approval for review in reviews):
            self.prs_with_no_approvals += 1

        submitted = [review.submitted_at for review in reviews if review.submitted_at is not None]
        if submitted and pr.created_at is not None:
            self.time_to_first_review.append(hours_between(pr.created_at, min(submitted)))

        for review in reviews:
            if review.author is None:
                continue
            stats = self.reviewer_stats[review.author.login]
            stats.total_reviews += 1
            if stats.avatar_url is None:
                stats.avatar_url = review.author.avatar_url
            if review.is_approval:
                stats.approvals += 1
                self.total_approvals += 1


def rank_top_reviewers(reviewer_stats: Dict[str, ReviewerStats],
                       limit: int = TOP_REVIEWER_LIMIT) -> Tuple[TopReviewer, ...]:
    """Return the reviewers with the most approvals, ties kept in first-seen order.

    Args:
        reviewer_stats: Login -> stats, in first-seen order
        limit: Maximum number of entries

    Returns:
        Tuple of at most ``limit`` TopReviewer entries
    """
    ranked = sorted(reviewer_stats.items(), key=lambda item: item[1].approvals, reverse=True)
    return tuple(
        TopReviewer(
            user=login,
            approvals=stats.approvals,
            reviews=stats.total_reviews,
            avatar_url=stats.avatar_url,
        )
        for login, stats in ranked[:limit]
    )
