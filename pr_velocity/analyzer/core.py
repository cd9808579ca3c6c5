"""Velocity report aggregation."""

import logging
from datetime import datetime, timezone
from typing import Any

from ..models import VelocityReport
from .classification import classify_pull_requests
from .reviews import ReviewTally, rank_top_reviewers
from .statistics import format_stat, hours_between, safe_average


def generate_report(pull_requests: Any, now: datetime) -> VelocityReport:
    """Compute velocity metrics for a batch of pull requests.

    Args:
        pull_requests: List of PullRequest objects or raw API dicts with a
            ``reviews`` list attached
        now: Reference time for open PR age; naive values are taken as UTC

    Returns:
        VelocityReport; an all-zero report for None, empty or non-list input
    """
    if not isinstance(pull_requests, (list, tuple)) or not pull_requests:
        return VelocityReport()

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    categories = classify_pull_requests(pull_requests)
    merged = categories.merged
    total_prs = len(pull_requests)

    logging.debug(
        f"Classified {total_prs} PRs: {len(merged)} merged, {len(categories.declined)} declined, "
        f"{len(categories.open)} open, {categories.unclassified} unclassified"
    )

    open_pr_ages = [hours_between(pr.created_at, now) for pr in categories.open if pr.created_at is not None]

    merge_times = [
        hours_between(pr.created_at, pr.merged_at)
        for pr in merged
        if pr.created_at is not None and pr.merged_at is not None
    ]
    lines_changed = [pr.lines_changed for pr in merged]

    tally = ReviewTally()
    for pr in merged:
        tally.add_pull_request(pr)

    avg_reviews_per_pr = tally.total_reviews / len(merged) if merged else 0

    return VelocityReport(
        total_prs=total_prs,
        merged_prs=len(merged),
        declined_prs=len(categories.declined),
        open_prs=len(categories.open),
        unclassified_prs=categories.unclassified,
        avg_open_pr_age=format_stat(safe_average(open_pr_ages)),
        avg_time_to_merge=format_stat(safe_average(merge_times)),
        avg_lines_changed=format_stat(safe_average(lines_changed)),
        avg_reviews_per_pr=format_stat(avg_reviews_per_pr),
        avg_time_to_first_review=format_stat(safe_average(tally.time_to_first_review)),
        total_approvals=tally.total_approvals,
        prs_with_no_reviews=tally.prs_with_no_reviews,
        prs_with_no_approvals=tally.prs_with_no_approvals,
        top_reviewers=rank_top_reviewers(tally.reviewer_stats),
    )
