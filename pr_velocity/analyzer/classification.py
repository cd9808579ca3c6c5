"""Partitioning of pull requests into merged, declined and open groups."""

import logging
from typing import Any

from ..models import PRCategories, PullRequest


def classify_pull_requests(pull_requests: Any) -> PRCategories:
    """Split pull requests into merged, declined and open groups.

    Rules are checked in order: a merge timestamp means merged regardless of
    state, otherwise ``closed`` means declined and ``open`` means open.
    Records matching none of the rules are left out of every group and only
    counted in ``unclassified``. Input order is preserved within each group.

    Args:
        pull_requests: List of PullRequest objects or raw API dicts

    Returns:
        PRCategories; all groups are empty if the input is not a list
    """
    categories = PRCategories()

    if not isinstance(pull_requests, (list, tuple)):
        return categories

    for item in pull_requests:
        if isinstance(item, dict):
            pr = PullRequest.from_dict(item)
        elif isinstance(item, PullRequest):
            pr = item
        else:
            categories.unclassified += 1
            continue

        if pr.is_merged:
            categories.merged.append(pr)
        elif pr.state == 'closed':
            categories.declined.append(pr)
        elif pr.state == 'open':
            categories.open.append(pr)
        else:
            logging.debug(f"Dropping PR #{pr.number} with unexpected state '{pr.state}'")
            categories.unclassified += 1

    return categories
