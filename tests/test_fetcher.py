"""
Unit tests for pull request retrieval
"""

import pytest
from datetime import date
from unittest.mock import Mock

from pr_velocity.api_client import GitHubAPIClient
from pr_velocity.errors import (
    DateRangeTooLargeError, GitHubConnectionError, InvalidRequestError, RepositoryNotFoundError
)
from pr_velocity.fetcher import (
    PullRequestFetcher, parse_date, parse_repository, validate_date_range, window_bounds
)

START = date(2024, 3, 1)
END = date(2024, 3, 31)


class TestParseRepository:
    """Test cases for repository references."""

    @pytest.mark.parametrize('value', [
        'octo/widgets',
        'https://github.com/octo/widgets',
        'https://github.com/octo/widgets/',
        'https://github.com/octo/widgets.git',
        '  octo/widgets  ',
    ])
    def test_valid_references(self, value):
        assert parse_repository(value) == ('octo', 'widgets')

    @pytest.mark.parametrize('value', ['', None, 'widgets', 'a/b/c', 'https://gitlab.com/a/b'])
    def test_invalid_references(self, value):
        with pytest.raises(InvalidRequestError):
            parse_repository(value)


class TestDates:
    """Test cases for date parsing and range validation."""

    def test_parse_date(self):
        assert parse_date('2024-03-01') == START

    @pytest.mark.parametrize('value', ['', None, '03/01/2024', '2024-13-01', 'yesterday'])
    def test_parse_invalid_date(self, value):
        with pytest.raises(InvalidRequestError):
            parse_date(value)

    def test_range_within_limit(self):
        validate_date_range(START, END, max_days=180)

    def test_range_at_limit(self):
        validate_date_range(date(2024, 1, 1), date(2024, 1, 11), max_days=10)

    def test_range_too_large(self):
        with pytest.raises(DateRangeTooLargeError):
            validate_date_range(date(2024, 1, 1), date(2024, 12, 31), max_days=180)

    def test_reversed_range(self):
        with pytest.raises(InvalidRequestError):
            validate_date_range(END, START)

    def test_range_too_large_is_invalid_request(self):
        assert issubclass(DateRangeTooLargeError, InvalidRequestError)

    def test_window_bounds_cover_whole_days(self):
        window_start, window_end = window_bounds(START, END)
        assert window_start.isoformat() == '2024-03-01T00:00:00+00:00'
        assert window_end.isoformat() == '2024-03-31T23:59:59.999999+00:00'


class TestFetchPullRequests:
    """Test cases for window filtering."""

    @pytest.fixture
    def api_client(self):
        return Mock()

    @pytest.fixture
    def fetcher(self, api_client):
        return PullRequestFetcher(api_client, max_range_days=180, max_workers=2)

    def test_filters_by_window(self, fetcher, api_client):
        api_client.get_paginated.return_value = [
            {'number': 1, 'state': 'closed', 'created_at': '2024-02-01T00:00:00Z',
             'merged_at': '2024-03-10T00:00:00Z'},
            {'number': 2, 'state': 'closed', 'created_at': '2024-02-01T00:00:00Z',
             'merged_at': '2024-02-10T00:00:00Z'},
            {'number': 3, 'state': 'open', 'created_at': '2024-03-05T00:00:00Z', 'merged_at': None},
            {'number': 4, 'state': 'open', 'created_at': '2024-02-05T00:00:00Z', 'merged_at': None},
            {'number': 5, 'state': 'closed', 'created_at': '2024-03-05T00:00:00Z', 'merged_at': None},
            {'number': 6, 'state': 'closed', 'created_at': '2024-03-05T00:00:00Z',
             'merged_at': '2024-03-31T23:30:00Z'},
        ]

        prs = fetcher.fetch_pull_requests('octo', 'widgets', START, END)

        assert [pr['number'] for pr in prs] == [1, 3, 6]
        args, kwargs = api_client.get_paginated.call_args
        assert args[0] == '/repos/octo/widgets/pulls'
        assert args[1] == {'state': 'all', 'sort': 'updated', 'direction': 'desc'}

    def test_validates_range_before_fetching(self, fetcher, api_client):
        with pytest.raises(DateRangeTooLargeError):
            fetcher.fetch_pull_requests('octo', 'widgets', date(2023, 1, 1), date(2024, 1, 1))
        assert not api_client.get_paginated.called

    def test_pagination_stops_before_window(self, fetcher, api_client):
        api_client.get_paginated.return_value = []
        fetcher.fetch_pull_requests('octo', 'widgets', START, END)
        should_continue = api_client.get_paginated.call_args[1]['should_continue']

        assert should_continue([{'updated_at': '2024-03-15T00:00:00Z'}])
        assert not should_continue([{'updated_at': '2024-02-15T00:00:00Z'}])

    def test_propagates_classified_errors(self, fetcher, api_client):
        api_client.get_paginated.side_effect = RepositoryNotFoundError("missing")
        with pytest.raises(RepositoryNotFoundError):
            fetcher.fetch_pull_requests('octo', 'widgets', START, END)


class TestFetchReviews:
    """Test cases for review attachment."""

    @pytest.fixture
    def api_client(self):
        return Mock()

    @pytest.fixture
    def fetcher(self, api_client):
        return PullRequestFetcher(api_client, max_workers=3)

    def test_invalid_json_reviews_yield_empty_list(self, caplog):
        """Test that a non-JSON reviews body does not fail the report."""
        client = GitHubAPIClient(token='test_token')
        response = Mock()
        response.status_code = 200
        response.json.side_effect = ValueError('Expecting value')
        client.session = Mock()
        client.session.get.return_value = response

        assert PullRequestFetcher(client).fetch_reviews('octo', 'widgets', 1) == []
        assert 'Failed to fetch reviews for PR #1' in caplog.text

    def test_review_failure_yields_empty_list(self, fetcher, api_client, caplog):
        api_client.get_paginated.side_effect = GitHubConnectionError("down")
        assert fetcher.fetch_reviews('octo', 'widgets', 7) == []
        assert 'Failed to fetch reviews for PR #7' in caplog.text

    def test_fetch_with_reviews_preserves_order(self, fetcher, api_client):
        prs = [
            {'number': n, 'state': 'open', 'created_at': '2024-03-05T00:00:00Z'}
            for n in (3, 1, 2)
        ]

        def get_paginated(path, params=None, should_continue=None):
            if path.endswith('/reviews'):
                number = int(path.split('/')[-2])
                return [{'id': number * 10}]
            return prs

        api_client.get_paginated.side_effect = get_paginated

        enriched = fetcher.fetch_with_reviews('octo', 'widgets', START, END)

        assert [pr['number'] for pr in enriched] == [3, 1, 2]
        assert [pr['reviews'] for pr in enriched] == [[{'id': 30}], [{'id': 10}], [{'id': 20}]]
        assert 'reviews' not in prs[0]

    def test_fetch_with_reviews_empty(self, fetcher, api_client):
        api_client.get_paginated.return_value = []
        assert fetcher.fetch_with_reviews('octo', 'widgets', START, END) == []
