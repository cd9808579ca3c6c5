"""GitHub API client for making requests and handling pagination."""

import os
import logging
from typing import Any, Callable, Dict, List, Optional
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import (
    AuthenticationError,
    GitHubAPIError,
    GitHubConnectionError,
    RateLimitError,
    RepositoryNotFoundError,
)

DEFAULT_API_URL = 'https://api.github.com'


class GitHubAPIClient:
    """Handles GitHub API requests with retry logic and pagination."""

    def __init__(self, token: str = None, base_url: str = DEFAULT_API_URL, timeout: int = 30):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

        # Server errors are retried by the adapter; 4xx are classified below
        adapter = HTTPAdapter(
            pool_connections=10,
            pool_maxsize=10,
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        self.session.headers.update({'Accept': 'application/vnd.github+json'})

        if self.token:
            self.session.headers.update({'Authorization': f'Bearer {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")
            logging.warning("Set GITHUB_TOKEN environment variable or add it to .env.")

    def _url(self, path: str) -> str:
        if path.startswith('http://') or path.startswith('https://'):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, url: str, params: Dict = None) -> requests.Response:
        """GET a URL and raise a classified error for any failure."""
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Request to {url} failed: {e}")
            raise GitHubConnectionError(f"Failed to connect to GitHub: {e}") from e

        self._raise_for_status(response, url)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response, url: str):
        """Map an error response onto the error hierarchy.

        Args:
            response: The HTTP response
            url: Requested URL, used in messages
        """
        status = response.status_code
        if status < 400:
            return

        logging.debug(f"GitHub returned {status} for {url}")
        if status == 404:
            raise RepositoryNotFoundError(
                "Repository not found. Please check the URL or your permissions."
            )
        if status in (403, 429):
            raise RateLimitError(
                "GitHub API rate limit exceeded. Please add a GITHUB_TOKEN to .env or wait."
            )
        if status == 401:
            raise AuthenticationError("Invalid GitHub token. Please check your .env file.")
        raise GitHubAPIError(f"GitHub API request failed with status {status}", status_code=status)

    def get_json(self, path: str, params: Dict = None) -> Any:
        """Make a single GET request and decode the JSON body.

        Args:
            path: API path (e.g. ``/repos/o/r/pulls``) or absolute URL
            params: Query parameters

        Returns:
            Decoded JSON response
        """
        url = self._url(path)
        response = self._request(url, params)
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(f"Invalid JSON from {url}", status_code=response.status_code) from e

    def get_paginated(self, path: str, params: Dict = None,
                      should_continue: Optional[Callable[[List[Dict]], bool]] = None) -> List[Dict]:
        """Fetch all pages of a paginated GitHub API endpoint.

        Args:
            path: API path or absolute URL
            params: Query parameters
            should_continue: Optional callback function that takes a page of results and returns
                           False to stop pagination early, True to continue

        Returns:
            List of all items from all pages
        """
        url = self._url(path)
        results = []
        page = 1
        per_page = 100

        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            params['page'] = page
            logging.debug(f"Fetching page {page} from {url}")
            data = self.get_json(url, params)

            if not isinstance(data, list) or not data:
                break

            results.extend(data)

            # Check early termination callback
            if should_continue and not should_continue(data):
                logging.debug(f"Early termination triggered at page {page}")
                break

            # Check if there are more pages
            if len(data) < per_page:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results
