"""
Runtime configuration for the PR velocity report.

Settings come from environment variables, optionally loaded from a
``.env`` file in the working directory.
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .api_client import DEFAULT_API_URL

DEFAULT_PORT = 3001
DEFAULT_MAX_RANGE_DAYS = 180
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_REVIEW_FETCH_WORKERS = 5


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    """Read a positive integer setting, falling back to default on bad input."""
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.warning(f"Invalid {name} value '{raw}', using default: {default}")
        return default
    if value <= 0:
        logging.warning(f"{name} must be positive, got {value}; using default: {default}")
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Settings shared by the console script and the HTTP server."""
    github_token: Optional[str] = None
    github_api_url: str = DEFAULT_API_URL
    host: str = '0.0.0.0'
    port: int = DEFAULT_PORT
    max_range_days: int = DEFAULT_MAX_RANGE_DAYS
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    review_fetch_workers: int = DEFAULT_REVIEW_FETCH_WORKERS
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, env: Mapping[str, str] = None, use_dotenv: bool = True) -> 'Settings':
        """Build settings from the environment.

        Args:
            env: Mapping to read from (defaults to ``os.environ``)
            use_dotenv: Load a ``.env`` file into ``os.environ`` first

        Returns:
            Settings instance
        """
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        if env is None:
            env = os.environ

        token = (env.get('GITHUB_TOKEN') or '').strip() or None

        return cls(
            github_token=token,
            github_api_url=(env.get('GITHUB_API_URL') or DEFAULT_API_URL).strip(),
            host=(env.get('HOST') or '0.0.0.0').strip(),
            port=_int_from_env(env, 'PORT', DEFAULT_PORT),
            max_range_days=_int_from_env(env, 'MAX_RANGE_DAYS', DEFAULT_MAX_RANGE_DAYS),
            request_timeout=_int_from_env(env, 'REQUEST_TIMEOUT', DEFAULT_REQUEST_TIMEOUT),
            review_fetch_workers=_int_from_env(env, 'REVIEW_FETCH_WORKERS', DEFAULT_REVIEW_FETCH_WORKERS),
            log_level=(env.get('LOG_LEVEL') or 'INFO').strip().upper(),
        )


def configure_logging(level: str = 'INFO'):
    """Configure root logging the same way for every entry point."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )
