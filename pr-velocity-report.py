#!/usr/bin/env python3
"""
PR Velocity Report
Computes merge, review and participation metrics for a GitHub repository.

Usage:
    pr-velocity-report.py          # one report, printed to the console
    pr-velocity-report.py serve    # start the HTTP API
"""

import os
import sys
import logging
from dotenv import load_dotenv

from pr_velocity.config import Settings, configure_logging
from pr_velocity.errors import PRVelocityError
from pr_velocity.output import ReportFormatter, render_json
from pr_velocity.server import run_server
from pr_velocity.service import ReportRequest, ReportService


def _value_or_prompt(env_name: str, prompt: str) -> str:
    value = os.environ.get(env_name, '').strip()
    if value:
        logging.info(f"Using {env_name} from environment: {value}")
        return value
    return input(prompt).strip()


def main():
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()
    settings = Settings.from_env(use_dotenv=False)
    configure_logging(settings.log_level)

    if len(sys.argv) > 1 and sys.argv[1] == 'serve':
        run_server(settings)
        return

    print("PR Velocity Report")
    print("="*80)

    repo = _value_or_prompt('GITHUB_REPO', "\nRepository (owner/repo or GitHub URL): ")
    from_date = _value_or_prompt('REPORT_FROM', "From date (YYYY-MM-DD): ")
    to_date = _value_or_prompt('REPORT_TO', "To date (YYYY-MM-DD): ")

    try:
        request = ReportRequest.parse(repo, from_date, to_date, settings.max_range_days)
        report = ReportService(settings).build_report(request)
    except PRVelocityError as e:
        logging.error(e.message)
        sys.exit(1)

    if os.environ.get('OUTPUT_FORMAT', 'console').strip().lower() == 'json':
        print(render_json(report, indent=2))
    else:
        ReportFormatter(use_color=sys.stdout.isatty()).print_summary(
            report, request.repository, request.start, request.end
        )


if __name__ == "__main__":
    main()
