"""Console output for velocity reports."""

from datetime import date

from ..models import VelocityReport


# ANSI color codes
GREEN = '\033[92m'
YELLOW = '\033[93m'
RED = '\033[91m'
CYAN = '\033[96m'
BOLD = '\033[1m'
RESET = '\033[0m'


class ReportFormatter:
    """Formats and prints a velocity report."""

    def __init__(self, use_color: bool = True):
        """Initialize the formatter.

        Args:
            use_color: Whether to emit ANSI color codes
        """
        self.use_color = use_color

    def _c(self, color: str, text: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{RESET}"

    def print_summary(self, report: VelocityReport, repository: str = None,
                      start: date = None, end: date = None):
        """Print a summary of the report.

        Args:
            report: The computed report
            repository: ``owner/name`` shown in the header
            start: First day of the window
            end: Last day of the window
        """
        print("\n" + "="*80)
        header = "PR VELOCITY REPORT"
        if repository:
            header += f" FOR {repository}"
        print(self._c(BOLD, header))
        if start and end:
            print(f"Window: {start:%Y-%m-%d} to {end:%Y-%m-%d}")
        print("="*80)

        if report.total_prs == 0:
            print("\nNo pull requests found in this window.")
            return

        self._print_counts(report)
        self._print_timings(report)
        self._print_reviews(report)
        self._print_top_reviewers(report)

    def _print_counts(self, report: VelocityReport):
        print(f"\n{'Pull requests':<30} {report.total_prs}")
        print(f"{'  merged':<30} {self._c(GREEN, str(report.merged_prs))}")
        print(f"{'  declined':<30} {self._c(RED, str(report.declined_prs))}")
        print(f"{'  open':<30} {self._c(YELLOW, str(report.open_prs))}")
        if report.unclassified_prs:
            print(f"{'  unclassified':<30} {report.unclassified_prs}")

    def _print_timings(self, report: VelocityReport):
        print(f"\n{'Metric':<30} {'Value':<20}")
        print(f"{'-'*50}")
        print(f"{'Avg time to merge (h)':<30} {report.avg_time_to_merge:<20}")
        print(f"{'Avg time to first review (h)':<30} {report.avg_time_to_first_review:<20}")
        print(f"{'Avg open PR age (h)':<30} {report.avg_open_pr_age:<20}")
        print(f"{'Avg lines changed':<30} {report.avg_lines_changed:<20}")
        print(f"{'Avg reviews per merged PR':<30} {report.avg_reviews_per_pr:<20}")

    def _print_reviews(self, report: VelocityReport):
        print(f"\nTotal approvals: {report.total_approvals}")
        no_reviews = str(report.prs_with_no_reviews)
        no_approvals = str(report.prs_with_no_approvals)
        print(f"Merged PRs without reviews: {self._c(RED, no_reviews) if report.prs_with_no_reviews else no_reviews}")
        print(f"Merged PRs without approvals: {self._c(RED, no_approvals) if report.prs_with_no_approvals else no_approvals}")

    def _print_top_reviewers(self, report: VelocityReport):
        print(f"\n{'='*80}")
        print("TOP REVIEWERS")
        print(f"{'='*80}")

        if not report.top_reviewers:
            print("\nNo reviews on merged PRs.")
            return

        print(f"\n{'#':<4} {'User':<30} {'Approvals':<12} {'Reviews':<12}")
        print(f"{'-'*58}")
        for rank, reviewer in enumerate(report.top_reviewers, start=1):
            print(f"{rank:<4} {self._c(CYAN, f'{reviewer.user:<30}')} {reviewer.approvals:<12} {reviewer.reviews:<12}")
