"""Rendering of velocity reports for the console and for JSON transport."""

import json

from ..models import VelocityReport
from .console import ReportFormatter


def render_json(report: VelocityReport, indent: int = None) -> str:
    """Serialize a report to its JSON wire format."""
    return json.dumps(report.to_dict(), indent=indent)


__all__ = ['ReportFormatter', 'render_json']
