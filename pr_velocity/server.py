"""HTTP server exposing the velocity report.

Routes:
    GET /health
    GET /api/report?repo=owner/name&from=YYYY-MM-DD&to=YYYY-MM-DD
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict
from urllib.parse import parse_qs, urlsplit

from .config import Settings, configure_logging
from .errors import PRVelocityError
from .service import ReportRequest, ReportService


class ReportHandler(BaseHTTPRequestHandler):
    """Serve report and health requests."""

    service: ReportService

    def do_GET(self) -> None:
        url = urlsplit(self.path)
        if url.path in ('/health', '/'):
            self._send_json(200, {'status': 'ok', 'service': 'pr-velocity'})
            return
        if url.path == '/api/report':
            self._handle_report(parse_qs(url.query))
            return
        self._send_json(404, {'error': 'Not found'})

    def _handle_report(self, query: Dict[str, list]) -> None:
        def first(name: str) -> str:
            values = query.get(name)
            return values[0] if values else ''

        try:
            request = ReportRequest.parse(
                first('repo'), first('from'), first('to'),
                self.service.settings.max_range_days,
            )
            report = self.service.build_report(request)
        except PRVelocityError as e:
            logging.warning(f"Report request failed ({type(e).__name__}): {e.message}")
            self._send_json(e.http_status, {'error': e.message})
            return
        except Exception as e:
            logging.error(f"Unexpected error building report: {e}", exc_info=True)
            self._send_json(500, {'error': 'Failed to fetch report'})
            return

        self._send_json(200, report.to_dict())

    def _send_json(self, status: int, payload: Any) -> None:
        body = json.dumps(payload).encode()
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logging.debug(format, *args)


def make_server(settings: Settings, service: ReportService = None) -> ThreadingHTTPServer:
    """Create (but do not start) the HTTP server."""
    handler = type('BoundReportHandler', (ReportHandler,), {
        'service': service or ReportService(settings),
    })
    return ThreadingHTTPServer((settings.host, settings.port), handler)


def run_server(settings: Settings) -> None:
    """Serve until interrupted."""
    server = make_server(settings)
    logging.info(f"API server running on http://{settings.host}:{settings.port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logging.info("Shutting down")
    finally:
        server.server_close()


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    run_server(settings)


if __name__ == '__main__':
    main()
