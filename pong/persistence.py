"""Client for the match-history service.

Finished matches are reported best effort: a failed report is logged and
dropped, it never blocks or reverses the end-of-match screen.
"""

import logging
import threading
import urllib.parse
from dataclasses import dataclass

import requests

from pong import field

logger = logging.getLogger(__name__)


class ReportError(Exception):
    def __init__(self, message, status=None):
        super(ReportError, self).__init__(message)
        self.message = message
        self.status = status


@dataclass
class MatchReport:
    """Final score of one match, from the local (left) player's point of view."""
    user_score: int
    opponent_score: int
    opponent_label: str

    @property
    def against_ai(self) -> bool:
        return self.opponent_label == field.AI_LABEL

    def to_payload(self) -> dict:
        return {
            "user_score": self.user_score,
            "opponent_score": self.opponent_score,
            "opponent_label": self.opponent_label,
        }


class MatchReporter:
    """Anything that can record a finished match."""

    def record_match(self, report: MatchReport) -> None:
        raise NotImplementedError


class MemoryReporter(MatchReporter):
    """Keeps reports in memory (offline play, tests)."""

    def __init__(self):
        self.reports: list[MatchReport] = []

    def record_match(self, report: MatchReport) -> None:
        self.reports.append(report)


class HttpMatchReporter(MatchReporter):
    """Posts match results to the game service's /api/matches routes."""

    def __init__(self, url, token=None, timeout=10.0):
        self.url = url
        self.token = token
        self.timeout = timeout

    def _request(self, report: MatchReport):
        """Endpoint path and JSON body for `report`.

        Matches against the AI and against local aliases use different routes;
        the service derives the AI alias itself.
        """
        body = report.to_payload()
        label = body.pop("opponent_label")
        if report.against_ai:
            return "/api/matches/ai", body
        body["opponent_alias"] = label
        return "/api/matches", body

    def record_match(self, report: MatchReport) -> None:
        if not self.token:
            logger.info("no access token, match not recorded")
            return
        path, body = self._request(report)
        url = urllib.parse.urljoin(self.url, path)
        headers = {"Authorization": "Bearer {}".format(self.token)}
        try:
            r = requests.post(url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise ReportError("could not reach {}: {}".format(url, e))
        if not r.ok:
            raise ReportError("failed to save match: {}".format(r.text), status=r.status_code)
        logger.info("match saved (%d-%d vs %s)", report.user_score,
                    report.opponent_score, report.opponent_label)


def _safe_record(reporter: MatchReporter, report: MatchReport) -> None:
    try:
        reporter.record_match(report)
    except Exception:
        logger.warning("match report failed, result not saved", exc_info=True)


def submit_report(reporter: MatchReporter, report: MatchReport, background=True):
    """Hand `report` to `reporter` without letting failures escape.

    With background=True the call runs in a daemon thread, which is
    returned; otherwise it runs inline and None is returned.
    """
    if not background:
        _safe_record(reporter, report)
        return None
    thread = threading.Thread(
        target=_safe_record, args=(reporter, report),
        name="match-report", daemon=True,
    )
    thread.start()
    return thread
