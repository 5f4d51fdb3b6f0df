"""
HTTP Transport
Single GET with a fixed deadline; status codes are reported, not raised
"""
from dataclasses import dataclass
from typing import Dict, Optional
import logging

import requests

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Network-level failure (DNS, connect, timeout, TLS...)"""


@dataclass(frozen=True)
class FetchResponse:
    status: int
    body: str
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpTransport:
    """requests-backed fetcher shared by all solvers"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def fetch(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout_seconds: float = 15.0,
    ) -> FetchResponse:
        """
        GET a page and return its status and decoded body.

        No retries; the caller owns retry policy. Every requests exception,
        including a timeout, is raised as TransportError.
        """
        logger.debug("GET %s (timeout=%.1fs)", url, timeout_seconds)
        try:
            response = self.session.get(
                url,
                headers=dict(headers or {}),
                timeout=max(1.0, float(timeout_seconds)),
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc
        return FetchResponse(status=response.status_code, body=response.text, url=response.url or url)

    def close(self):
        self.session.close()
