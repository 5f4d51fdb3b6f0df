"""
Solver SDK
Base interface for hubsolver link solvers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, Optional, Tuple
import logging

from bs4 import BeautifulSoup

from ..core.transport import FetchResponse, HttpTransport, TransportError
from ..core.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary
from ..models.extraction_result import ExtractionResult

logger = logging.getLogger(__name__)

# (label, strategy) pairs; a strategy returns a destination or None.
Strategy = Tuple[str, Callable[[BeautifulSoup], Optional[str]]]


def make_soup(html) -> BeautifulSoup:
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html or "", "html.parser")


def href_of(node) -> str:
    if node is None:
        return ""
    return (node.get("href") or "").strip()


def run_strategies(soup: BeautifulSoup, strategies: Iterable[Strategy]) -> Tuple[str, str]:
    """
    Evaluate strategies in order and stop at the first non-blank destination.

    Returns (label, link), or ("", "") when every strategy comes up empty.
    """
    for label, strategy in strategies:
        link = (strategy(soup) or "").strip()
        if link:
            return label, link
    return "", ""


class BaseSolver(ABC):
    """
    Stable solver contract.

    Subclasses pin their own header set and timeout; both can be overridden
    through a settings object exposing ``get(key, default)``.
    """
    name = "UnnamedSolver"
    # Host/path fragments this solver is responsible for; empty means generic.
    domains: Tuple[str, ...] = ()
    settings_key = ""
    default_headers: Dict[str, str] = {}

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        settings=None,
        vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY,
    ):
        self.transport = transport or HttpTransport()
        self.settings = settings
        self.vocabulary = vocabulary

    def can_handle(self, url: str) -> bool:
        lower = (url or "").lower()
        return any(fragment in lower for fragment in self.domains)

    @property
    def headers(self) -> Dict[str, str]:
        if self.settings is not None and self.settings_key:
            configured = self.settings.get(f"{self.settings_key}_headers")
            if configured:
                return dict(configured)
        return dict(self.default_headers)

    @property
    def timeout_seconds(self) -> float:
        return self._setting_float("request_timeout_seconds", 15.0)

    def _setting_float(self, key: str, default: float) -> float:
        if self.settings is None:
            return default
        return float(self.settings.get(key, default) or default)

    def _fetch(self, url: str, timeout_seconds: Optional[float] = None) -> FetchResponse:
        return self.transport.fetch(
            url,
            headers=self.headers,
            timeout_seconds=self.timeout_seconds if timeout_seconds is None else timeout_seconds,
        )

    def solve(self, url: str) -> ExtractionResult:
        """Fetch and parse a URL; never raises."""
        try:
            result = self._solve(url)
        except (TransportError, ValueError) as e:
            logger.warning("%s error for %s: %s", self.name, url, e)
            return ExtractionResult.error(str(e))
        except Exception as e:
            logger.exception("%s crashed on %s", self.name, url)
            return ExtractionResult.error(str(e))
        if result.is_fail:
            logger.info("%s found nothing on %s: %s", self.name, url, result.message)
        return result

    @abstractmethod
    def _solve(self, url: str) -> ExtractionResult:
        """Solver body; transport and decode errors may propagate."""
        raise NotImplementedError

    def describe(self) -> Dict[str, Any]:
        """Lightweight payload for listings."""
        return {
            "name": self.name,
            "domains": list(self.domains),
            "generic": not self.domains,
        }
