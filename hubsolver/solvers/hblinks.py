"""
HBLinks Solver
Picks the onward link from an hblinks locker page by fixed host priority
"""
from functools import partial

from ..core.settings_manager import LEGACY_DESKTOP_USER_AGENT
from ..models.extraction_result import ExtractionResult
from .base import BaseSolver, href_of, make_soup, run_strategies


def _first_href_containing(marker: str, soup):
    return href_of(soup.select_one(f'a[href*="{marker}"]'))


class HBLinksSolver(BaseSolver):
    """Link-locker solver: HubCloud first, then HubDrive"""

    name = "HBLinks"
    domains = ("hblinks",)
    settings_key = "hblinks"
    default_headers = {"User-Agent": LEGACY_DESKTOP_USER_AGENT}

    def _solve(self, url: str) -> ExtractionResult:
        response = self._fetch(url)
        if not response.ok:
            return ExtractionResult.fail(f"Cannot open page. Status: {response.status}")
        return self.parse(response.body)

    def parse(self, html, source_url: str = "") -> ExtractionResult:
        soup = make_soup(html)
        strategies = [
            (label, partial(_first_href_containing, marker))
            for marker, label in self.vocabulary.priority_hosts
        ]
        source, link = run_strategies(soup, strategies)
        if not link:
            return ExtractionResult.fail("Not Found")
        return ExtractionResult.success(link=link, source=source)
