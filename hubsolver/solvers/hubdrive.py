"""
HubDrive Resolver
Finds the download button on a HubDrive file page
"""
from ..core.settings_manager import DESKTOP_USER_AGENT, SITE_REFERER
from ..models.extraction_result import ExtractionResult
from .base import BaseSolver, href_of, make_soup, run_strategies


class HubDriveResolver(BaseSolver):
    name = "HubDrive"
    domains = ("hubdrive",)
    settings_key = "hubdrive"
    default_headers = {
        "User-Agent": DESKTOP_USER_AGENT,
        "Referer": SITE_REFERER,
    }
    downstream_hosts = ("hubcloud", "hubcdn")

    def _solve(self, url: str) -> ExtractionResult:
        response = self._fetch(url)
        return self.parse(response.body)

    def parse(self, html, source_url: str = "") -> ExtractionResult:
        soup = make_soup(html)
        _, link = run_strategies(soup, [
            ("success-button", self._success_button),
            ("dl-id", self._dl_button),
            ("any-anchor", self._first_downstream_anchor),
        ])
        if link:
            return ExtractionResult.success(link=link)
        return ExtractionResult.fail("Download link not found on HubDrive page")

    def _success_button(self, soup):
        return href_of(soup.select_one(f'a.btn-success[href*="{self.downstream_hosts[0]}"]'))

    def _dl_button(self, soup):
        return href_of(soup.select_one("a#dl"))

    def _first_downstream_anchor(self, soup):
        for anchor in soup.find_all("a", href=True):
            href = anchor["href"]
            if any(host in href for host in self.downstream_hosts):
                return href
        return None
