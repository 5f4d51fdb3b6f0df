"""
HubCDN Resolver
Unwraps the base64 redirect on a HubCDN unlock page, then reads the final
download link from the /dl/ page
"""
from urllib.parse import parse_qs, urlparse
import base64
import logging
import re

from ..core.settings_manager import MOBILE_USER_AGENT
from ..models.extraction_result import ExtractionResult
from .base import BaseSolver, href_of, make_soup

logger = logging.getLogger(__name__)

REURL_PATTERN = re.compile(r'var\s+reurl\s*=\s*["\']([^"\']*)["\']')
LOCATION_PATTERN = re.compile(r'window\.location\.href\s*=\s*"(.*?)"')


def decode_redirect_param(token: str) -> str:
    """
    Decode a base64 redirect parameter that may have lost its padding.

    Accepts both the standard and the URL-safe alphabet. Invalid UTF-8 bytes
    become U+FFFD. Raises ValueError
    (binascii.Error) when the token cannot be decoded.
    """
    # parse_qs turns "+" into a space
    token = token.replace(" ", "+").strip()
    padded = token + "=" * (-len(token) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8", errors="replace").strip()


class HubCDNResolver(BaseSolver):
    """Two fetches: the unlock page (skipped for /dl/ URLs), then the final page"""

    name = "HubCDN"
    domains = ("hubcdn",)
    settings_key = "hubcdn"
    default_headers = {"User-Agent": MOBILE_USER_AGENT}
    direct_marker = "/dl/"
    redirect_param = "r"
    link_id = "vd"

    @property
    def final_timeout_seconds(self) -> float:
        return self._setting_float("final_link_timeout_seconds", 20.0)

    def _solve(self, url: str) -> ExtractionResult:
        target_url = url
        if self.direct_marker not in url:
            response = self._fetch(url)
            target_url = self.unlock_target(response.body, url)
        final = self._fetch(target_url, timeout_seconds=self.final_timeout_seconds)
        return self.parse_final(final.body)

    def unlock_target(self, html: str, url: str) -> str:
        """
        Extract the real target from ``var reurl = "...?r=<base64>"``.

        Falls back to ``url`` unchanged when the variable or the parameter is
        missing.
        """
        match = REURL_PATTERN.search(html or "")
        if not match:
            logger.debug("No reurl assignment on %s; using it as the target", url)
            return url
        query = parse_qs(urlparse(match.group(1)).query)
        values = query.get(self.redirect_param) or []
        if not values or not values[0].strip():
            logger.debug("Redirect %s has no %r parameter", match.group(1), self.redirect_param)
            return url
        return decode_redirect_param(values[0])

    def parse_final(self, html) -> ExtractionResult:
        soup = make_soup(html)
        link = href_of(soup.find("a", id=self.link_id))
        if link:
            return ExtractionResult.success(final_link=link)

        # Some pages only carry the target in an inline redirect script
        text = html if isinstance(html, str) else str(soup)
        for match in LOCATION_PATTERN.finditer(text or ""):
            candidate = match.group(1).strip()
            if candidate:
                return ExtractionResult.success(final_link=candidate)

        return ExtractionResult.fail(f"Link id='{self.link_id}' not found in HTML")
