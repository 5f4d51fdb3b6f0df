"""
Movie Page Extractor
Collects every plausible download anchor from a movie post and merges in
the page metadata
"""
from typing import List

from bs4 import BeautifulSoup

from ..core.settings_manager import MOBILE_USER_AGENT, SITE_REFERER
from ..core.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary
from ..models.extraction_result import ExtractionResult, LinkCandidate
from .base import BaseSolver, make_soup
from .metadata import BLOCK_TAGS, MetadataClassifier

# Only the post body is scanned; walking the whole DOM is too slow on these pages.
LINK_SELECTOR = ".entry-content a[href], main a[href]"
NAME_CONTEXT_TAGS = ("h3", "h4", "h5", "p", "strong")
MAX_NAME_LENGTH = 50
FALLBACK_NAME = "Download Link"
NO_LINKS_MESSAGE = "No links found. The page structure might have changed."


def _squash(text: str) -> str:
    return " ".join((text or "").split())


class MoviePageExtractor(BaseSolver):
    """Generic solver for movie posts; handles any URL no other solver claims"""

    name = "MoviePage"
    settings_key = "movie_page"
    default_headers = {
        "User-Agent": MOBILE_USER_AGENT,
        "Referer": SITE_REFERER,
    }

    def __init__(self, transport=None, settings=None, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY):
        super().__init__(transport=transport, settings=settings, vocabulary=vocabulary)
        self.classifier = MetadataClassifier(vocabulary)

    def can_handle(self, url: str) -> bool:
        return True

    def _solve(self, url: str) -> ExtractionResult:
        response = self._fetch(url)
        if not response.ok:
            return ExtractionResult.fail(f"Cannot open page. Status: {response.status}")
        return self.parse(response.body, source_url=response.url or url)

    def parse(self, html, source_url: str = "") -> ExtractionResult:
        soup = make_soup(html)
        links = self.extract_links(soup)
        if not links:
            return ExtractionResult.fail(NO_LINKS_MESSAGE)
        return ExtractionResult.success(
            total=len(links),
            links=tuple(links),
            metadata=self.classifier.classify(soup),
        )

    def extract_links(self, soup: BeautifulSoup) -> List[LinkCandidate]:
        found: List[LinkCandidate] = []
        seen = set()
        for anchor in soup.select(LINK_SELECTOR):
            link = (anchor.get("href") or "").strip()
            if not self._is_candidate(link, anchor.get_text()):
                continue
            if link in seen:
                continue
            seen.add(link)
            found.append(LinkCandidate(name=self._derive_name(anchor), link=link))
        return found

    def _is_candidate(self, link: str, text: str) -> bool:
        if not link or link.startswith("#"):
            return False
        # Block-list wins over both accept rules.
        if self.vocabulary.is_junk_link(link):
            return False
        return self.vocabulary.is_target_link(link) or self.vocabulary.has_download_keyword(text)

    def _derive_name(self, anchor) -> str:
        name = self._clean(anchor.get_text())
        if len(name) < 2:
            block = anchor.find_parent(BLOCK_TAGS)
            name = self._context_text(block) or (self._clean(block.get_text()) if block is not None else "")
        return (name or FALLBACK_NAME)[:MAX_NAME_LENGTH]

    def _context_text(self, block) -> str:
        if block is None:
            return ""
        previous = block.find_previous_sibling(True)
        if previous is None or previous.name not in NAME_CONTEXT_TAGS:
            return ""
        return self._clean(previous.get_text())

    def _clean(self, text: str) -> str:
        return _squash(self.vocabulary.strip_glyphs(text))
