"""
Metadata Classifier
Derives quality, languages and audio label from a movie page.

Evidence comes from two places inside ``.entry-content``:

* the description paragraphs whose ``<strong>`` label reads "Language:" or
  "Quality:" (source A), and
* the blocks wrapping download-host anchors plus up to two headings or
  paragraphs right before them (source B).

Collecting text and matching against it are separate steps so the matching
rules can be exercised on plain strings.
"""
from dataclasses import dataclass
from typing import List
import re

from bs4 import BeautifulSoup

from ..core.vocabulary import DEFAULT_VOCABULARY, ExtractionVocabulary
from ..models.extraction_result import MovieMetadata
from .base import make_soup

CONTENT_SELECTOR = ".entry-content"
BLOCK_TAGS = ["p", "div", "h3", "h4"]
CONTEXT_TAGS = ["h3", "p"]
CONTEXT_DEPTH = 2


@dataclass(frozen=True)
class MetadataCorpus:
    """Upper-cased evidence text for each label family"""
    language_text: str = ""
    quality_text: str = ""


class MetadataClassifier:
    def __init__(self, vocabulary: ExtractionVocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary
        self._language_patterns = [
            (lang, re.compile(rf"\b{re.escape(lang.upper())}\b", re.IGNORECASE))
            for lang in vocabulary.languages
        ]

    def classify(self, html) -> MovieMetadata:
        corpus = self.collect_corpus(make_soup(html))
        if corpus is None:
            return MovieMetadata.unknown()
        return self.classify_corpus(corpus)

    def collect_corpus(self, soup: BeautifulSoup):
        """Gather evidence text, or None when the page has no content area."""
        content = soup.select_one(CONTENT_SELECTOR)
        if content is None:
            return None
        links_area = " ".join(self._links_area_texts(content))
        language_text = f"{self._labelled_paragraph_text(content, 'Language:')} {links_area}"
        quality_text = f"{self._labelled_paragraph_text(content, 'Quality:')} {links_area}"
        return MetadataCorpus(language_text=language_text.upper(), quality_text=quality_text.upper())

    def _labelled_paragraph_text(self, content, marker: str) -> str:
        texts = []
        for paragraph in content.find_all("p"):
            label = "".join(strong.get_text() for strong in paragraph.find_all("strong"))
            if marker in label:
                texts.append(paragraph.get_text())
        return " ".join(texts)

    def _links_area_texts(self, content) -> List[str]:
        texts = []
        for anchor in content.select("a[href]"):
            if not self.vocabulary.is_target_link(anchor.get("href") or ""):
                continue
            block = anchor.find_parent(BLOCK_TAGS)
            if block is None:
                continue
            texts.append(block.get_text())
            for sibling in block.find_previous_siblings(CONTEXT_TAGS, limit=CONTEXT_DEPTH):
                texts.append(sibling.get_text())
        return texts

    def classify_corpus(self, corpus: MetadataCorpus) -> MovieMetadata:
        languages = self.match_languages(corpus.language_text)
        return MovieMetadata(
            quality=self.match_quality(corpus.quality_text),
            languages=tuple(languages),
            audio_label=self.audio_label(languages),
        )

    def match_languages(self, text: str) -> List[str]:
        """Whole-word matches, reported in vocabulary order."""
        return [lang for lang, pattern in self._language_patterns if pattern.search(text or "")]

    def match_quality(self, text: str) -> str:
        """Highest-ranked resolution plus any format tags, e.g. "1080p WEB-DL HEVC"."""
        upper = (text or "").upper()
        best = None
        for tier in self.vocabulary.resolutions:
            if tier.label.upper() in upper and (best is None or tier.rank > best.rank):
                best = tier
        if best is None:
            return "Unknown Quality"
        formats = []
        for tag in self.vocabulary.formats:
            if tag.upper() in upper and tag not in formats:
                formats.append(tag)
        return f"{best.label} {' '.join(formats)}".strip()

    @staticmethod
    def audio_label(languages) -> str:
        count = len(languages)
        if count == 0:
            return "Unknown"
        if count == 1:
            return list(languages)[0]
        if count == 2:
            return "Dual Audio"
        return "Multi Audio"
