"""
Extraction Vocabulary
Fixed word lists the link and metadata heuristics match against
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ResolutionTier:
    label: str
    rank: int


@dataclass(frozen=True)
class ExtractionVocabulary:
    """
    Immutable matching vocabulary.

    Solvers take an instance so alternate word lists can be swapped in
    without touching control flow. Tuple order matters: languages and
    formats are reported in this order, priority hosts are tried in it.
    """
    languages: Tuple[str, ...] = (
        "Hindi", "English", "Tamil", "Telugu", "Malayalam",
        "Kannada", "Punjabi", "Marathi", "Bengali",
    )
    resolutions: Tuple[ResolutionTier, ...] = (
        ResolutionTier("4K", 5000),
        ResolutionTier("2160p", 4000),
        ResolutionTier("1080p", 3000),
        ResolutionTier("720p", 2000),
        ResolutionTier("480p", 1000),
    )
    formats: Tuple[str, ...] = (
        "WEB-DL", "HDRip", "Bluray", "HEVC", "10Bit", "UNCUT", "WEB-RIP", "DVDRIP",
    )
    # Link-locker and download hosts worth surfacing
    target_hosts: Tuple[str, ...] = (
        "hblinks", "hubdrive", "hubcdn", "hubcloud", "gdflix", "drivehub",
    )
    # Images, social profiles and theme assets
    junk_domains: Tuple[str, ...] = (
        "catimages", "imdb.com", "googleusercontent", "instagram.com",
        "facebook.com", "wp-content", "wpshopmart",
    )
    download_keywords: Tuple[str, ...] = (
        "DOWNLOAD", "720P", "480P", "1080P", "4K", "DIRECT", "GDRIVE",
    )
    decorative_glyphs: Tuple[str, ...] = ("⚡",)
    priority_hosts: Tuple[Tuple[str, str], ...] = (
        ("hubcloud.foo", "HubCloud (Priority 1)"),
        ("hubdrive.space", "HubDrive (Priority 2)"),
    )

    def is_target_link(self, href: str) -> bool:
        return any(host in href for host in self.target_hosts)

    def is_junk_link(self, href: str) -> bool:
        return any(junk in href for junk in self.junk_domains)

    def has_download_keyword(self, text: str) -> bool:
        upper = text.upper()
        return any(keyword in upper for keyword in self.download_keywords)

    def strip_glyphs(self, text: str) -> str:
        for glyph in self.decorative_glyphs:
            text = text.replace(glyph, "")
        return text


DEFAULT_VOCABULARY = ExtractionVocabulary()
