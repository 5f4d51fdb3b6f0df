from .base import BaseSolver
from .hblinks import HBLinksSolver
from .hubcdn import HubCDNResolver
from .hubdrive import HubDriveResolver
from .metadata import MetadataClassifier
from .movie_page import MoviePageExtractor

__all__ = [
    "BaseSolver",
    "HBLinksSolver",
    "HubCDNResolver",
    "HubDriveResolver",
    "MetadataClassifier",
    "MoviePageExtractor",
]
