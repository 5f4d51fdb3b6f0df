"""
Extraction Result Model
Tagged outcome shared by every solver, plus the link and metadata records
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Tuple


class ResultStatus(Enum):
    """Outcome tag"""
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


@dataclass(frozen=True)
class ExtractionResult:
    """
    Result of a single solver call.

    FAIL means the page was reachable but the expected element is missing;
    ERROR means the transport or the parser raised. Only SUCCESS carries a
    payload. The payload is a read-only view and list values are stored as
    tuples.
    """
    status: ResultStatus
    payload: Mapping = field(default_factory=dict)
    message: str = ""

    def __post_init__(self):
        frozen = {k: tuple(v) if isinstance(v, list) else v for k, v in self.payload.items()}
        object.__setattr__(self, "payload", MappingProxyType(frozen))

    @classmethod
    def success(cls, **payload) -> "ExtractionResult":
        return cls(status=ResultStatus.SUCCESS, payload=payload)

    @classmethod
    def fail(cls, message: str) -> "ExtractionResult":
        return cls(status=ResultStatus.FAIL, message=message)

    @classmethod
    def error(cls, message: str) -> "ExtractionResult":
        return cls(status=ResultStatus.ERROR, message=message)

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def is_fail(self) -> bool:
        return self.status == ResultStatus.FAIL

    @property
    def is_error(self) -> bool:
        return self.status == ResultStatus.ERROR

    def with_payload(self, **extra) -> "ExtractionResult":
        """Copy of a successful result with extra payload keys"""
        if not self.ok:
            return self
        return ExtractionResult(status=self.status, payload={**self.payload, **extra})

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"status": self.status.value, **_plain(self.payload)}
        return {"status": self.status.value, "message": self.message}


@dataclass(frozen=True)
class LinkCandidate:
    """Download anchor found on a movie page"""
    name: str
    link: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "link": self.link}


@dataclass(frozen=True)
class MovieMetadata:
    """Quality/language/audio labels derived from a movie page"""
    quality: str
    languages: Tuple[str, ...] = ()
    audio_label: str = "Unknown"

    @classmethod
    def unknown(cls) -> "MovieMetadata":
        return cls(quality="Unknown")

    @property
    def languages_display(self) -> str:
        return ", ".join(self.languages) or "Not Specified"

    def to_dict(self) -> Dict[str, str]:
        return {
            "quality": self.quality,
            "languages": self.languages_display,
            "audioLabel": self.audio_label,
        }


def _plain(value):
    if isinstance(value, (LinkCandidate, MovieMetadata)):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
