"""Value types shared by the Wikipedia client and the selection pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

LABEL_DELIMITER = " ("


@dataclass(frozen=True)
class Language:
    tag: str
    name: str


@dataclass(frozen=True)
class LangLink:
    """A cross-language reference of one page; ``title`` is missing for some links."""

    tag: str
    title: Optional[str] = None


@dataclass(frozen=True)
class Choice:
    """A rendered label together with the value it stands for."""

    label: str
    value: str


class FailureKind(str, Enum):
    CATALOG = "catalog"
    SEARCH_LANGUAGE = "search_language"
    SEARCH = "search"
    TITLE = "title"
    LANGLINKS = "langlinks"
    TARGET_LANGUAGE = "target_language"
    LANGLINK_LOOKUP = "langlink_lookup"


class PipelineError(RuntimeError):
    """Raised when a pipeline stage cannot produce a value."""

    def __init__(self, kind: FailureKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class TranslationResult:
    """Outcome of one run.

    ``title`` is ``None`` when the page has no inter-language links at all,
    which is an expected outcome rather than a failure.
    """

    source_title: str
    title: Optional[str] = None
    language: Optional[str] = None

    @property
    def translated(self) -> bool:
        return self.title is not None


__all__ = [
    "Choice",
    "FailureKind",
    "LABEL_DELIMITER",
    "LangLink",
    "Language",
    "PipelineError",
    "TranslationResult",
]
