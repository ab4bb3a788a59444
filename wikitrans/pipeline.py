"""The search → select → translate pipeline."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional, Protocol, Sequence

from .config import DEFAULT_HEIGHT
from .models import Choice, FailureKind, LangLink, Language, PipelineError, TranslationResult
from .resolver import select_language
from .selector import Picker, select
from .wikipedia import WikipediaError

SEARCH_LANGUAGE_PROMPT = "Search language: "
TITLE_PROMPT = "Select term: "
TARGET_LANGUAGE_PROMPT = "Translate to: "


class WikiService(Protocol):
    def get_languages(self) -> List[Language]: ...

    def search(self, term: str, language: Optional[str] = None) -> List[str]: ...

    def get_langlinks(self, title: str, language: Optional[str] = None) -> List[LangLink]: ...


def build_search_term(terms: Iterable[str]) -> str:
    # Every token gets a leading space, including the first one.
    return "".join(" " + term for term in terms)


def filter_languages(languages: Sequence[Language], langlinks: Sequence[LangLink]) -> List[Language]:
    """Keep the catalog entries that have a langlink, in catalog order."""

    tags = {link.tag for link in langlinks}
    return [language for language in languages if language.tag in tags]


def annotate(languages: Sequence[Language], langlinks: Sequence[LangLink]) -> List[str]:
    """Translated title for each of ``languages``; empty when the link carries none."""

    titles = {}
    for link in langlinks:
        titles.setdefault(link.tag, link.title)
    return [titles.get(language.tag) or "" for language in languages]


class Translator:
    """Runs one translation: every stage blocks until the API or the user answers."""

    def __init__(
        self,
        service: WikiService,
        picker: Picker,
        *,
        height: str = DEFAULT_HEIGHT,
        debug: bool = False,
    ) -> None:
        self.service = service
        self.picker = picker
        self.height = height
        self.debug = debug

    def fetch_languages(self) -> List[Language]:
        try:
            return self.service.get_languages()
        except WikipediaError as exc:
            raise PipelineError(FailureKind.CATALOG, f"failed to get languages: {exc}") from exc

    def translate(
        self,
        terms: Sequence[str],
        *,
        language: Optional[str] = None,
        target: Optional[str] = None,
        languages: Optional[Sequence[Language]] = None,
    ) -> TranslationResult:
        """Search ``terms`` and return the title of the chosen page in another language.

        Parameters
        ----------
        terms:
            Search tokens, as given on the command line.
        language:
            Preferred search language tag; asked interactively when missing or unknown.
        target:
            Preferred target language tag; asked interactively when missing or unknown.
        languages:
            The language catalog. Fetched from the service when omitted.
        """

        catalog = list(languages) if languages is not None else self.fetch_languages()

        search_language = select_language(
            catalog,
            SEARCH_LANGUAGE_PROMPT,
            self.picker,
            preference=language,
            height=self.height,
        )
        if search_language is None:
            raise PipelineError(FailureKind.SEARCH_LANGUAGE, "failed to select search language")

        term = build_search_term(terms)
        try:
            titles = self.service.search(term, search_language)
        except WikipediaError as exc:
            raise PipelineError(FailureKind.SEARCH, f"failed to search for specified term: {exc}") from exc
        self._debug(f"search language={search_language} term={term!r} results={len(titles)}")

        # TODO: skip the prompt when the search returns a single title.
        chosen = select(
            [Choice(label=title, value=title) for title in titles],
            TITLE_PROMPT,
            self.picker,
            height=self.height,
        )
        if chosen is None:
            raise PipelineError(FailureKind.TITLE, "failed to select page title")
        title = chosen.value

        try:
            langlinks = self.service.get_langlinks(title, search_language)
        except WikipediaError as exc:
            raise PipelineError(FailureKind.LANGLINKS, f"failed to fetch langlinks: {exc}") from exc
        self._debug(f"page={title!r} langlinks={len(langlinks)}")

        target_languages = filter_languages(catalog, langlinks)

        if not langlinks:
            print(f"No translations available for: {title}")
            return TranslationResult(source_title=title)

        target_language = select_language(
            target_languages,
            TARGET_LANGUAGE_PROMPT,
            self.picker,
            preference=target,
            annotations=annotate(target_languages, langlinks),
            height=self.height,
        )
        if target_language is None:
            raise PipelineError(FailureKind.TARGET_LANGUAGE, "failed to select target language")

        for link in langlinks:
            if link.tag == target_language:
                return TranslationResult(
                    source_title=title,
                    title=link.title or "",
                    language=target_language,
                )
        raise PipelineError(FailureKind.LANGLINK_LOOKUP, "failed to find selected langlink")

    def _debug(self, message: str) -> None:
        if self.debug:
            print(f"[debug] {message}", file=sys.stderr)


__all__ = [
    "Translator",
    "WikiService",
    "annotate",
    "build_search_term",
    "filter_languages",
]
