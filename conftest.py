from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

import pytest

from wikitrans.models import LangLink, Language
from wikitrans.wikipedia import WikipediaError


class ScriptedPicker:
    """Answers prompts from a script; a callable answer receives the offered items."""

    def __init__(self, answers: Sequence[object] = ()) -> None:
        self.answers = list(answers)
        self.calls: List[tuple[List[str], str, str]] = []

    def pick(self, items: Sequence[str], prompt: str, height: str = "50%") -> Optional[str]:
        self.calls.append((list(items), prompt, height))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        answer = self.answers.pop(0)
        if callable(answer):
            return answer(list(items))
        return answer  # type: ignore[return-value]

    @property
    def prompts(self) -> List[str]:
        return [prompt for _, prompt, _ in self.calls]


class FakeWikiService:
    def __init__(
        self,
        *,
        languages: Sequence[Language],
        titles: Sequence[str] = (),
        langlinks: Optional[Dict[str, List[LangLink]]] = None,
        fail: Optional[str] = None,
    ) -> None:
        self.languages = list(languages)
        self.titles = list(titles)
        self.langlinks = langlinks or {}
        self.fail = fail
        self.default_language = "en"
        self.searches: List[tuple[str, Optional[str]]] = []
        self.langlink_requests: List[tuple[str, Optional[str]]] = []

    def get_languages(self) -> List[Language]:
        if self.fail == "languages":
            raise WikipediaError("boom")
        return list(self.languages)

    def search(self, term: str, language: Optional[str] = None) -> List[str]:
        self.searches.append((term, language))
        if self.fail == "search":
            raise WikipediaError("boom")
        return list(self.titles)

    def get_langlinks(self, title: str, language: Optional[str] = None) -> List[LangLink]:
        self.langlink_requests.append((title, language))
        if self.fail == "langlinks":
            raise WikipediaError("boom")
        return list(self.langlinks.get(title, []))


@pytest.fixture
def catalog() -> List[Language]:
    return [
        Language("en", "English"),
        Language("fr", "French"),
        Language("de", "German"),
    ]


@pytest.fixture
def make_picker() -> Callable[..., ScriptedPicker]:
    def factory(*answers: object) -> ScriptedPicker:
        return ScriptedPicker(answers)

    return factory


@pytest.fixture
def make_service(catalog) -> Callable[..., FakeWikiService]:
    def factory(**kwargs: object) -> FakeWikiService:
        kwargs.setdefault("languages", catalog)
        return FakeWikiService(**kwargs)  # type: ignore[arg-type]

    return factory
