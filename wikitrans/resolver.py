"""Resolution of a language tag from a candidate list."""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence

from .config import DEFAULT_HEIGHT
from .models import LABEL_DELIMITER, Choice, Language
from .selector import Picker, select


def language_label(language: Language, annotation: Optional[str] = None) -> str:
    label = f"{language.tag}{LABEL_DELIMITER}{language.name})"
    if annotation is None:
        return label
    return f"{label}: {annotation}"


def language_choices(
    languages: Sequence[Language],
    annotations: Optional[Sequence[Optional[str]]] = None,
) -> List[Choice]:
    """Build selectable items for ``languages``.

    When ``annotations`` is given it is zipped with ``languages`` and a missing
    annotation is shown as an empty string.
    """

    if annotations is None:
        return [Choice(label=language_label(lang), value=lang.tag) for lang in languages]
    return [
        Choice(label=language_label(lang, annotation or ""), value=lang.tag)
        for lang, annotation in zip(languages, annotations)
    ]


def select_language(
    languages: Sequence[Language],
    prompt: str,
    picker: Picker,
    *,
    preference: Optional[str] = None,
    annotations: Optional[Sequence[Optional[str]]] = None,
    height: str = DEFAULT_HEIGHT,
) -> Optional[str]:
    """Let the user select a language and return its tag.

    A ``preference`` matching one of the tags exactly is returned without
    prompting. An unknown preference is reported on stderr and the user is
    asked instead. ``None`` means nothing was selected.
    """

    if preference is not None:
        for language in languages:
            if language.tag == preference:
                return language.tag

        print(f"Unknown preference language: {preference}", file=sys.stderr)

    choice = select(language_choices(languages, annotations), prompt, picker, height=height)
    return choice.value if choice is not None else None


__all__ = ["language_choices", "language_label", "select_language"]
