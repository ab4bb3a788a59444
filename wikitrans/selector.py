"""Interactive fuzzy selection of one item out of a list."""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence

from iterfzf import iterfzf

from .config import DEFAULT_HEIGHT
from .models import Choice


class Picker(Protocol):
    def pick(self, items: Sequence[str], prompt: str, height: str = DEFAULT_HEIGHT) -> Optional[str]:
        """Return one of ``items``, or ``None`` when the user cancelled."""


class FzfPicker:
    """Runs the bundled ``fzf`` binary through :mod:`iterfzf` in single-selection mode."""

    def pick(self, items: Sequence[str], prompt: str, height: str = DEFAULT_HEIGHT) -> Optional[str]:
        if not items:
            return None

        # fzf reads one item per line.
        by_line: Dict[str, str] = {}
        for item in items:
            by_line.setdefault(item.replace("\n", " "), item)

        try:
            selected = iterfzf(
                list(by_line),
                multi=False,
                prompt=prompt,
                __extra__=[f"--height={height}"],
            )
        except KeyboardInterrupt:
            return None

        if isinstance(selected, (list, tuple)):
            selected = selected[0] if selected else None
        if not selected:
            return None
        return by_line.get(selected)


def select(
    choices: Sequence[Choice],
    prompt: str,
    picker: Picker,
    *,
    height: str = DEFAULT_HEIGHT,
) -> Optional[Choice]:
    """Show ``choices`` through ``picker`` and return the one the user confirmed.

    Only offered choices are ever returned; an answer that matches no label
    counts as a cancellation.
    """

    if not choices:
        return None

    by_label: Dict[str, Choice] = {}
    for choice in choices:
        by_label.setdefault(choice.label, choice)

    label = picker.pick(list(by_label), prompt, height)
    if label is None:
        return None
    return by_label.get(label)


__all__ = ["FzfPicker", "Picker", "select"]
