"""Interactive pickers.

A selector is any callable ``select(label, candidates) -> int | None``
returning the zero-based index of the chosen candidate, or ``None`` when the
user cancels. The resolver only depends on that shape; the questionary-backed
implementation lives here.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import questionary


@dataclass(frozen=True)
class Candidate:
    title: str
    description: str = ""


SelectFn = Callable[[str, Sequence[Candidate]], Optional[int]]

_COLOR_STYLE = questionary.Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan bold"),
    ("selected", "fg:cyan"),
    ("answer", "fg:cyan bold"),
])

_PLAIN_STYLE = questionary.Style([
    ("qmark", ""),
    ("question", ""),
    ("pointer", ""),
    ("highlighted", "reverse"),
    ("selected", ""),
    ("answer", ""),
    ("instruction", ""),
])

_INSTRUCTION = "(type to filter, Ctrl-C to cancel)"


def make_selector(color: bool = True) -> SelectFn:
    """Build a questionary select function, optionally without colors."""
    style = _COLOR_STYLE if color else _PLAIN_STYLE

    def select(label: str, candidates: Sequence[Candidate]) -> int | None:
        if not candidates:
            return None

        choices = [
            questionary.Choice(
                title=c.title,
                value=idx,
                description=c.description or None,
            )
            for idx, c in enumerate(candidates)
        ]
        # ask() returns None on Ctrl-C instead of raising
        return questionary.select(
            label,
            choices=choices,
            style=style,
            instruction=_INSTRUCTION,
            use_search_filter=True,
            use_jk_keys=False,
            use_shortcuts=False,
        ).ask()

    return select
