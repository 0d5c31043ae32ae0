"""Action verbs, control pane modes and sentence choices."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List

from .dialog import BRIGHT_CYAN, BRIGHT_MAGENTA, CYAN, GREEN, MAGENTA, YELLOW
from .future import Future, Promise

__all__ = [
    "CONTROL_ACTION_COLOR",
    "CONTROL_ACTION_ONGOING_COLOR",
    "CONTROL_INVENTORY_COLOR",
    "CONTROL_INVENTORY_HOVER_COLOR",
    "CONTROL_VERB_COLOR",
    "CONTROL_VERB_HOVER_COLOR",
    "SENTENCE_CHOICE_MARGIN",
    "Verb",
    "ControlPaneMode",
    "IndexedSentence",
    "SentenceChoice",
]

CONTROL_ACTION_COLOR = CYAN
CONTROL_ACTION_ONGOING_COLOR = BRIGHT_CYAN
CONTROL_INVENTORY_COLOR = MAGENTA
CONTROL_INVENTORY_HOVER_COLOR = BRIGHT_MAGENTA
CONTROL_VERB_COLOR = GREEN
CONTROL_VERB_HOVER_COLOR = YELLOW

SENTENCE_CHOICE_MARGIN = 2


class Verb(str, Enum):
    """An action verb offered in the control pane."""

    OPEN = "Open"
    CLOSE = "Close"
    PUSH = "Push"
    PULL = "Pull"
    WALK_TO = "Walk to"
    PICK_UP = "Pick up"
    TALK_TO = "Talk to"
    GIVE = "Give"
    USE = "Use"
    LOOK_AT = "Look at"
    TURN_ON = "Turn on"
    TURN_OFF = "Turn off"

    def __str__(self) -> str:
        return self.value

    def action(self) -> str:
        """Return the script function name for the verb."""
        return self.value.lower().replace(" ", "")


class ControlPaneMode(IntEnum):
    """What the control pane is showing."""

    DISABLED = 0
    NORMAL = 1
    DIALOG = 2


@dataclass(frozen=True)
class IndexedSentence:
    """A sentence chosen by the player, with its position in the choice."""

    index: int
    sentence: str


@dataclass(eq=False)
class SentenceChoice:
    """Sentences offered to the player, completed when one is chosen."""

    sentences: List[str] = field(default_factory=list)
    _done: Promise = field(default_factory=Promise, repr=False)

    def add(self, sentence: str) -> None:
        """Offer another sentence."""
        self.sentences.append(sentence)

    def abort(self) -> None:
        """Cancel the choice; its future fails with BrokenPromiseError."""
        self._done.break_promise()

    def done(self) -> Future:
        """Return the future completed with the chosen IndexedSentence."""
        return self._done

    def choose(self, index: int) -> IndexedSentence:
        """Select the sentence at ``index`` and complete the choice with it."""
        if not 0 <= index < len(self.sentences):
            raise IndexError(f"no sentence at index {index}")
        chosen = IndexedSentence(index, self.sentences[index])
        self._done.complete_with_value(chosen)
        return chosen