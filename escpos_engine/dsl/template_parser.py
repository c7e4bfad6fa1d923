"""
Template text -> ordered list of TemplatePart.

Plain text becomes a TEXT part. A directive is written

    [content](COMMAND,arg1,arg2,...)

where content may be empty. Directives do not nest and there is no escaping
for the four bracket characters.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .commands import Command, TemplatePart, validate
from .errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


class ParseState(Enum):
    NONE = "none"
    CONTENT = "content"
    AFTER_CONTENT = "after-content"
    COMMAND = "command"


# bracket -> (state it is legal in, state it switches to)
TRANSITIONS = {
    "[": (ParseState.NONE, ParseState.CONTENT),
    "]": (ParseState.CONTENT, ParseState.AFTER_CONTENT),
    "(": (ParseState.AFTER_CONTENT, ParseState.COMMAND),
    ")": (ParseState.COMMAND, ParseState.NONE),
}


@dataclass
class PendingPart:
    text: str = ""
    command: str = ""

    def empty(self) -> bool:
        return not self.text and not self.command

    def to_template_part(self) -> TemplatePart:
        name, *args = self.command.split(",")
        command = Command.lookup(name)
        return TemplatePart(command, validate(command, args, self.text), self.text)


@dataclass
class TemplateParser:
    parts: List[TemplatePart] = field(default_factory=list)
    state: ParseState = ParseState.NONE
    position: int = 0
    _current: PendingPart = field(default_factory=PendingPart)

    def _next(self) -> None:
        if self.state is not ParseState.NONE:
            raise RuntimeError(f"flush while in {self.state.value} state")
        if self._current.empty():
            return
        self.parts.append(self._current.to_template_part())
        self._current = PendingPart()

    def feed(self, char: str) -> None:
        if char in TRANSITIONS:
            legal, target = TRANSITIONS[char]
            if self.state is not legal:
                raise TemplateSyntaxError(
                    f"unexpected {char!r} in {self.state.value} state",
                    self.position, char, self.state.value,
                )
            if char == "[":
                self._next()
            self.state = target
            if char == ")":
                self._next()
        elif self.state in (ParseState.NONE, ParseState.CONTENT):
            self._current.text += char
        elif self.state is ParseState.COMMAND:
            self._current.command += char
        else:
            raise TemplateSyntaxError(
                "expected '(' after ']'", self.position, char, self.state.value
            )
        self.position += 1

    def finish(self) -> List[TemplatePart]:
        if self.state is not ParseState.NONE:
            raise TemplateSyntaxError("unterminated directive", self.position, None, self.state.value)
        self._next()
        return self.parts


def parse_template(text: str) -> List[TemplatePart]:
    parser = TemplateParser()
    for char in text:
        parser.feed(char)
    parts = parser.finish()
    logger.debug("parsed %d instruction(s) from %d characters", len(parts), len(text))
    return parts
