"""Input events and the editor commands they translate into."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Union

from .prelude import Size


class KeyCode(Enum):
    CHAR = auto()
    TAB = auto()
    ENTER = auto()
    BACKSPACE = auto()
    DELETE = auto()
    ESC = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    HOME = auto()
    END = auto()
    INSERT = auto()
    OTHER = auto()


class Modifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press; ``char`` is set when ``code`` is ``KeyCode.CHAR``."""

    code: KeyCode
    modifiers: Modifiers = Modifiers.NONE
    char: str | None = None
    pressed: bool = True


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


class UnsupportedEvent(ValueError):
    """Raised when an event does not map to any command."""


@dataclass(frozen=True)
class Insert:
    character: str


@dataclass(frozen=True)
class InsertNewline:
    pass


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class DeleteBackward:
    pass


class Move(Enum):
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    START_OF_LINE = auto()
    END_OF_LINE = auto()
    UP = auto()
    LEFT = auto()
    RIGHT = auto()
    DOWN = auto()


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Dismiss:
    pass


@dataclass(frozen=True)
class Search:
    pass


@dataclass(frozen=True)
class Resize:
    size: Size


EditCommand = Union[Insert, InsertNewline, Delete, DeleteBackward]
SystemCommand = Union[Save, Quit, Dismiss, Search, Resize]
Command = Union[EditCommand, Move, SystemCommand]


def _unsupported(event: KeyEvent) -> UnsupportedEvent:
    return UnsupportedEvent(
        f"Unsupported key code {event.code!r} with modifiers {event.modifiers!r}"
    )


def edit_from_key(event: KeyEvent) -> EditCommand:
    """Translate a key event into an edit command."""
    code, modifiers = event.code, event.modifiers
    if code is KeyCode.CHAR and modifiers in (Modifiers.NONE, Modifiers.SHIFT):
        if event.char is None:
            raise _unsupported(event)
        return Insert(event.char)
    if modifiers == Modifiers.NONE:
        if code is KeyCode.TAB:
            return Insert("\t")
        if code is KeyCode.ENTER:
            return InsertNewline()
        if code is KeyCode.BACKSPACE:
            return DeleteBackward()
        if code is KeyCode.DELETE:
            return Delete()
    raise _unsupported(event)


_MOVES = {
    KeyCode.UP: Move.UP,
    KeyCode.DOWN: Move.DOWN,
    KeyCode.LEFT: Move.LEFT,
    KeyCode.RIGHT: Move.RIGHT,
    KeyCode.PAGE_DOWN: Move.PAGE_DOWN,
    KeyCode.PAGE_UP: Move.PAGE_UP,
    KeyCode.HOME: Move.START_OF_LINE,
    KeyCode.END: Move.END_OF_LINE,
}


def move_from_key(event: KeyEvent) -> Move:
    """Translate a key event into a movement command."""
    if event.modifiers != Modifiers.NONE or event.code not in _MOVES:
        raise _unsupported(event)
    return _MOVES[event.code]


_CONTROL_KEYS = {"q": Quit, "s": Save, "f": Search}


def system_from_key(event: KeyEvent) -> SystemCommand:
    """Translate a key event into a system command."""
    if event.modifiers == Modifiers.CONTROL:
        if event.code is KeyCode.CHAR and event.char in _CONTROL_KEYS:
            return _CONTROL_KEYS[event.char]()
        raise UnsupportedEvent(f"Unsupported CONTROL+{event.char or event.code!r} combination")
    if event.modifiers == Modifiers.NONE and event.code is KeyCode.ESC:
        return Dismiss()
    raise _unsupported(event)


def command_from_event(event: object) -> Command:
    """Translate any input event into a command, or raise UnsupportedEvent."""
    if isinstance(event, KeyEvent):
        for convert in (edit_from_key, move_from_key, system_from_key):
            try:
                return convert(event)
            except UnsupportedEvent:
                continue
        raise UnsupportedEvent(f"Event not supported: {event!r}")
    if isinstance(event, ResizeEvent):
        return Resize(Size(height=event.height, width=event.width))
    raise UnsupportedEvent(f"Event not supported: {event!r}")