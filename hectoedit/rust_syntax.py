"""Line-by-line syntax highlighting for Rust source code."""

from __future__ import annotations

import unicodedata
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum, auto

from .annotations import Annotation, AnnotationType
from .line import Line

KEYWORDS = frozenset(
    {
        "break", "const", "continue", "crate", "else", "enum", "extern", "false",
        "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod", "move",
        "mut", "pub", "ref", "return", "self", "Self", "static", "struct", "super",
        "trait", "true", "type", "unsafe", "use", "where", "while", "async",
        "await", "dyn", "abstract", "become", "box", "do", "final", "macro",
        "override", "priv", "typeof", "unsized", "virtual", "yield", "try",
        "macro_rules", "union",
    }
)
TYPES = frozenset(
    {
        "i8", "i16", "i32", "i64", "i128", "isize", "u8", "u16", "u32", "u64",
        "u128", "usize", "f32", "f64", "bool", "char", "Option", "Result",
        "String", "str", "Vec", "HashMap",
    }
)
KNOWN_VALUES = frozenset({"Some", "None", "true", "false", "Ok", "Err"})

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class SyntaxHighlighter(ABC):
    """Collects annotations for lines, highlighted in order."""

    @abstractmethod
    def highlight(self, idx: int, line: Line) -> None:
        """Compute the annotations of line ``idx``."""

    @abstractmethod
    def get_annotations(self, idx: int) -> list[Annotation] | None:
        """Annotations of line ``idx``, or None if it was not highlighted."""


# --- word segmentation -----------------------------------------------------


class _Kind(Enum):
    LETTER = auto()
    NUMERIC = auto()
    EXTEND_NUM_LET = auto()
    MID_LETTER = auto()
    MID_NUM = auto()
    MID_NUM_LET = auto()
    EXTEND = auto()
    WSEG_SPACE = auto()
    CR = auto()
    LF = auto()
    OTHER = auto()


_MID_LETTER = frozenset(":\u00b7\u0387\u05f4\u2027\ufe13\ufe55\uff1a")
_MID_NUM = frozenset(",;\u037e\u0589\u060c\u060d\u066c\u07f8\u2044\ufe10\ufe14\ufe50\ufe54\uff0c\uff1b")
_MID_NUM_LET = frozenset(".'\u2018\u2019\u2024\ufe52\uff07\uff0e")
_NOT_WSEG = frozenset("\u00a0\u2007\u202f")

_WORD_KINDS = frozenset({_Kind.LETTER, _Kind.NUMERIC, _Kind.EXTEND_NUM_LET})
_JOINERS = {
    _Kind.LETTER: frozenset({_Kind.MID_LETTER, _Kind.MID_NUM_LET}),
    _Kind.NUMERIC: frozenset({_Kind.MID_NUM, _Kind.MID_NUM_LET}),
}


def _kind(char: str) -> _Kind:
    if char == "\r":
        return _Kind.CR
    if char == "\n":
        return _Kind.LF
    if char in _MID_NUM_LET:
        return _Kind.MID_NUM_LET
    if char in _MID_LETTER:
        return _Kind.MID_LETTER
    if char in _MID_NUM:
        return _Kind.MID_NUM
    category = unicodedata.category(char)
    if category in ("Mn", "Me", "Mc", "Cf"):
        return _Kind.EXTEND
    if category == "Nd":
        return _Kind.NUMERIC
    if char.isalpha():
        return _Kind.LETTER
    if category == "Pc":
        return _Kind.EXTEND_NUM_LET
    if category == "Zs" and char not in _NOT_WSEG:
        return _Kind.WSEG_SPACE
    return _Kind.OTHER


def _skip_extend(kinds: list[_Kind], i: int) -> int:
    while i < len(kinds) and kinds[i] is _Kind.EXTEND:
        i += 1
    return i


def _extend_word(kinds: list[_Kind], i: int, prev: _Kind) -> int:
    while i < len(kinds):
        kind = kinds[i]
        if kind is _Kind.EXTEND:
            i += 1
            continue
        if kind in _WORD_KINDS:
            prev = kind
            i += 1
            continue
        if kind in _JOINERS.get(prev, ()):
            after = _skip_extend(kinds, i + 1)
            if after < len(kinds) and kinds[after] is prev:
                i = after
                continue
        break
    return i


def split_word_bound_indices(text: str) -> list[tuple[int, str]]:
    """Split ``text`` at word boundaries into (byte offset, segment) pairs.

    Letters, digits and connectors form words; apostrophes, dots and
    similar marks join letters or digits on both sides; runs of spaces
    stay together; every other character is a segment of its own.
    """
    chars = list(text)
    kinds = [_kind(char) for char in chars]
    segments: list[tuple[int, str]] = []
    offset = 0
    i = 0
    while i < len(chars):
        start = i
        kind = kinds[i]
        i += 1
        if kind is _Kind.CR:
            if i < len(chars) and kinds[i] is _Kind.LF:
                i += 1
        elif kind is _Kind.LF:
            pass
        elif kind in _WORD_KINDS:
            i = _extend_word(kinds, i, kind)
        else:
            if kind is _Kind.WSEG_SPACE:
                while i < len(chars) and kinds[i] is _Kind.WSEG_SPACE:
                    i += 1
            i = _skip_extend(kinds, i)
        segment = "".join(chars[start:i])
        segments.append((offset, segment))
        offset += len(segment.encode("utf-8"))
    return segments


def _char_indices(text: str) -> list[tuple[int, str]]:
    result = []
    offset = 0
    for char in text:
        result.append((offset, char))
        offset += len(char.encode("utf-8"))
    return result


# --- word classification ---------------------------------------------------


def is_numeric_literal(word: str) -> bool:
    """True for prefixed integer literals such as 0x1F, 0b101 or 0o17."""
    if len(word) < 3 or word[0] != "0":
        return False
    base = {"b": 2, "o": 8, "x": 16}.get(word[1].lower())
    if base is None:
        return False
    allowed = _DIGITS[:base]
    return all(char.lower() in allowed for char in word[2:])


def is_valid_number(word: str) -> bool:
    """True for decimal numbers with optional underscores, fraction and exponent."""
    if not word:
        return False
    if is_numeric_literal(word):
        return True
    if word[0] not in _DIGITS[:10]:
        return False
    seen_dot = False
    seen_e = False
    prev_was_digit = True
    for char in word[1:]:
        if char in _DIGITS[:10]:
            prev_was_digit = True
        elif char == "_":
            if not prev_was_digit:
                return False
            prev_was_digit = False
        elif char == ".":
            if seen_dot or seen_e or not prev_was_digit:
                return False
            seen_dot = True
            prev_was_digit = False
        elif char in "eE":
            if seen_e or not prev_was_digit:
                return False
            seen_e = True
            prev_was_digit = False
        else:
            return False
    return prev_was_digit


def is_keyword(word: str) -> bool:
    return word in KEYWORDS


def is_type(word: str) -> bool:
    return word in TYPES


def is_known_value(word: str) -> bool:
    return word in KNOWN_VALUES


# --- annotators for the start of a string ----------------------------------


def _annotate_next_word(
    string: str, annotation_type: AnnotationType, validator: Callable[[str], bool]
) -> Annotation | None:
    words = split_word_bound_indices(string)
    if words and validator(words[0][1]):
        return Annotation(annotation_type, 0, len(words[0][1].encode("utf-8")))
    return None


def _annotate_number(string: str) -> Annotation | None:
    return _annotate_next_word(string, AnnotationType.NUMBER, is_valid_number)


def _annotate_type(string: str) -> Annotation | None:
    return _annotate_next_word(string, AnnotationType.TYPE, is_type)


def _annotate_keyword(string: str) -> Annotation | None:
    return _annotate_next_word(string, AnnotationType.KEYWORD, is_keyword)


def _annotate_known_value(string: str) -> Annotation | None:
    return _annotate_next_word(string, AnnotationType.KNOWN_VALUE, is_known_value)


def annotate_char(string: str) -> Annotation | None:
    """Annotate a character literal such as 'a' or '\\n' at the start of ``string``."""
    words = split_word_bound_indices(string)
    if not words or words[0][1] != "'":
        return None
    pos = 1
    if pos < len(words) and words[pos][1] == "\\":
        pos += 1
    pos += 1
    if pos < len(words) and words[pos][1] == "'":
        return Annotation(AnnotationType.CHAR, 0, words[pos][0] + 1)
    return None


def annotate_lifetime_specifier(string: str) -> Annotation | None:
    """Annotate a lifetime such as 'a at the start of ``string``."""
    words = split_word_bound_indices(string)
    if len(words) >= 2 and words[0][1] == "'":
        idx, word = words[1]
        return Annotation(AnnotationType.LIFETIME_SPECIFIER, 0, idx + len(word.encode("utf-8")))
    return None


def annotate_single_line_comment(string: str) -> Annotation | None:
    """Annotate the whole string if it starts with //."""
    if string.startswith("//"):
        return Annotation(AnnotationType.COMMENT, 0, len(string.encode("utf-8")))
    return None


class RustSyntaxHighlighter(SyntaxHighlighter):
    """Highlights Rust code, tracking comments and strings across lines."""

    def __init__(self) -> None:
        self._highlights: list[list[Annotation]] = []
        self._ml_comment_balance = 0
        self._in_ml_string = False

    def _annotate_ml_comment(self, string: str) -> Annotation | None:
        chars = _char_indices(string)
        pos = 0
        while pos < len(chars):
            char = chars[pos][1]
            pos += 1
            peek = chars[pos] if pos < len(chars) else None
            if char == "/":
                if peek is not None and peek[1] == "*":
                    self._ml_comment_balance += 1
                    pos += 1
            elif self._ml_comment_balance == 0:
                return None
            elif char == "*" and peek is not None and peek[1] == "/":
                self._ml_comment_balance = max(0, self._ml_comment_balance - 1)
                if self._ml_comment_balance == 0:
                    return Annotation(AnnotationType.COMMENT, 0, peek[0] + 1)
                pos += 1
        if self._ml_comment_balance > 0:
            return Annotation(AnnotationType.COMMENT, 0, len(string.encode("utf-8")))
        return None

    def _annotate_string(self, string: str) -> Annotation | None:
        chars = iter(_char_indices(string))
        for idx, char in chars:
            if char == "\\" and self._in_ml_string:
                next(chars, None)
                continue
            if char == '"':
                if self._in_ml_string:
                    self._in_ml_string = False
                    return Annotation(AnnotationType.STRING, 0, idx + 1)
                self._in_ml_string = True
            if not self._in_ml_string:
                return None
        if self._in_ml_string:
            return Annotation(AnnotationType.STRING, 0, len(string.encode("utf-8")))
        return None

    def _initial_annotation(self, text: str) -> Annotation | None:
        if self._in_ml_string:
            return self._annotate_string(text)
        if self._ml_comment_balance > 0:
            return self._annotate_ml_comment(text)
        return None

    def _annotate_remainder(self, remainder: str) -> Annotation | None:
        return (
            self._annotate_ml_comment(remainder)
            or self._annotate_string(remainder)
            or annotate_single_line_comment(remainder)
            or annotate_char(remainder)
            or annotate_lifetime_specifier(remainder)
            or _annotate_number(remainder)
            or _annotate_keyword(remainder)
            or _annotate_type(remainder)
            or _annotate_known_value(remainder)
        )

    def highlight(self, idx: int, line: Line) -> None:
        if idx != len(self._highlights):
            raise ValueError(
                f"lines must be highlighted in order: expected {len(self._highlights)}, got {idx}"
            )
        text = str(line)
        data = text.encode("utf-8")
        words = split_word_bound_indices(text)
        result: list[Annotation] = []
        pos = 0

        def skip_annotated(pos: int, end: int) -> int:
            while pos < len(words) and words[pos][0] < end:
                pos += 1
            return pos

        annotation = self._initial_annotation(text)
        if annotation is not None:
            result.append(annotation)
            pos = skip_annotated(pos, annotation.end)
        while pos < len(words):
            start_idx = words[pos][0]
            pos += 1
            annotation = self._annotate_remainder(data[start_idx:].decode("utf-8"))
            if annotation is not None:
                annotation.shift(start_idx)
                result.append(annotation)
                pos = skip_annotated(pos, annotation.end)
        self._highlights.append(result)

    def get_annotations(self, idx: int) -> list[Annotation] | None:
        if 0 <= idx < len(self._highlights):
            return self._highlights[idx]
        return None