"""A single line of text, segmented into grapheme clusters."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum

import regex
from wcwidth import wcwidth

from .annotated_string import AnnotatedString
from .annotations import Annotation

_GRAPHEME = regex.compile(r"\X")
_ELLIPSIS = "⋯"


class GraphemeWidth(IntEnum):
    """How many terminal columns a grapheme occupies."""

    HALF = 1
    FULL = 2


@dataclass(frozen=True)
class TextFragment:
    """One grapheme of a line, with its rendering details and byte offset."""

    grapheme: str
    rendered_width: GraphemeWidth
    replacement: str | None
    start: int

    @property
    def end(self) -> int:
        """Byte offset just past this grapheme."""
        return self.start + len(self.grapheme.encode("utf-8"))


def _str_width(text: str) -> int:
    return sum(max(0, wcwidth(char)) for char in text)


def _replacement_for(grapheme: str) -> str | None:
    if grapheme == " ":
        return None
    if grapheme == "\t":
        return " "
    width = _str_width(grapheme)
    if width > 0 and not grapheme.strip():
        return "␣"
    if width == 0:
        if len(grapheme) == 1 and unicodedata.category(grapheme) == "Cc":
            return "▯"
        return "·"
    return None


def _to_fragments(text: str) -> list[TextFragment]:
    fragments = []
    offset = 0
    for grapheme in _GRAPHEME.findall(text):
        replacement = _replacement_for(grapheme)
        if replacement is not None or _str_width(grapheme) <= 1:
            width = GraphemeWidth.HALF
        else:
            width = GraphemeWidth.FULL
        fragments.append(TextFragment(grapheme, width, replacement, offset))
        offset += len(grapheme.encode("utf-8"))
    return fragments


class Line:
    """Editable text of one line; byte offsets refer to its UTF-8 encoding."""

    def __init__(self, text: str = "") -> None:
        self._set_text(text)

    def _set_text(self, text: str) -> None:
        self._text = text
        self._data = text.encode("utf-8")
        self._fragments = _to_fragments(text)

    def _set_data(self, data: bytes) -> None:
        self._set_text(data.decode("utf-8"))

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Line({self._text!r})"

    def __len__(self) -> int:
        """Length of the line in bytes."""
        return len(self._data)

    def get_visible_graphemes(self, start: int, end: int) -> str:
        """Return the text visible in columns [start, end)."""
        return str(self.get_annotated_visible_substr(start, end))

    def get_annotated_visible_substr(
        self,
        start: int,
        end: int,
        annotations: Iterable[Annotation] | None = None,
    ) -> AnnotatedString:
        """Return the annotated text visible in columns [start, end).

        Graphemes cut by either edge become an ellipsis, and invisible or
        awkward graphemes are shown through their replacement character.
        """
        if start >= end:
            return AnnotatedString()
        result = AnnotatedString(self._text)
        for annotation in annotations or ():
            result.add_annotation(annotation.annotation_type, annotation.start, annotation.end)

        # Walk backwards so byte offsets of earlier fragments stay valid.
        fragment_start = self.width()
        for fragment in reversed(self._fragments):
            fragment_end = fragment_start
            fragment_start = max(0, fragment_start - int(fragment.rendered_width))

            if fragment_start > end:
                continue
            if fragment_start < end < fragment_end:
                result.replace(fragment.start, len(self._data), _ELLIPSIS)
                continue
            if fragment_start == end:
                result.truncate_right_from(fragment.start)
                continue

            if fragment_end <= start:
                result.truncate_left_until(fragment.end)
                break
            if fragment_start < start < fragment_end:
                result.replace(0, fragment.end, _ELLIPSIS)
                break

            if start <= fragment_start and fragment_end <= end and fragment.replacement:
                result.replace(fragment.start, fragment.end, fragment.replacement)
        return result

    def grapheme_count(self) -> int:
        return len(self._fragments)

    def width_until(self, grapheme_idx: int) -> int:
        """Columns taken by the first ``grapheme_idx`` graphemes."""
        return sum(int(fragment.rendered_width) for fragment in self._fragments[:grapheme_idx])

    def width(self) -> int:
        return self.width_until(self.grapheme_count())

    def insert_char(self, character: str, at: int) -> None:
        """Insert before grapheme ``at``, or append when ``at`` is past the end."""
        if at < len(self._fragments):
            offset = self._fragments[at].start
            self._set_data(self._data[:offset] + character.encode("utf-8") + self._data[offset:])
        else:
            self._set_text(self._text + character)

    def append_char(self, character: str) -> None:
        self.insert_char(character, self.grapheme_count())

    def delete(self, at: int) -> None:
        """Delete grapheme ``at``; does nothing when there is none."""
        if 0 <= at < len(self._fragments):
            fragment = self._fragments[at]
            self._set_data(self._data[: fragment.start] + self._data[fragment.end :])

    def delete_last(self) -> None:
        self.delete(max(0, self.grapheme_count() - 1))

    def append(self, other: Line) -> None:
        self._set_text(self._text + str(other))

    def split(self, at: int) -> Line:
        """Cut the line before grapheme ``at`` and return the removed tail."""
        if 0 <= at < len(self._fragments):
            offset = self._fragments[at].start
            remainder = self._data[offset:]
            self._set_data(self._data[:offset])
            return Line(remainder.decode("utf-8"))
        return Line()

    def _byte_idx_to_grapheme_idx(self, byte_idx: int) -> int | None:
        if byte_idx > len(self._data):
            return None
        return next(
            (idx for idx, fragment in enumerate(self._fragments) if fragment.start >= byte_idx),
            None,
        )

    def _grapheme_idx_to_byte_idx(self, grapheme_idx: int) -> int:
        if grapheme_idx == 0 or not self._fragments:
            return 0
        if grapheme_idx >= len(self._fragments):
            raise IndexError(f"Fragment not found for grapheme index: {grapheme_idx}")
        return self._fragments[grapheme_idx].start

    def search_forward(self, query: str, from_grapheme_idx: int) -> int | None:
        """Grapheme index of the first match at or after ``from_grapheme_idx``."""
        if from_grapheme_idx == self.grapheme_count():
            return None
        start = self._grapheme_idx_to_byte_idx(from_grapheme_idx)
        matches = self.find_all(query, start, len(self._data))
        return matches[0][1] if matches else None

    def search_backward(self, query: str, from_grapheme_idx: int) -> int | None:
        """Grapheme index of the last match ending before ``from_grapheme_idx``."""
        if from_grapheme_idx == 0:
            return None
        if from_grapheme_idx == self.grapheme_count():
            end = len(self._data)
        else:
            end = self._grapheme_idx_to_byte_idx(from_grapheme_idx)
        matches = self.find_all(query, 0, end)
        return matches[-1][1] if matches else None

    def find_all(self, query: str, start: int, end: int) -> list[tuple[int, int]]:
        """All (byte index, grapheme index) matches of ``query`` in the byte range.

        Only matches that line up with grapheme boundaries are returned.
        """
        end = min(end, len(self._data))
        if start > end:
            return []
        try:
            substring = self._data[start:end].decode("utf-8")
        except UnicodeDecodeError:
            return []
        potential = [start + offset for offset in self._match_offsets(substring, query)]
        return self._match_grapheme_clusters(potential, query)

    @staticmethod
    def _match_offsets(substring: str, query: str) -> list[int]:
        if not query:
            offsets = []
            offset = 0
            for char in substring:
                offsets.append(offset)
                offset += len(char.encode("utf-8"))
            offsets.append(offset)
            return offsets
        data = substring.encode("utf-8")
        needle = query.encode("utf-8")
        offsets = []
        position = data.find(needle)
        while position != -1:
            offsets.append(position)
            position = data.find(needle, position + len(needle))
        return offsets

    def _match_grapheme_clusters(self, matches: list[int], query: str) -> list[tuple[int, int]]:
        count = len(_GRAPHEME.findall(query))
        result = []
        for byte_idx in matches:
            grapheme_idx = self._byte_idx_to_grapheme_idx(byte_idx)
            if grapheme_idx is None or grapheme_idx + count > len(self._fragments):
                continue
            joined = "".join(
                fragment.grapheme for fragment in self._fragments[grapheme_idx : grapheme_idx + count]
            )
            if joined == query:
                result.append((byte_idx, grapheme_idx))
        return result