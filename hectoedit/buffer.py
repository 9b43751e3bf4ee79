"""The lines of a document, with loading, saving, editing and searching."""

from __future__ import annotations

from itertools import cycle, islice
from os import PathLike

from .annotated_string import AnnotatedString
from .fileinfo import FileInfo
from .highlighter import Highlighter
from .line import Line
from .prelude import Location


def _split_lines(contents: str) -> list[str]:
    """Split file contents into lines; a final line ending is optional."""
    *terminated, last = contents.split("\n")
    lines = [text.removesuffix("\r") for text in terminated]
    if last:
        lines.append(last)
    return lines


class Buffer:
    """An editable document: a list of lines plus where it lives on disk."""

    def __init__(
        self,
        lines: list[Line] | None = None,
        file_info: FileInfo | None = None,
    ) -> None:
        self.lines: list[Line] = list(lines) if lines is not None else []
        self.file_info = file_info if file_info is not None else FileInfo()
        self.dirty = False

    @classmethod
    def load(cls, file_name: str | PathLike[str]) -> Buffer:
        """Read a UTF-8 file into a new, unmodified buffer."""
        with open(file_name, encoding="utf-8", newline="") as handle:
            contents = handle.read()
        return cls([Line(text) for text in _split_lines(contents)], FileInfo(file_name))

    def __len__(self) -> int:
        """Number of lines in the document."""
        return len(self.lines)

    def __repr__(self) -> str:
        return f"Buffer(lines={self.lines!r}, file_info={self.file_info!r}, dirty={self.dirty})"

    def _line(self, idx: int) -> Line | None:
        if 0 <= idx < len(self.lines):
            return self.lines[idx]
        return None

    def grapheme_count(self, idx: int) -> int:
        line = self._line(idx)
        return line.grapheme_count() if line is not None else 0

    def width_until(self, idx: int, until: int) -> int:
        line = self._line(idx)
        return line.width_until(until) if line is not None else 0

    def get_highlighted_substring(
        self, line_idx: int, start: int, end: int, highlighter: Highlighter
    ) -> AnnotatedString | None:
        """The annotated text of a line in columns [start, end), or None past the end."""
        line = self._line(line_idx)
        if line is None:
            return None
        return line.get_annotated_visible_substr(
            start, end, highlighter.get_annotations(line_idx)
        )

    def highlight(self, idx: int, highlighter: Highlighter) -> None:
        line = self._line(idx)
        if line is not None:
            highlighter.highlight(idx, line)

    def search_forward(self, query: str, from_location: Location) -> Location | None:
        """Find the next match at or after ``from_location``, wrapping around."""
        if not query or not self.lines:
            return None
        count = len(self.lines)
        start = from_location.line_idx % count
        # One extra line: the starting line is searched again from its beginning.
        candidates = islice(cycle(enumerate(self.lines)), start, start + count + 1)
        for step, (line_idx, line) in enumerate(candidates):
            if step == 0:
                from_grapheme = min(from_location.grapheme_idx, line.grapheme_count())
            else:
                from_grapheme = 0
            found = line.search_forward(query, from_grapheme)
            if found is not None:
                return Location(grapheme_idx=found, line_idx=line_idx)
        return None

    def search_backward(self, query: str, from_location: Location) -> Location | None:
        """Find the previous match before ``from_location``, wrapping around."""
        if not query or not self.lines:
            return None
        count = len(self.lines)
        skip = max(0, count - from_location.line_idx - 1)
        reversed_lines = list(enumerate(self.lines))[::-1]
        candidates = islice(cycle(reversed_lines), skip, skip + count + 1)
        for step, (line_idx, line) in enumerate(candidates):
            if step == 0:
                from_grapheme = min(from_location.grapheme_idx, line.grapheme_count())
            else:
                from_grapheme = line.grapheme_count()
            found = line.search_backward(query, from_grapheme)
            if found is not None:
                return Location(grapheme_idx=found, line_idx=line_idx)
        return None

    def _save_to_file(self, file_info: FileInfo) -> None:
        if file_info.path is None:
            raise ValueError("cannot save a buffer that has no file path")
        with open(file_info.path, "w", encoding="utf-8", newline="") as handle:
            handle.writelines(f"{line}\n" for line in self.lines)

    def save_as(self, file_name: str | PathLike[str]) -> None:
        """Write the document to ``file_name`` and remember it as its path."""
        file_info = FileInfo(file_name)
        self._save_to_file(file_info)
        self.file_info = file_info
        self.dirty = False

    def save(self) -> None:
        """Write the document to its current path."""
        self._save_to_file(self.file_info)
        self.dirty = False

    def is_file_loaded(self) -> bool:
        return self.file_info.has_path()

    def insert_char(self, character: str, at: Location) -> None:
        """Insert a character; at one past the last line it starts a new line."""
        if at.line_idx == len(self.lines):
            self.lines.append(Line(character))
            self.dirty = True
        elif 0 <= at.line_idx < len(self.lines):
            self.lines[at.line_idx].insert_char(character, at.grapheme_idx)
            self.dirty = True

    def delete(self, at: Location) -> None:
        """Delete the grapheme at ``at``, or join the next line when at line end."""
        line = self._line(at.line_idx)
        if line is None:
            return
        count = line.grapheme_count()
        if at.grapheme_idx >= count and len(self.lines) > at.line_idx + 1:
            next_line = self.lines.pop(at.line_idx + 1)
            line.append(next_line)
            self.dirty = True
        elif at.grapheme_idx < count:
            line.delete(at.grapheme_idx)
            self.dirty = True

    def insert_newline(self, at: Location) -> None:
        """Split the line at ``at``; past the last line, add an empty line."""
        if at.line_idx == len(self.lines):
            self.lines.append(Line())
            self.dirty = True
        elif 0 <= at.line_idx < len(self.lines):
            remainder = self.lines[at.line_idx].split(at.grapheme_idx)
            self.lines.insert(at.line_idx + 1, remainder)
            self.dirty = True