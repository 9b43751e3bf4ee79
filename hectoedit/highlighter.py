"""Combines syntax highlighting with search result highlighting."""

from __future__ import annotations

from dataclasses import replace

from .annotations import Annotation, AnnotationType, FileType
from .line import Line
from .prelude import Location
from .rust_syntax import RustSyntaxHighlighter, SyntaxHighlighter


class SearchResultHighlighter(SyntaxHighlighter):
    """Marks every occurrence of a search term, and the selected match."""

    def __init__(self, matched_word: str, selected_match: Location | None = None) -> None:
        self.matched_word = matched_word
        self.selected_match = selected_match
        self._highlights: dict[int, list[Annotation]] = {}

    def _matched_words(self, line: Line) -> list[Annotation]:
        if not self.matched_word:
            return []
        length = len(self.matched_word.encode("utf-8"))
        return [
            Annotation(AnnotationType.MATCH, start, start + length)
            for start, _ in line.find_all(self.matched_word, 0, len(line))
        ]

    def _selected(self, idx: int) -> list[Annotation]:
        selected = self.selected_match
        if selected is None or selected.line_idx != idx or not self.matched_word:
            return []
        start = selected.grapheme_idx
        end = start + len(self.matched_word.encode("utf-8"))
        return [Annotation(AnnotationType.SELECTED_MATCH, start, end)]

    def highlight(self, idx: int, line: Line) -> None:
        self._highlights[idx] = self._matched_words(line) + self._selected(idx)

    def get_annotations(self, idx: int) -> list[Annotation] | None:
        return self._highlights.get(idx)


def create_syntax_highlighter(file_type: FileType) -> SyntaxHighlighter | None:
    """The syntax highlighter for ``file_type``, or None for plain text."""
    if file_type is FileType.RUST:
        return RustSyntaxHighlighter()
    return None


class Highlighter:
    """Runs the syntax and search highlighters over lines, in order."""

    def __init__(
        self,
        matched_word: str | None = None,
        selected_match: Location | None = None,
        file_type: FileType = FileType.TEXT,
    ) -> None:
        self._syntax = create_syntax_highlighter(file_type)
        self._search = (
            SearchResultHighlighter(matched_word, selected_match)
            if matched_word is not None
            else None
        )

    def _highlighters(self) -> list[SyntaxHighlighter]:
        return [h for h in (self._syntax, self._search) if h is not None]

    def get_annotations(self, idx: int) -> list[Annotation]:
        """Copies of all annotations for line ``idx``, syntax first."""
        return [
            replace(annotation)
            for highlighter in self._highlighters()
            for annotation in highlighter.get_annotations(idx) or ()
        ]

    def highlight(self, idx: int, line: Line) -> None:
        for highlighter in self._highlighters():
            highlighter.highlight(idx, line)