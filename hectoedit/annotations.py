"""Annotations, file types and the document status shown in the status bar."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class AnnotationType(Enum):
    """The kind of highlighting applied to a span of text."""

    MATCH = auto()
    SELECTED_MATCH = auto()
    NUMBER = auto()
    KEYWORD = auto()
    TYPE = auto()
    KNOWN_VALUE = auto()
    CHAR = auto()
    LIFETIME_SPECIFIER = auto()
    COMMENT = auto()
    STRING = auto()


@dataclass
class Annotation:
    """A highlighted byte range [start, end) of a string."""

    annotation_type: AnnotationType
    start: int
    end: int

    def shift(self, offset: int) -> None:
        """Move the annotation right by ``offset`` bytes."""
        self.start += offset
        self.end += offset


class FileType(Enum):
    """The type of file being edited; drives syntax highlighting."""

    RUST = "Rust"
    TEXT = "Text"

    def __str__(self) -> str:
        return self.value


@dataclass
class DocumentStatus:
    """A snapshot of the document's state."""

    total_lines: int = 0
    current_line_idx: int = 0
    is_modified: bool = False
    file_name: str = ""
    file_type: FileType = FileType.TEXT

    def modified_indicator(self) -> str:
        return "(modified)" if self.is_modified else ""

    def line_count(self) -> str:
        return f"{self.total_lines} lines"

    def position_indicator(self) -> str:
        return f"{self.current_line_idx + 1}/{self.total_lines}"

    def file_type_name(self) -> str:
        return str(self.file_type)