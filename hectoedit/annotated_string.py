"""A string carrying highlighting annotations over byte ranges."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .annotations import Annotation, AnnotationType


@dataclass(frozen=True)
class AnnotatedStringPart:
    """A run of text sharing one annotation type (or none)."""

    string: str
    annotation_type: AnnotationType | None


class AnnotatedString:
    """Text plus annotations; offsets are bytes of the UTF-8 encoding."""

    def __init__(self, string: str = "") -> None:
        self._data = string.encode("utf-8")
        self.annotations: list[Annotation] = []

    def add_annotation(self, annotation_type: AnnotationType, start: int, end: int) -> None:
        self.annotations.append(Annotation(annotation_type, start, end))

    def truncate_left_until(self, until: int) -> None:
        self.replace(0, until, "")

    def truncate_right_from(self, start: int) -> None:
        self.replace(start, len(self._data), "")

    def replace(self, start: int, end: int, new_string: str) -> None:
        """Replace the byte range [start, end) and adjust annotations."""
        end = min(end, len(self._data))
        if start > end:
            return
        replacement = new_string.encode("utf-8")
        self._data = self._data[:start] + replacement + self._data[end:]

        replaced_len = end - start
        shortened = len(replacement) < replaced_len
        difference = abs(len(replacement) - replaced_len)
        if difference == 0:
            return

        def adjust(idx: int) -> int:
            if idx >= end:
                return max(0, idx - difference) if shortened else idx + difference
            if idx >= start:
                if shortened:
                    return max(start, idx - difference)
                return min(end, idx + difference)
            return idx

        for annotation in self.annotations:
            annotation.start = adjust(annotation.start)
            annotation.end = adjust(annotation.end)

        length = len(self._data)
        self.annotations = [
            a for a in self.annotations if a.start < a.end and a.start < length
        ]

    def _slice(self, start: int, end: int) -> str:
        return self._data[start:end].decode("utf-8", errors="replace")

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"AnnotatedString({str(self)!r}, annotations={self.annotations!r})"

    def __iter__(self) -> Iterator[AnnotatedStringPart]:
        length = len(self._data)
        current = 0
        while current < length:
            active = [a for a in self.annotations if a.start <= current < a.end]
            if active:
                annotation = active[-1]
                end = min(annotation.end, length)
                yield AnnotatedStringPart(self._slice(current, end), annotation.annotation_type)
                current = end
                continue
            end = min(
                (a.start for a in self.annotations if current < a.start < length),
                default=length,
            )
            yield AnnotatedStringPart(self._slice(current, end), None)
            current = end