"""The path of the file being edited and its derived file type."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from .annotations import FileType


class FileInfo:
    """Where a document lives on disk, if anywhere, and what kind it is."""

    def __init__(self, path: str | PathLike[str] | None = None) -> None:
        if path is None:
            self.path: Path | None = None
            self.file_type = FileType.TEXT
            return
        self.path = Path(path)
        suffix = self.path.suffix
        self.file_type = FileType.RUST if suffix.lower() == ".rs" else FileType.TEXT

    def has_path(self) -> bool:
        return self.path is not None

    def __str__(self) -> str:
        if self.path is None or self.path.name in ("", ".."):
            return "[No Name]"
        return self.path.name

    def __repr__(self) -> str:
        return f"FileInfo(path={self.path!r}, file_type={self.file_type!r})"