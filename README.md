# hectoedit

The core of a small text editor, as a Python library: grapheme-aware
editing of lines, a document buffer that loads, edits, searches and saves
files, translation of key events into editor commands, and syntax
highlighting for Rust source plus highlighting of search matches.

## Installation

```
pip install .
```

## Modules

| Module | What it holds |
| --- | --- |
| `hectoedit.prelude` | `Location` (grapheme and line index), `Position` (column and row), `Size` |
| `hectoedit.annotations` | `AnnotationType`, `Annotation`, `FileType`, `DocumentStatus` |
| `hectoedit.annotated_string` | `AnnotatedString`, text with highlight ranges over its UTF-8 bytes, iterable as `AnnotatedStringPart` runs |
| `hectoedit.commands` | `KeyEvent`, `ResizeEvent`, the edit, move and system commands, and `command_from_event` |
| `hectoedit.line` | `Line`, one line of text split into grapheme clusters |
| `hectoedit.fileinfo` | `FileInfo`, a path and the file type derived from it |
| `hectoedit.rust_syntax` | `RustSyntaxHighlighter` and the word classifiers it uses |
| `hectoedit.highlighter` | `Highlighter`, combining syntax and search-match highlighting |
| `hectoedit.buffer` | `Buffer`, the lines of a document with load, save, edit and search |

## Examples

Editing and searching a line:

```python
from hectoedit.line import Line

line = Line("hello world")
line.insert_char("!", line.grapheme_count())
print(str(line))                        # hello world!
print(line.search_forward("world", 0))  # 6
print(line.get_visible_graphemes(0, 5)) # hello
```

Wide characters take two columns; a grapheme cut at the edge of the
visible range is shown as `⋯`, and tabs and other invisible graphemes are
shown through a replacement character.

Working with a document:

```python
from hectoedit.buffer import Buffer
from hectoedit.prelude import Location

buffer = Buffer.load("notes.txt")
found = buffer.search_forward("todo", Location(grapheme_idx=0, line_idx=0))
buffer.insert_newline(Location(grapheme_idx=0, line_idx=0))
buffer.save_as("notes-copy.txt")
```

Searches wrap around the end (or start) of the document. `save()` writes
to the path the buffer was loaded from or last saved as, and raises
`ValueError` if it has none.

Turning key events into commands:

```python
from hectoedit.commands import KeyCode, KeyEvent, Modifiers, command_from_event

command_from_event(KeyEvent(KeyCode.CHAR, char="a"))                    # Insert(character='a')
command_from_event(KeyEvent(KeyCode.CHAR, Modifiers.CONTROL, char="q")) # Quit()
command_from_event(KeyEvent(KeyCode.HOME))                              # Move.START_OF_LINE
```

Events that map to no command raise `UnsupportedEvent`.

Highlighting:

```python
from hectoedit.annotations import FileType
from hectoedit.highlighter import Highlighter
from hectoedit.line import Line

highlighter = Highlighter("main", None, FileType.RUST)
line = Line("fn main() {}")
highlighter.highlight(0, line)
annotated = line.get_annotated_visible_substr(0, 80, highlighter.get_annotations(0))
for part in annotated:
    print(repr(part.string), part.annotation_type)
```

Lines must be highlighted in order starting at 0, since multi-line
comments and strings carry over from one line to the next.

## What it does not do

This package has no terminal front end: it does not draw a screen, read
keys from a terminal, or provide a command to start an editor. It offers
the document model, command translation and highlighting that such a
front end would be built on.

## Running the tests

```
pip install ".[test]"
pytest
```